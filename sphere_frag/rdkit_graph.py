"""
RDKit-backed implementation of the molecule graph capability.
"""

from typing import Iterator, List, Optional, Tuple

from rdkit import Chem

from .errors import GraphError, PreconditionError
from .graph import Atom, Bond, MoleculeGraph

# Ring membership copied onto reconstructed bonds; RDKit can not set IsInRing directly.
RING_PROP = "fragInRing"

_ORDER_TO_TYPE = {
    0.0: Chem.BondType.ZERO,
    1.0: Chem.BondType.SINGLE,
    1.5: Chem.BondType.AROMATIC,
    2.0: Chem.BondType.DOUBLE,
    3.0: Chem.BondType.TRIPLE,
    4.0: Chem.BondType.QUADRUPLE,
}


class RDKitGraph(MoleculeGraph):
    """
    Molecule graph over an editable RDKit molecule.

    Args:
        mol: Molecule to wrap. It is copied into an ``RWMol``; the caller's
            object is never modified. ``None`` gives an empty graph.
    """

    def __init__(self, mol: Optional[Chem.Mol] = None):
        self._mol = Chem.RWMol(mol) if mol is not None else Chem.RWMol()
        self._rings_perceived = False

    @classmethod
    def from_smiles(cls, smiles: str) -> "RDKitGraph":
        """Parse a SMILES string; raises PreconditionError when RDKit rejects it."""
        mol = Chem.MolFromSmiles(smiles) if smiles else None
        if mol is None:
            raise PreconditionError("INVALID_SMILES", f"could not parse SMILES: {smiles!r}")
        return cls(mol)

    @property
    def mol(self) -> Chem.RWMol:
        return self._mol

    def to_mol(self) -> Chem.Mol:
        """
        Return a read-only copy ready for SMILES output or drawing.

        Fragments cut out of aromatic systems usually fail sanitization, so the
        property cache is updated non-strictly and rings are perceived without SSSR.
        """
        mol = self._mol.GetMol()
        mol.UpdatePropertyCache(strict=False)
        Chem.FastFindRings(mol)
        return mol

    # ---------------- queries ---------------------------------------------
    def atom_count(self) -> int:
        return self._mol.GetNumAtoms()

    def bond_count(self) -> int:
        return self._mol.GetNumBonds()

    def atom_at(self, index: int) -> Atom:
        if not 0 <= index < self._mol.GetNumAtoms():
            raise IndexError(f"atom index {index} out of range (0..{self._mol.GetNumAtoms() - 1})")
        rd_atom = self._mol.GetAtomWithIdx(index)
        if rd_atom.GetAtomicNum() == 0:
            label = rd_atom.GetProp("dummyLabel") if rd_atom.HasProp("dummyLabel") else "*"
            return Atom(label, index=index, is_placeholder=True)
        return Atom(
            rd_atom.GetSymbol(),
            index=index,
            charge=rd_atom.GetFormalCharge(),
            aromatic=rd_atom.GetIsAromatic(),
            explicit_hs=rd_atom.GetNumExplicitHs(),
        )

    def neighbors_of(self, index: int) -> List[int]:
        return [nbr.GetIdx() for nbr in self._mol.GetAtomWithIdx(index).GetNeighbors()]

    def has_bond(self, i: int, j: int) -> bool:
        return self._mol.GetBondBetweenAtoms(i, j) is not None

    def bond_between(self, i: int, j: int) -> Optional[Bond]:
        rd_bond = self._mol.GetBondBetweenAtoms(i, j)
        if rd_bond is None:
            return None
        return self._to_bond(rd_bond)

    def bonds(self) -> Iterator[Tuple[int, int, Bond]]:
        for rd_bond in self._mol.GetBonds():
            i, j = sorted((rd_bond.GetBeginAtomIdx(), rd_bond.GetEndAtomIdx()))
            yield i, j, self._to_bond(rd_bond)

    # ---------------- mutators --------------------------------------------
    def add_atom(self, atom: Atom) -> int:
        if atom.is_placeholder:
            rd_atom = Chem.Atom(0)
            rd_atom.SetProp("dummyLabel", atom.symbol)
            rd_atom.SetNoImplicit(True)
        else:
            try:
                rd_atom = Chem.Atom(atom.symbol)
            except RuntimeError as exc:
                raise GraphError("UNKNOWN_ELEMENT", f"RDKit does not know element {atom.symbol!r}") from exc
            rd_atom.SetFormalCharge(atom.charge)
            rd_atom.SetIsAromatic(atom.aromatic)
            rd_atom.SetNumExplicitHs(atom.explicit_hs)
        self._rings_perceived = False
        return self._mol.AddAtom(rd_atom)

    def add_bond(self, i: int, j: int, bond: Bond) -> None:
        if i == j:
            raise GraphError("SELF_LOOP", f"cannot bond atom {i} to itself")
        for idx in (i, j):
            if not 0 <= idx < self._mol.GetNumAtoms():
                raise GraphError("UNKNOWN_ATOM", f"bond endpoint {idx} is not an atom of this graph")
        if self.has_bond(i, j):
            raise GraphError("DUPLICATE_BOND", f"atoms {i} and {j} are already bonded")
        bond_type = _ORDER_TO_TYPE.get(float(bond.order))
        if bond_type is None:
            raise GraphError("UNKNOWN_BOND_ORDER", f"no RDKit bond type for order {bond.order}")

        self._mol.AddBond(i, j, bond_type)
        rd_bond = self._mol.GetBondBetweenAtoms(i, j)
        rd_bond.SetIsAromatic(bond.aromatic)
        rd_bond.SetBoolProp(RING_PROP, bond.in_ring)
        self._rings_perceived = False

    def empty(self) -> "RDKitGraph":
        return RDKitGraph()

    # ---------------- internals -------------------------------------------
    def _to_bond(self, rd_bond: Chem.Bond) -> Bond:
        if rd_bond.HasProp(RING_PROP):
            in_ring = rd_bond.GetBoolProp(RING_PROP)
        else:
            if not self._rings_perceived:
                Chem.FastFindRings(self._mol)
                self._rings_perceived = True
            in_ring = rd_bond.IsInRing()
        return Bond(
            order=rd_bond.GetBondTypeAsDouble(),
            in_ring=in_ring,
            aromatic=rd_bond.GetIsAromatic(),
        )

    def __repr__(self) -> str:
        return f"RDKitGraph({Chem.MolToSmiles(self.to_mol())!r})"
