"""
Molecule graph capability used by the fragmentation code.

The fragmentation engine only needs neighbour iteration, bond lookup and two
mutators, so it talks to :class:`MoleculeGraph` rather than to a concrete
toolkit type. :class:`MolGraph` is a small in-memory implementation;
:mod:`sphere_frag.rdkit_graph` wraps an RDKit molecule.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import GraphError


@dataclass
class Atom:
    """An atom as seen by the fragmentation code."""
    symbol: str
    index: int = -1
    charge: int = 0
    aromatic: bool = False
    is_placeholder: bool = False
    explicit_hs: int = 0


@dataclass(frozen=True)
class Bond:
    """
    Bond attributes copied between graphs.

    ``order`` follows RDKit's numeric convention: 1.0 single, 1.5 aromatic,
    2.0 double, 3.0 triple.
    """
    order: float = 1.0
    in_ring: bool = False
    aromatic: bool = False


class MoleculeGraph(abc.ABC):
    """Abstract molecule graph with integer atom indices starting at 0."""

    @abc.abstractmethod
    def atom_count(self) -> int:
        ...

    @abc.abstractmethod
    def bond_count(self) -> int:
        ...

    @abc.abstractmethod
    def atom_at(self, index: int) -> Atom:
        """Return the atom stored at ``index``; raises IndexError when out of range."""

    @abc.abstractmethod
    def neighbors_of(self, index: int) -> List[int]:
        ...

    @abc.abstractmethod
    def bond_between(self, i: int, j: int) -> Optional[Bond]:
        ...

    @abc.abstractmethod
    def add_atom(self, atom: Atom) -> int:
        """Append a copy of ``atom`` and return its new index."""

    @abc.abstractmethod
    def add_bond(self, i: int, j: int, bond: Bond) -> None:
        ...

    @abc.abstractmethod
    def bonds(self) -> Iterator[Tuple[int, int, Bond]]:
        """Yield ``(i, j, bond)`` once per bond with ``i < j``."""

    @abc.abstractmethod
    def empty(self) -> "MoleculeGraph":
        """Return a new, empty graph of the same kind."""

    def has_bond(self, i: int, j: int) -> bool:
        return self.bond_between(i, j) is not None

    def index_of(self, atom: Atom) -> int:
        """
        Index of ``atom`` in this graph, or -1.

        The atom at the stored position must equal ``atom`` in every field, so an
        atom taken from another graph only resolves when it is indistinguishable
        from the one stored here.
        """
        if 0 <= atom.index < self.atom_count() and self.atom_at(atom.index) == atom:
            return atom.index
        return -1

    def __len__(self) -> int:
        return self.atom_count()


class MolGraph(MoleculeGraph):
    """
    Plain in-memory molecule graph.

    Atoms live in a list; adjacency is ``{index: {neighbour: Bond}}`` so that
    neighbour order is insertion order.
    """

    def __init__(self):
        self._atoms: List[Atom] = []
        self._adjacency: Dict[int, Dict[int, Bond]] = {}

    @classmethod
    def from_edges(
        cls,
        symbols: Sequence[str],
        edges: Sequence[Tuple],
    ) -> "MolGraph":
        """
        Build a graph from element symbols and ``(i, j)`` or ``(i, j, Bond)`` edges.

        A bare number as third element is taken as the bond order.
        """
        graph = cls()
        for symbol in symbols:
            graph.add_atom(Atom(symbol))
        for edge in edges:
            i, j = edge[0], edge[1]
            bond = edge[2] if len(edge) > 2 else Bond()
            if not isinstance(bond, Bond):
                bond = Bond(order=float(bond))
            graph.add_bond(i, j, bond)
        return graph

    def atom_count(self) -> int:
        return len(self._atoms)

    def bond_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adjacency.values()) // 2

    def atom_at(self, index: int) -> Atom:
        if not 0 <= index < len(self._atoms):
            raise IndexError(f"atom index {index} out of range (0..{len(self._atoms) - 1})")
        return self._atoms[index]

    def neighbors_of(self, index: int) -> List[int]:
        return list(self._adjacency.get(index, {}))

    def index_of(self, atom: Atom) -> int:
        # stored atoms are the objects handed out by atom_at
        if 0 <= atom.index < len(self._atoms) and self._atoms[atom.index] is atom:
            return atom.index
        return -1

    def bond_between(self, i: int, j: int) -> Optional[Bond]:
        return self._adjacency.get(i, {}).get(j)

    def add_atom(self, atom: Atom) -> int:
        index = len(self._atoms)
        self._atoms.append(replace(atom, index=index))
        self._adjacency[index] = {}
        return index

    def add_bond(self, i: int, j: int, bond: Bond) -> None:
        if i == j:
            raise GraphError("SELF_LOOP", f"cannot bond atom {i} to itself")
        for idx in (i, j):
            if not 0 <= idx < len(self._atoms):
                raise GraphError("UNKNOWN_ATOM", f"bond endpoint {idx} is not an atom of this graph")
        if j in self._adjacency[i]:
            raise GraphError("DUPLICATE_BOND", f"atoms {i} and {j} are already bonded")
        self._adjacency[i][j] = bond
        self._adjacency[j][i] = bond

    def bonds(self) -> Iterator[Tuple[int, int, Bond]]:
        for i, nbrs in self._adjacency.items():
            for j, bond in nbrs.items():
                if i < j:
                    yield i, j, bond

    def empty(self) -> "MolGraph":
        return MolGraph()

    def symbols(self) -> List[str]:
        return [atom.symbol for atom in self._atoms]

    def __repr__(self) -> str:
        return f"MolGraph(atoms={self.atom_count()}, bonds={self.bond_count()})"
