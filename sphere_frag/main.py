import logging
import os
from dataclasses import dataclass, asdict
from typing import List

from rdkit import Chem

from .errors import FragmentationError, PreconditionError
from .fragmentation import Fragmenter, DEFAULT_MAX_SPHERE, materialize
from .fragmentation.policy import HYDROGEN
from .rdkit_graph import RDKitGraph
from .utils import fragment_to_smiles, smiles_to_mol, visualize_fragments

logger = logging.getLogger(__name__)


def _is_hydrogen(graph, root):
    # out-of-range roots are left for the tree builder to reject
    in_range = isinstance(root, int) and 0 <= root < graph.atom_count()
    return in_range and graph.atom_at(root).symbol == HYDROGEN


@dataclass
class FragmentRecord:
    root_index: int
    root_symbol: str
    smiles: str
    atom_count: int
    bond_count: int
    placeholder_count: int


class FragmentGenerator:
    """
    Main class for building per-atom sphere fragments of a molecule.
    """
    def __init__(self, max_sphere=DEFAULT_MAX_SPHERE, with_placeholders=False, skip_hydrogens=True):
        """
        Initialize the fragment generator.

        Args:
            max_sphere: Sphere limit for bonds the retention policy does not keep
            with_placeholders: Mark cut bonds with placeholder atoms
            skip_hydrogens: Do not root fragments on explicit hydrogens
        """
        self.fragmenter = Fragmenter(max_sphere=max_sphere, with_placeholders=with_placeholders)
        self.skip_hydrogens = skip_hydrogens

    def generate(self, mol, roots=None) -> List[FragmentRecord]:
        """
        Build one fragment per root atom.

        Args:
            mol: Molecule (RDKit mol or SMILES)
            roots: Atom indices to root fragments on (default: every atom)

        Returns:
            List of FragmentRecord, in root order
        """
        if isinstance(mol, str):
            mol = smiles_to_mol(mol)

        if mol is None:
            raise PreconditionError("INVALID_MOLECULE", "Invalid molecule")

        graph = RDKitGraph(mol)
        if roots is None:
            roots = range(graph.atom_count())

        logger.info("Fragmenting %s (%d atoms)", Chem.MolToSmiles(mol), graph.atom_count())

        records = []
        for root in roots:
            if self.skip_hydrogens and _is_hydrogen(graph, root):
                continue
            try:
                tree = self.fragmenter.tree(graph, root)
            except FragmentationError as exc:
                logger.warning("Skipping root %s: %s", root, exc.message)
                continue
            atom = tree.root.atom
            fragment = materialize(tree)
            records.append(FragmentRecord(
                root_index=root,
                root_symbol=atom.symbol,
                smiles=fragment_to_smiles(fragment),
                atom_count=fragment.atom_count(),
                bond_count=fragment.bond_count(),
                placeholder_count=len(tree.placeholders()),
            ))

        logger.info("Generated %d fragments", len(records))
        return records

    def visualize_results(self, records, filename=None):
        """
        Draw the fragments of a generate() run.

        Args:
            records: FragmentRecord list
            filename: Output filename (optional)

        Returns:
            Visualization image
        """
        mols = []
        for r in records:
            m = Chem.MolFromSmiles(r.smiles, sanitize=False)
            m.UpdatePropertyCache(strict=False)
            mols.append(m)
        labels = [f'{r.root_symbol}{r.root_index}' for r in records]

        return visualize_fragments(mols, labels, filename)

    def save_results(self, mol, records, output_dir='results'):
        """
        Save the results to disk.

        Args:
            mol: Original molecule (RDKit mol or SMILES)
            records: FragmentRecord list
            output_dir: Output directory

        Returns:
            Path to the written TSV file
        """
        os.makedirs(output_dir, exist_ok=True)
        if not isinstance(mol, str):
            mol = Chem.MolToSmiles(mol)

        path = os.path.join(output_dir, 'fragments.tsv')
        columns = list(FragmentRecord.__dataclass_fields__)
        with open(path, 'w') as f:
            f.write(f"# source: {mol}\n")
            f.write("\t".join(columns) + "\n")
            for record in records:
                row = asdict(record)
                f.write("\t".join(str(row[c]) for c in columns) + "\n")

        return path
