"""
Core Fragmenter class: traversal plus reconstruction behind one configuration.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Union

from rdkit import Chem

from ..errors import FragmentationError
from ..graph import Bond, MoleculeGraph
from ..rdkit_graph import RDKitGraph
from .placeholders import PLACEHOLDER_SYMBOL
from .policy import HYDROGEN
from .reconstruction import extend, materialize
from .traversal import traverse
from .tree import ConnectionTree

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPHERE = 2


def build_fragment(
    graph: MoleculeGraph,
    root_index: int,
    max_sphere: int,
    exclude: Optional[Iterable[int]] = None,
    with_placeholders: bool = False,
) -> MoleculeGraph:
    """Traverse around ``root_index`` and rebuild the result as a new graph."""
    return materialize(traverse(graph, root_index, max_sphere, exclude, with_placeholders))


class Fragmenter:
    """
    Sphere fragmenter with a fixed configuration.

    Args:
        max_sphere: Sphere limit for bonds the retention policy does not keep.
        with_placeholders: Mark cut bonds with placeholder atoms.
        placeholder_symbol: Label of placeholder atoms.
        exclude: Atom indices to leave out of every fragment.
    """

    def __init__(
        self,
        max_sphere: int = DEFAULT_MAX_SPHERE,
        with_placeholders: bool = False,
        placeholder_symbol: str = PLACEHOLDER_SYMBOL,
        exclude: Optional[Iterable[int]] = None,
    ):
        self.max_sphere = max_sphere
        self.with_placeholders = with_placeholders
        self.placeholder_symbol = placeholder_symbol
        self.exclude = frozenset(exclude or ())

        logger.info(
            "Fragmenter: max_sphere=%d, with_placeholders=%s, placeholder_symbol=%s, excluded=%d",
            max_sphere, with_placeholders, placeholder_symbol, len(self.exclude),
        )

    # ───────────────────────── public API ──────────────────────────
    def tree(self, graph: MoleculeGraph, root_index: int) -> ConnectionTree:
        return traverse(
            graph,
            root_index,
            self.max_sphere,
            self.exclude,
            self.with_placeholders,
            self.placeholder_symbol,
        )

    def fragment(self, graph: MoleculeGraph, root_index: int) -> MoleculeGraph:
        return materialize(self.tree(graph, root_index))

    def attach(
        self,
        graph: MoleculeGraph,
        root_index: int,
        target: MoleculeGraph,
        anchor_index: Optional[int] = None,
        anchor_bond: Optional[Bond] = None,
    ) -> Dict[int, int]:
        """
        Rebuild the fragment around ``root_index`` inside ``target``, optionally
        bonded to ``anchor_index``. Returns the tree-key to target-index map.
        """
        return extend(self.tree(graph, root_index), target, anchor_index, anchor_bond)

    def fragment_all(
        self,
        graph: MoleculeGraph,
        skip_hydrogens: bool = True,
    ) -> Dict[int, MoleculeGraph]:
        """One fragment per atom of ``graph``, keyed by root atom index."""
        fragments: Dict[int, MoleculeGraph] = {}
        for index in range(graph.atom_count()):
            if index in self.exclude:
                continue
            if skip_hydrogens and graph.atom_at(index).symbol == HYDROGEN:
                continue
            try:
                fragments[index] = self.fragment(graph, index)
            except FragmentationError as exc:
                logger.warning("Skipping root %d: %s", index, exc.message)
        logger.info("Built %d fragments from %d atoms", len(fragments), graph.atom_count())
        return fragments

    def fragment_smiles(self, mol: Union[str, Chem.Mol], root_index: int) -> str:
        """SMILES of the fragment around ``root_index`` of an RDKit molecule or SMILES."""
        graph = RDKitGraph.from_smiles(mol) if isinstance(mol, str) else RDKitGraph(mol)
        fragment = self.fragment(graph, root_index)
        return Chem.MolToSmiles(fragment.to_mol())
