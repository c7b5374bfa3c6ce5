"""
Rebuilding a molecule graph from a connection tree.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional

from ..errors import PreconditionError, TreeIntegrityError
from ..graph import Bond, MoleculeGraph
from .tree import ConnectionTree

logger = logging.getLogger(__name__)


def _copy_bond(bond: Bond) -> Bond:
    return Bond(order=bond.order, in_ring=bond.in_ring, aromatic=bond.aromatic)


def extend(
    tree: ConnectionTree,
    target: MoleculeGraph,
    anchor_index: Optional[int] = None,
    anchor_bond: Optional[Bond] = None,
) -> Dict[int, int]:
    """
    Add the structure held by ``tree`` to ``target``.

    Atoms are added root first, then sphere by sphere, each bonded to its
    parent's atom. Ring closures are added last and only where ``target`` has
    no bond between the two atoms yet.

    Args:
        tree: Finished connection tree.
        target: Graph to add atoms and bonds to.
        anchor_index: Atom of ``target`` to link the root to (optional).
        anchor_bond: Bond whose order, ring flag and aromaticity the link copies.
            The link is only made when both anchor arguments are given.

    Returns:
        Mapping from tree key to atom index in ``target``.

    Raises:
        PreconditionError: ``anchor_index`` is not an atom of ``target``.
        TreeIntegrityError: A non-root node has no parent or no bond to it.
    """
    link = anchor_index is not None and anchor_bond is not None
    if link and not 0 <= anchor_index < target.atom_count():
        raise PreconditionError(
            "ANCHOR_OUT_OF_RANGE",
            f"anchor index {anchor_index} out of range for a graph with {target.atom_count()} atoms",
        )

    placed: Dict[int, int] = {}
    root = tree.root
    placed[root.key] = target.add_atom(replace(root.atom))
    if link:
        target.add_bond(anchor_index, placed[root.key], _copy_bond(anchor_bond))

    for sphere in range(1, tree.max_sphere() + 1):
        for node in tree.nodes_in_sphere(sphere):
            if node.parent is None or node.bond_to_parent is None:
                raise TreeIntegrityError(
                    "ORPHAN_NODE", f"node {node.key} in sphere {sphere} has no parent or bond to parent"
                )
            if node.parent.key not in placed:
                raise TreeIntegrityError(
                    "PARENT_NOT_PLACED", f"parent {node.parent.key} of node {node.key} was not reconstructed"
                )
            placed[node.key] = target.add_atom(replace(node.atom))
            target.add_bond(placed[node.parent.key], placed[node.key], _copy_bond(node.bond_to_parent))

    for edge in tree.cycle_edges:
        i, j = placed[edge.first], placed[edge.second]
        if not target.has_bond(i, j):
            target.add_bond(i, j, _copy_bond(edge.bond))

    return placed


def materialize(tree: ConnectionTree, target: Optional[MoleculeGraph] = None) -> MoleculeGraph:
    """
    Return a standalone graph holding the tree's structure.

    Without ``target`` a new empty graph of the source's kind is used.
    """
    graph = target if target is not None else tree.source.empty()
    placed = extend(tree, graph)
    logger.debug("Materialized tree at root %d into %d atoms", tree.root.key, len(placed))
    return graph
