"""
Breadth-first traversal that grows a connection tree around a root atom.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Optional, Set, Tuple

from ..errors import PreconditionError
from ..graph import MoleculeGraph
from .placeholders import PLACEHOLDER_SYMBOL, add_placeholders
from .policy import retain_bond
from .rings import close_rings
from .tree import ConnectionTree

logger = logging.getLogger(__name__)


def _check_preconditions(graph, root_index, max_sphere, exclude: Set[int]) -> None:
    if graph is None:
        raise PreconditionError("NO_GRAPH", "a molecule graph is required")
    if isinstance(root_index, bool) or not isinstance(root_index, int):
        raise PreconditionError("INVALID_ROOT", f"root index must be an int, got {root_index!r}")
    if not 0 <= root_index < graph.atom_count():
        raise PreconditionError(
            "ROOT_OUT_OF_RANGE",
            f"root index {root_index} out of range for a graph with {graph.atom_count()} atoms",
        )
    if root_index in exclude:
        raise PreconditionError("ROOT_EXCLUDED", f"root index {root_index} is in the exclusion set")
    if max_sphere < 0:
        raise PreconditionError("NEGATIVE_SPHERE", f"max_sphere must be >= 0, got {max_sphere}")


def grow_tree(
    graph: MoleculeGraph,
    root_index: int,
    max_sphere: int,
    exclude: Optional[Iterable[int]] = None,
) -> ConnectionTree:
    """
    Build the spanning tree only: no cycle edges, no placeholders.

    Each atom enters the tree once, through the first bond that reaches it.
    Bonds accepted by :func:`retain_bond` are followed past ``max_sphere``.
    """
    exclude = set(exclude or ())
    _check_preconditions(graph, root_index, max_sphere, exclude)

    tree = ConnectionTree(graph, root_index)
    queue: Deque[Tuple[int, int]] = deque([(root_index, 0)])
    queued = {root_index}
    visited: Set[int] = set()

    while queue:
        atom_index, sphere = queue.popleft()
        visited.add(atom_index)
        for nbr in graph.neighbors_of(atom_index):
            if nbr in exclude:
                continue
            bond = graph.bond_between(atom_index, nbr)
            if not (retain_bond(graph, atom_index, nbr, bond) or sphere < max_sphere):
                continue
            if nbr in visited or nbr in queued:
                continue
            queue.append((nbr, sphere + 1))
            queued.add(nbr)
            tree.add_node(graph.atom_at(nbr), nbr, atom_index, bond)

    return tree


def traverse(
    graph: MoleculeGraph,
    root_index: int,
    max_sphere: int,
    exclude: Optional[Iterable[int]] = None,
    with_placeholders: bool = False,
    placeholder_symbol: str = PLACEHOLDER_SYMBOL,
) -> ConnectionTree:
    """
    Extract the connection tree around ``root_index``.

    Args:
        graph: Molecule graph to walk; it is not modified.
        root_index: Index of the root atom.
        max_sphere: Sphere limit for ordinary bonds.
        exclude: Atom indices never to enter the tree. Unknown indices are ignored.
        with_placeholders: Append a placeholder leaf for every bond cut by the limit.
        placeholder_symbol: Symbol carried by placeholder atoms.

    Returns:
        The finished tree with ring closures recorded.

    Raises:
        PreconditionError: No graph, bad or excluded root, or negative ``max_sphere``.
    """
    tree = grow_tree(graph, root_index, max_sphere, exclude)
    n_cycles = close_rings(tree, graph)
    n_placeholders = add_placeholders(tree, graph, placeholder_symbol) if with_placeholders else 0

    logger.debug(
        "Tree at root %d (max sphere %d): %d nodes, %d cycle edges, %d placeholders",
        root_index, max_sphere, len(tree), n_cycles, n_placeholders,
    )
    return tree
