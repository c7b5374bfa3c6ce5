"""
Placeholder leaves for bonds cut by the sphere limit.
"""

from ..graph import Atom, MoleculeGraph
from .tree import ConnectionTree

PLACEHOLDER_SYMBOL = "R"


def add_placeholders(tree: ConnectionTree, graph: MoleculeGraph, symbol: str = PLACEHOLDER_SYMBOL) -> int:
    """
    Give every real node one placeholder child per cut bond.

    A bond is cut when the neighbour it leads to is linked to the node neither
    by a tree edge nor by a cycle edge. Placeholder keys start above the
    source's atom indices. Returns the number of placeholders added.
    """
    added = 0
    for node in tree.nodes(include_placeholders=False):
        for nbr in graph.neighbors_of(node.key):
            if tree.bond_between(node.key, nbr) is not None:
                continue
            key = graph.atom_count() + len(tree)
            tree.add_node(
                Atom(symbol, is_placeholder=True),
                key,
                node.key,
                graph.bond_between(node.key, nbr),
                is_placeholder=True,
            )
            added += 1
    return added
