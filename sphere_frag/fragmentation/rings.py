"""
Recovery of ring-closure bonds that the spanning tree leaves out.
"""

from ..graph import MoleculeGraph
from .tree import ConnectionTree


def close_rings(tree: ConnectionTree, graph: MoleculeGraph) -> int:
    """
    Register every graph bond between two real tree nodes that is not a
    parent-child link as a cycle edge.

    Nodes are visited sphere by sphere. Both endpoints see the same pair, so
    the tree's own duplicate check keeps each bond to a single record. Returns
    the number of cycle edges added.
    """
    added = 0
    for sphere in range(tree.max_sphere(include_placeholders=False) + 1):
        for node in tree.nodes_in_sphere(sphere, include_placeholders=False):
            for nbr in graph.neighbors_of(node.key):
                partner = tree.get_node(nbr)
                if partner is None or partner.is_placeholder:
                    continue
                if tree.is_tree_edge(node.key, nbr) or tree.has_cycle_edge(node.key, nbr):
                    continue
                if tree.add_cycle_edge(node.key, nbr, graph.bond_between(node.key, nbr)):
                    added += 1
    return added
