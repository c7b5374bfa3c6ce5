"""
Bond-retention policy: which bonds the traversal follows past the sphere limit.
"""

from ..graph import Atom, Bond, MoleculeGraph

CARBON = "C"
HYDROGEN = "H"


def is_carbon(atom: Atom) -> bool:
    return not atom.is_placeholder and atom.symbol == CARBON


def is_heteroatom(atom: Atom) -> bool:
    """Anything but carbon and hydrogen. Placeholders are not heteroatoms."""
    return not atom.is_placeholder and atom.symbol not in (CARBON, HYDROGEN)


def count_hetero_neighbors(graph: MoleculeGraph, index: int) -> int:
    return sum(1 for nbr in graph.neighbors_of(index) if is_heteroatom(graph.atom_at(nbr)))


def retain_bond(graph: MoleculeGraph, i: int, j: int, bond: Bond) -> bool:
    """
    Return True when the bond between atoms ``i`` and ``j`` must be kept
    regardless of the sphere limit.

    Kept are hetero-hetero bonds, bonds of order three or higher, and
    carbon-hetero bonds whose carbon carries at least two heteroatoms
    (ester, acetal and amide-like centres).
    """
    atom1, atom2 = graph.atom_at(i), graph.atom_at(j)

    if is_heteroatom(atom1) and is_heteroatom(atom2):
        return True

    if bond.order >= 3:
        return True

    if is_carbon(atom1) and is_heteroatom(atom2):
        return count_hetero_neighbors(graph, i) >= 2
    if is_heteroatom(atom1) and is_carbon(atom2):
        return count_hetero_neighbors(graph, j) >= 2

    return False
