"""
Sphere fragmentation of molecule graphs
---------------------------------------

* Breadth-first connection trees around a root atom
* Bonds between heteroatoms, triple bonds and polyfunctional carbons survive the sphere limit
* Ring closures recovered as separate cycle edges
* Optional placeholder leaves for cut bonds
* Reconstruction into a new graph or onto an anchor atom of an existing one
"""

from .tree import ConnectionTree, ConnectionTreeNode, CycleEdge
from .policy import retain_bond, is_heteroatom, is_carbon
from .traversal import traverse, grow_tree
from .rings import close_rings
from .placeholders import add_placeholders, PLACEHOLDER_SYMBOL
from .reconstruction import materialize, extend
from .core import Fragmenter, build_fragment, DEFAULT_MAX_SPHERE

__all__ = [
    'ConnectionTree',
    'ConnectionTreeNode',
    'CycleEdge',
    'retain_bond',
    'is_heteroatom',
    'is_carbon',
    'traverse',
    'grow_tree',
    'close_rings',
    'add_placeholders',
    'PLACEHOLDER_SYMBOL',
    'materialize',
    'extend',
    'Fragmenter',
    'build_fragment',
    'DEFAULT_MAX_SPHERE',
]
