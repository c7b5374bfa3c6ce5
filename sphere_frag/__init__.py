"""
Sphere Fragment Package

A toolkit for cutting sphere-limited, chemistry-aware fragments out of
molecule graphs and rebuilding them as standalone structures.
"""

from .errors import FragmentationError, PreconditionError, TreeIntegrityError, GraphError
from .graph import Atom, Bond, MoleculeGraph, MolGraph
from .rdkit_graph import RDKitGraph
from .fragmentation import (
    ConnectionTree,
    Fragmenter,
    build_fragment,
    traverse,
    materialize,
    extend,
)

__version__ = "1.0.0"

__all__ = [
    'Atom',
    'Bond',
    'MoleculeGraph',
    'MolGraph',
    'RDKitGraph',
    'ConnectionTree',
    'Fragmenter',
    'build_fragment',
    'traverse',
    'materialize',
    'extend',
    'FragmentationError',
    'PreconditionError',
    'TreeIntegrityError',
    'GraphError',
]
