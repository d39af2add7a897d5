"""
Built-in tree-construction algorithms.

Importing this package registers every built-in algorithm in
:data:`pydecenttree.core.registry.default_registry`.
"""

from pydecenttree.algorithms.base import TreeBuilder, tree_to_newick
from pydecenttree.algorithms.neighbor_joining import BIONJ, NeighborJoining
from pydecenttree.algorithms.upgma import UPGMA

__all__ = [
    "BIONJ",
    "NeighborJoining",
    "TreeBuilder",
    "UPGMA",
    "tree_to_newick",
]
