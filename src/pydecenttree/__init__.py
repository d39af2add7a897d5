"""
pydecenttree: distance-matrix phylogenetic tree construction.

Validates loosely typed sequence names and distance matrices (Python
sequences or numpy arrays), and dispatches them to a named tree-construction
algorithm (NJ, BIONJ, UPGMA) that returns a Newick tree string.
"""

__version__ = "0.1.0"
__author__ = "pydecenttree Team"

from pydecenttree.api import constructTree, construct_tree
from pydecenttree.core.exceptions import DecentTreeError
from pydecenttree.core.registry import default_registry
from pydecenttree.models.config import ConstructionOptions

__all__ = [
    "ConstructionOptions",
    "DecentTreeError",
    "constructTree",
    "construct_tree",
    "default_registry",
    "__version__",
]
