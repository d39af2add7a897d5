"""
Base class for distance-matrix tree builders.

A tree builder turns an ordered list of taxon labels and a flat, row-major
N x N distance buffer into a Newick string. Builders are registered by name
in :mod:`pydecenttree.core.registry` and reached only through the methods
defined here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from io import StringIO
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

if TYPE_CHECKING:
    from Bio.Phylo.BaseTree import Tree

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 6


def tree_to_newick(tree: Tree, precision: int = DEFAULT_PRECISION) -> str:
    """Serialise a BioPython tree to Newick without internal node names.

    Args:
        tree: BioPython Tree.
        precision: Decimal digits written for branch lengths.

    Returns:
        Newick string ending in ';'.
    """
    from Bio import Phylo

    for clade in tree.get_nonterminals():
        clade.name = None
        clade.confidence = None

    output = StringIO()
    Phylo.write(tree, output, "newick", format_branch_length=f"%1.{precision}f")
    return output.getvalue().strip()


class TreeBuilder(ABC):
    """Abstract base class for named tree-construction algorithms.

    Subclasses must define:
        name: Registry key (e.g., "NJ")
        build_tree: Method building a BioPython tree from labels and a
            square distance matrix

    Optional class attributes:
        description: One-line summary shown by ``pydecenttree tree algorithms``
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""

    def __init__(self) -> None:
        self.silent = False
        self.precision = DEFAULT_PRECISION

    def be_silent(self) -> None:
        """Suppress progress reporting for subsequent constructions."""
        self.silent = True

    def set_precision(self, digits: int) -> None:
        """Set the number of decimal digits written for branch lengths."""
        self.precision = max(0, int(digits))

    def report(self, message: str, *args: Any) -> None:
        if not self.silent:
            logger.info("%s: " + message, self.name, *args)

    @abstractmethod
    def build_tree(self, labels: Sequence[str], matrix: np.ndarray) -> Tree:
        """Build a tree from labels and a square float64 distance matrix."""

    def construct_tree_string_in_memory(
        self,
        labels: Sequence[str],
        distances: np.ndarray,
    ) -> tuple[bool, str]:
        """Build a tree and serialise it to Newick.

        Args:
            labels: Taxon labels; row/column order of the matrix.
            distances: Flat row-major float64 buffer of len(labels)**2 values.
                Not modified.

        Returns:
            (True, newick) on success, (False, "") if the matrix could not be
            turned into a tree.
        """
        n = len(labels)
        try:
            matrix = np.asarray(distances, dtype=np.float64).reshape(n, n)
            if not np.isfinite(matrix).all():
                raise ValueError("distance matrix contains non-finite values")
            self.report("building tree for %d taxa", n)
            tree = self.build_tree(labels, matrix)
            newick = tree_to_newick(tree, self.precision)
        except (ValueError, ArithmeticError) as e:
            logger.warning("%s could not build a tree: %s", self.name, e)
            return False, ""

        self.report("tree built (%d characters)", len(newick))
        return True, newick
