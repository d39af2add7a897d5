"""UPGMA tree builder backed by BioPython."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from pydecenttree.algorithms.base import TreeBuilder
from pydecenttree.core.registry import register_algorithm

if TYPE_CHECKING:
    from Bio.Phylo.BaseTree import Tree

logger = logging.getLogger(__name__)


def to_lower_triangular(matrix: np.ndarray) -> list[list[float]]:
    """Convert a square matrix to lower triangular list format for BioPython.

    BioPython's DistanceMatrix requires a lower triangular matrix format
    where row i contains values for columns 0 to i (inclusive). Values above
    the diagonal are ignored.

    Args:
        matrix: Square distance matrix.

    Returns:
        Lower triangular matrix as nested lists.
    """
    return [[float(matrix[i, j]) for j in range(i + 1)] for i in range(len(matrix))]


@register_algorithm
class UPGMA(TreeBuilder):
    """Unweighted pair group method with arithmetic mean.

    Uses BioPython's DistanceTreeConstructor and produces a rooted,
    ultrametric tree.
    """

    name: ClassVar[str] = "UPGMA"
    description: ClassVar[str] = "UPGMA (BioPython), rooted and ultrametric"

    def build_tree(self, labels: Sequence[str], matrix: np.ndarray) -> Tree:
        from Bio.Phylo.TreeConstruction import DistanceMatrix, DistanceTreeConstructor

        if len(set(labels)) != len(labels):
            raise ValueError("UPGMA requires unique sequence names")

        dm = DistanceMatrix(list(labels), to_lower_triangular(matrix))
        tree = DistanceTreeConstructor().upgma(dm)
        tree.rooted = True
        return tree
