"""
Shared pytest fixtures for pydecenttree tests.

Provides reusable distance matrices, matrix files, and test tree builders
registered in isolated registries.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

import numpy as np
import pytest

from pydecenttree.algorithms.base import TreeBuilder
from pydecenttree.core import threads
from pydecenttree.core.registry import AlgorithmRegistry


# =============================================================================
# Distance Matrix Fixtures
# =============================================================================


@pytest.fixture
def abc_labels() -> list[str]:
    """Three sequence names."""
    return ["A", "B", "C"]


@pytest.fixture
def abc_distances() -> list[float]:
    """Flat symmetric 3x3 distance matrix with a zero diagonal."""
    return [0, 1, 2, 1, 0, 3, 2, 3, 0]


@pytest.fixture
def abc_matrix(abc_distances: list[float]) -> np.ndarray:
    """The 3x3 matrix as a float64 numpy array."""
    return np.array(abc_distances, dtype=np.float64).reshape(3, 3)


@pytest.fixture
def additive_labels() -> list[str]:
    """Names for the four-taxon additive tree ((A:1,B:2):1,C:1,D:3)."""
    return ["A", "B", "C", "D"]


@pytest.fixture
def additive_matrix() -> np.ndarray:
    """Path-length distances of the unrooted tree ((A:1,B:2):1,C:1,D:3)."""
    return np.array(
        [
            [0.0, 3.0, 3.0, 5.0],
            [3.0, 0.0, 4.0, 6.0],
            [3.0, 4.0, 0.0, 4.0],
            [5.0, 6.0, 4.0, 0.0],
        ]
    )


@pytest.fixture
def random_matrix() -> tuple[list[str], np.ndarray]:
    """Symmetric 12-taxon matrix from random points in the plane."""
    rng = np.random.default_rng(42)
    points = rng.random((12, 2))
    diff = points[:, None, :] - points[None, :, :]
    matrix = np.sqrt((diff**2).sum(axis=-1))
    return [f"T{i}" for i in range(12)], matrix


# =============================================================================
# Matrix File Fixtures
# =============================================================================


@pytest.fixture
def phylip_file(tmp_path: Path) -> Path:
    """Square PHYLIP distance file for the additive four-taxon tree."""
    path = tmp_path / "dist.phy"
    path.write_text(
        "4\n"
        "A 0 3 3 5\n"
        "B 3 0 4 6\n"
        "C 3 4 0 4\n"
        "D 5 6 4 0\n"
    )
    return path


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    """CSV distance matrix with names in the first column."""
    path = tmp_path / "dist.csv"
    path.write_text(
        "name,A,B,C\n"
        "A,0,1,2\n"
        "B,1,0,3\n"
        "C,2,3,0\n"
    )
    return path


# =============================================================================
# Tree Builder Fixtures
# =============================================================================


class RecordingBuilder(TreeBuilder):
    """Star-tree builder that records how it was called."""

    name: ClassVar[str] = "STAR"
    description: ClassVar[str] = "Star tree for tests"

    calls: ClassVar[list[dict]] = []

    def be_silent(self) -> None:
        super().be_silent()
        self.calls.append({"event": "be_silent"})

    def build_tree(self, labels: Sequence[str], matrix: np.ndarray):
        from Bio.Phylo.BaseTree import Clade, Tree

        self.calls.append(
            {
                "event": "build",
                "labels": list(labels),
                "matrix": matrix.copy(),
                "precision": self.precision,
                "silent": self.silent,
            }
        )
        return Tree(root=Clade(clades=[Clade(name=n, branch_length=1.0) for n in labels]))


class FailingBuilder(TreeBuilder):
    """Builder whose construction always reports failure."""

    name: ClassVar[str] = "FAIL"

    def build_tree(self, labels: Sequence[str], matrix: np.ndarray):
        raise ValueError("refusing to build")


@pytest.fixture
def recording_registry() -> AlgorithmRegistry:
    """Isolated registry holding the recording and failing builders."""
    RecordingBuilder.calls.clear()
    registry = AlgorithmRegistry()
    registry.register(RecordingBuilder)
    registry.register(FailingBuilder)
    return registry


@pytest.fixture
def recorded_calls() -> list[dict]:
    return RecordingBuilder.calls


@pytest.fixture(autouse=True)
def _reset_thread_count():
    """Keep the process-wide thread count from leaking between tests."""
    threads.reset_thread_count()
    yield
    threads.reset_thread_count()
