"""
I/O utilities for distance matrices and Newick trees.

Reads square distance matrices from PHYLIP distance files or from CSV/TSV
tables, and writes Newick output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import polars as pl

from pydecenttree.core.exceptions import MatrixFileError

logger = logging.getLogger(__name__)

TABLE_SUFFIXES = {".csv": ",", ".tsv": "\t"}


@dataclass(frozen=True)
class DistanceMatrixFile:
    """Sequence names and the square distance matrix read from a file."""

    labels: list[str]
    matrix: np.ndarray

    @property
    def size(self) -> int:
        return len(self.labels)


def read_phylip_matrix(path: Path) -> DistanceMatrixFile:
    """
    Read a square PHYLIP distance matrix.

    The first non-blank line holds the number of taxa N; each of the next N
    records holds a name followed by N distances. Rows may wrap over several
    lines.

    Args:
        path: Path to the PHYLIP file.

    Returns:
        DistanceMatrixFile with a float64 N x N matrix.

    Raises:
        MatrixFileError: If the file is empty, truncated or non-numeric.
    """
    tokens = path.read_text().split()
    if not tokens:
        raise MatrixFileError(str(path), "file is empty")

    try:
        n = int(tokens[0])
    except ValueError:
        raise MatrixFileError(str(path), f"first token '{tokens[0]}' is not a taxon count") from None
    if n < 1:
        raise MatrixFileError(str(path), f"taxon count must be positive, got {n}")

    expected = 1 + n * (n + 1)
    if len(tokens) < expected:
        raise MatrixFileError(
            str(path),
            f"expected {n} rows of a name and {n} distances, file is truncated",
        )
    if len(tokens) > expected:
        logger.warning("Ignoring %d trailing tokens in %s", len(tokens) - expected, path)

    labels: list[str] = []
    matrix = np.empty((n, n), dtype=np.float64)
    pos = 1
    for row in range(n):
        labels.append(tokens[pos])
        try:
            matrix[row] = [float(t) for t in tokens[pos + 1 : pos + 1 + n]]
        except ValueError:
            raise MatrixFileError(
                str(path), f"row {row + 1} ({tokens[pos]}) contains a non-numeric distance"
            ) from None
        pos += n + 1

    return DistanceMatrixFile(labels=labels, matrix=matrix)


def read_table_matrix(path: Path, separator: str = ",") -> DistanceMatrixFile:
    """
    Read a square distance matrix from a CSV/TSV table.

    The first column holds the sequence names (index); the remaining columns
    hold the distances, one column per sequence.

    Args:
        path: Path to the table.
        separator: Field separator.

    Returns:
        DistanceMatrixFile with a float64 N x N matrix.

    Raises:
        MatrixFileError: If the table is not square or not numeric.
    """
    try:
        df = pl.read_csv(path, separator=separator)
    except (pl.exceptions.PolarsError, OSError) as e:
        raise MatrixFileError(str(path), str(e)) from e

    if df.width < 2:
        raise MatrixFileError(str(path), "expected a name column and at least one distance column")

    labels = [str(v) for v in df.get_column(df.columns[0]).to_list()]
    values = df.select(df.columns[1:])
    if values.height != values.width:
        raise MatrixFileError(
            str(path), f"matrix is not square: {values.height} rows x {values.width} columns"
        )

    try:
        matrix = values.cast(pl.Float64).to_numpy()
    except pl.exceptions.PolarsError as e:
        raise MatrixFileError(str(path), "matrix contains non-numeric values") from e

    return DistanceMatrixFile(labels=labels, matrix=np.ascontiguousarray(matrix, dtype=np.float64))


def read_distance_matrix(path: Path) -> DistanceMatrixFile:
    """Read a distance matrix, choosing the format from the file suffix.

    ``.csv`` and ``.tsv`` are read as tables; anything else as PHYLIP.
    """
    separator = TABLE_SUFFIXES.get(path.suffix.lower())
    if separator is not None:
        return read_table_matrix(path, separator)
    return read_phylip_matrix(path)


def write_newick(tree_text: str, path: Path) -> None:
    """Write a Newick tree followed by a newline, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tree_text + "\n")
