"""
Unit tests for distance matrix and Newick I/O.

Tests PHYLIP and CSV/TSV matrix readers and the Newick writer.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from pydecenttree.core.exceptions import MatrixFileError
from pydecenttree.core.io_utils import (
    read_distance_matrix,
    read_phylip_matrix,
    read_table_matrix,
    write_newick,
)


class TestReadPhylipMatrix:
    """Tests for the PHYLIP reader."""

    def test_square_matrix(self, phylip_file: Path, additive_matrix):
        result = read_phylip_matrix(phylip_file)
        assert result.labels == ["A", "B", "C", "D"]
        assert result.size == 4
        assert result.matrix.dtype == np.float64
        np.testing.assert_array_equal(result.matrix, additive_matrix)

    def test_wrapped_rows(self, tmp_path: Path):
        path = tmp_path / "wrapped.phy"
        path.write_text("3\nA 0 1\n 2\nB 1 0 3\nC 2\n3 0\n")
        result = read_phylip_matrix(path)
        assert result.labels == ["A", "B", "C"]
        np.testing.assert_array_equal(result.matrix[2], [2.0, 3.0, 0.0])

    def test_trailing_tokens_ignored(self, tmp_path: Path):
        path = tmp_path / "extra.phy"
        path.write_text("3\nA 0 1 2\nB 1 0 3\nC 2 3 0\nextra\n")
        assert read_phylip_matrix(path).size == 3

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.phy"
        path.write_text("\n")
        with pytest.raises(MatrixFileError, match="empty"):
            read_phylip_matrix(path)

    def test_bad_count(self, tmp_path: Path):
        path = tmp_path / "bad.phy"
        path.write_text("three\nA 0\n")
        with pytest.raises(MatrixFileError, match="not a taxon count"):
            read_phylip_matrix(path)

    def test_zero_count(self, tmp_path: Path):
        path = tmp_path / "zero.phy"
        path.write_text("0\n")
        with pytest.raises(MatrixFileError, match="must be positive"):
            read_phylip_matrix(path)

    def test_truncated(self, tmp_path: Path):
        path = tmp_path / "short.phy"
        path.write_text("3\nA 0 1 2\nB 1 0 3\n")
        with pytest.raises(MatrixFileError, match="truncated"):
            read_phylip_matrix(path)

    def test_non_numeric(self, tmp_path: Path):
        path = tmp_path / "text.phy"
        path.write_text("3\nA 0 1 2\nB 1 x 3\nC 2 3 0\n")
        with pytest.raises(MatrixFileError, match="row 2"):
            read_phylip_matrix(path)


class TestReadTableMatrix:
    """Tests for the CSV/TSV reader."""

    def test_csv(self, csv_file: Path, abc_matrix):
        result = read_table_matrix(csv_file)
        assert result.labels == ["A", "B", "C"]
        np.testing.assert_array_equal(result.matrix, abc_matrix)
        assert result.matrix.flags.c_contiguous

    def test_tsv(self, tmp_path: Path):
        path = tmp_path / "dist.tsv"
        path.write_text("name\tX\tY\tZ\nX\t0\t1.5\t2\nY\t1.5\t0\t3\nZ\t2\t3\t0\n")
        result = read_table_matrix(path, separator="\t")
        assert result.labels == ["X", "Y", "Z"]
        assert result.matrix[0, 1] == pytest.approx(1.5)

    def test_not_square(self, tmp_path: Path):
        path = tmp_path / "rect.csv"
        path.write_text("name,A,B\nA,0,1\nB,1,0\nC,2,3\n")
        with pytest.raises(MatrixFileError, match="not square"):
            read_table_matrix(path)

    def test_names_only(self, tmp_path: Path):
        path = tmp_path / "names.csv"
        path.write_text("name\nA\n")
        with pytest.raises(MatrixFileError, match="name column"):
            read_table_matrix(path)


class TestReadDistanceMatrix:
    """Tests for suffix-based dispatch."""

    def test_csv_suffix(self, csv_file: Path):
        assert read_distance_matrix(csv_file).labels == ["A", "B", "C"]

    def test_other_suffix_is_phylip(self, phylip_file: Path):
        assert read_distance_matrix(phylip_file).size == 4

    def test_upper_case_suffix(self, tmp_path: Path, csv_file: Path):
        path = tmp_path / "DIST.CSV"
        path.write_text(csv_file.read_text())
        assert read_distance_matrix(path).size == 3


class TestWriteNewick:
    """Tests for the Newick writer."""

    def test_creates_parent_directories(self, tmp_path: Path):
        path = tmp_path / "nested" / "out" / "tree.nwk"
        write_newick("(A:1,B:2,C:3);", path)
        assert path.read_text() == "(A:1,B:2,C:3);\n"
