"""Tests for invoking a builder on a validated request."""

from __future__ import annotations

import pytest

from pydecenttree.core.construction import invoke_construction
from pydecenttree.core.exceptions import ConstructionFailedError
from pydecenttree.core.validation import validate_request
from pydecenttree.models.config import ConstructionOptions


class TestInvokeConstruction:
    """Test invoke_construction."""

    def test_silenced_when_verbosity_zero(self, recording_registry, recorded_calls, abc_labels, abc_distances):
        request = validate_request("STAR", abc_labels, abc_distances, recording_registry)
        invoke_construction(request, ConstructionOptions(verbosity=0))
        build = [c for c in recorded_calls if c["event"] == "build"][0]
        assert build["silent"] is True

    def test_not_silenced_when_verbose(self, recording_registry, recorded_calls, abc_labels, abc_distances):
        request = validate_request("STAR", abc_labels, abc_distances, recording_registry)
        invoke_construction(request, ConstructionOptions(verbosity=2))
        assert [c["event"] for c in recorded_calls] == ["build"]
        assert recorded_calls[0]["silent"] is False

    def test_precision_forwarded(self, recording_registry, recorded_calls, abc_labels, abc_distances):
        request = validate_request("STAR", abc_labels, abc_distances, recording_registry)
        newick = invoke_construction(request, ConstructionOptions(precision=2))
        assert recorded_calls[-1]["precision"] == 2
        assert "A:1.00" in newick

    def test_builder_sees_labels_and_matrix(self, recording_registry, recorded_calls, abc_labels, abc_matrix):
        request = validate_request("STAR", abc_labels, abc_matrix, recording_registry)
        invoke_construction(request, ConstructionOptions())
        build = recorded_calls[-1]
        assert build["labels"] == abc_labels
        assert (build["matrix"] == abc_matrix).all()

    def test_failure_raises_with_algorithm_name(self, recording_registry, abc_labels, abc_distances):
        request = validate_request("FAIL", abc_labels, abc_distances, recording_registry)
        with pytest.raises(ConstructionFailedError) as exc_info:
            invoke_construction(request, ConstructionOptions())
        assert exc_info.value.algorithm_name == "FAIL"

    def test_empty_text_treated_as_failure(self, recording_registry, abc_labels, abc_distances, monkeypatch):
        request = validate_request("STAR", abc_labels, abc_distances, recording_registry)
        monkeypatch.setattr(
            request.builder, "construct_tree_string_in_memory", lambda labels, distances: (True, "")
        )
        with pytest.raises(ConstructionFailedError):
            invoke_construction(request, ConstructionOptions())
