"""
Core request handling for tree construction.

Marshals caller arguments into native values, validates them in a fixed
order, resolves the algorithm by name, applies the thread count and invokes
the algorithm.
"""

from pydecenttree.core.construction import invoke_construction
from pydecenttree.core.marshaling import (
    DistanceBuffer,
    collect_distances,
    collect_labels,
    materialize_distances,
    read_typed_matrix,
)
from pydecenttree.core.registry import AlgorithmRegistry, default_registry, register_algorithm
from pydecenttree.core.threads import apply_thread_count
from pydecenttree.core.validation import ValidatedRequest, validate_request

__all__ = [
    "AlgorithmRegistry",
    "DistanceBuffer",
    "ValidatedRequest",
    "apply_thread_count",
    "collect_distances",
    "collect_labels",
    "default_registry",
    "invoke_construction",
    "materialize_distances",
    "read_typed_matrix",
    "register_algorithm",
    "validate_request",
]
