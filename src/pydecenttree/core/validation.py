"""
Validation of tree construction requests.

Checks run in a fixed order and stop at the first failure, so the raised
exception always describes the earliest problem:

1. the algorithm name is present (an empty name is looked up like any other)
2. the algorithm name is registered
3. distances are present
4. sequence names can be collected and there are at least 3
5. distances can be materialised and hold exactly N*N values
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydecenttree.core.exceptions import (
    DistanceMatrixSizeMismatchError,
    MissingAlgorithmNameError,
    MissingDistancesError,
    TooFewSequencesError,
    UnknownAlgorithmError,
)
from pydecenttree.core.marshaling import DistanceBuffer, collect_labels, materialize_distances
from pydecenttree.core.registry import AlgorithmRegistry, default_registry

if TYPE_CHECKING:
    from pydecenttree.algorithms.base import TreeBuilder

logger = logging.getLogger(__name__)

MIN_SEQUENCES = 3

SEQUENCES_ARG = "sequencenames"
DISTANCES_ARG = "distance"


@dataclass(frozen=True)
class ValidatedRequest:
    """A request that passed every check and is ready to run."""

    algorithm_name: str
    builder: TreeBuilder
    labels: tuple[str, ...]
    distances: DistanceBuffer

    @property
    def sequence_count(self) -> int:
        return len(self.labels)


def validate_request(
    algorithm: str | None,
    sequences: Any,
    distances: Any,
    registry: AlgorithmRegistry | None = None,
) -> ValidatedRequest:
    """Validate and convert the arguments of a tree construction request.

    Args:
        algorithm: Registered algorithm name.
        sequences: Iterable of text-coercible sequence names.
        distances: numpy float64 array (1-D or 2-D) or an iterable of
            numbers holding the row-major N x N distance matrix.
        registry: Registry used to resolve ``algorithm``. Defaults to the
            process-wide registry.

    Returns:
        ValidatedRequest with a fresh builder instance.

    Raises:
        DecentTreeError: The subclass describing the first failed check.
    """
    if registry is None:
        registry = default_registry

    if algorithm is None:
        raise MissingAlgorithmNameError()

    builder = registry.get_tree_builder_by_name(algorithm)
    if builder is None:
        raise UnknownAlgorithmError(algorithm, registry.names())

    if distances is None:
        raise MissingDistancesError()

    labels = collect_labels(SEQUENCES_ARG, sequences)
    if len(labels) < MIN_SEQUENCES:
        raise TooFewSequencesError(SEQUENCES_ARG, len(labels))

    buffer = materialize_distances(DISTANCES_ARG, distances)
    if buffer.element_count != len(labels) * len(labels):
        raise DistanceMatrixSizeMismatchError(len(labels), buffer.element_count)

    logger.debug(
        "Validated %s request: %d sequences, %s distance buffer",
        algorithm,
        len(labels),
        "borrowed" if buffer.borrowed else "owned",
    )
    return ValidatedRequest(
        algorithm_name=algorithm,
        builder=builder,
        labels=labels,
        distances=buffer,
    )
