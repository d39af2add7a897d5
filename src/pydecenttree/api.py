"""
Single entry point for building a tree from names and distances.

Example:
    >>> from pydecenttree import construct_tree
    >>> construct_tree(
    ...     "NJ",
    ...     ["A", "B", "C"],
    ...     [0, 1, 2, 1, 0, 3, 2, 3, 0],
    ... )
    '(A:0.000000,B:1.000000,C:2.000000):0.000000;'
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

import pydecenttree.algorithms  # noqa: F401  (registers the built-in algorithms)
from pydecenttree.core.construction import invoke_construction
from pydecenttree.core.exceptions import DecentTreeError, InvalidOptionsError
from pydecenttree.core.registry import AlgorithmRegistry
from pydecenttree.core.threads import apply_thread_count
from pydecenttree.core.validation import validate_request
from pydecenttree.models.config import ConstructionOptions

logger = logging.getLogger(__name__)


def construct_tree(
    algorithm: str | None,
    sequences: Any,
    distances: Any,
    number_of_threads: int = 0,
    precision: int = 6,
    verbosity: int = 0,
    *,
    registry: AlgorithmRegistry | None = None,
) -> str:
    """Build a tree and return it as a Newick string.

    Args:
        algorithm: Registered algorithm name, e.g. "NJ", "BIONJ" or "UPGMA".
        sequences: Sequence names (anything with a ``str()`` form), N >= 3.
        distances: Row-major N x N distance matrix, either a 1-D or 2-D
            float64 numpy array (used without copying) or any iterable of
            numbers.
        number_of_threads: Worker threads for parallel algorithms; <= 0
            keeps the default. Process-wide setting.
        precision: Decimal digits for branch lengths.
        verbosity: 0 silences the algorithm's progress reporting.
        registry: Registry used to resolve ``algorithm`` (default: the
            process-wide registry).

    Returns:
        Newick tree text.

    Raises:
        DecentTreeError: With a message starting "Error: " describing the
            first check that failed, or the construction failure.
    """
    try:
        options = ConstructionOptions(
            number_of_threads=number_of_threads,
            precision=precision,
            verbosity=verbosity,
        )
    except ValidationError as e:
        raise InvalidOptionsError(
            "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
        ) from e

    try:
        request = validate_request(algorithm, sequences, distances, registry)
        apply_thread_count(options.number_of_threads)
        return invoke_construction(request, options)
    except DecentTreeError as e:
        logger.debug("Tree construction rejected: %s", e.message)
        raise


# Name used by the pydecenttree extension module
constructTree = construct_tree
