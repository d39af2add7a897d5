"""Invocation of a resolved tree builder on a validated request."""

from __future__ import annotations

import logging

from pydecenttree.core.exceptions import ConstructionFailedError
from pydecenttree.core.validation import ValidatedRequest
from pydecenttree.models.config import ConstructionOptions

logger = logging.getLogger(__name__)


def invoke_construction(request: ValidatedRequest, options: ConstructionOptions) -> str:
    """Run the request's builder and return its tree text.

    The builder is silenced when ``options.verbosity`` is 0. A builder that
    reports failure, or returns no text, never yields a partial tree.

    Raises:
        ConstructionFailedError: If the builder reports failure.
    """
    builder = request.builder
    builder.set_precision(options.precision)
    if options.verbosity == 0:
        builder.be_silent()

    ok, tree_text = builder.construct_tree_string_in_memory(
        request.labels, request.distances.values
    )
    if not ok or not tree_text:
        raise ConstructionFailedError(request.algorithm_name)

    return tree_text
