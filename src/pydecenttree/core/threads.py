"""
Process-wide worker thread count for parallel tree builders.

The count is global, unsynchronised state: it is set before a construction
and read by the numba kernels when they start. Concurrent callers asking for
different counts race, and whichever wrote last wins.
"""

from __future__ import annotations

import logging

import numba as nb

logger = logging.getLogger(__name__)

_thread_count: int | None = None


def max_thread_count() -> int:
    """Largest worker count the numba thread pool supports."""
    return int(nb.config.NUMBA_NUM_THREADS)


def current_thread_count() -> int | None:
    """Worker count set by :func:`apply_thread_count`, or None for the default."""
    return _thread_count


def apply_thread_count(number_of_threads: int) -> None:
    """Set the worker count used by subsequent parallel constructions.

    Counts of zero or less keep the current setting. Counts above
    :func:`max_thread_count` are ignored without error.
    """
    global _thread_count

    if number_of_threads <= 0:
        return

    maximum = max_thread_count()
    if number_of_threads > maximum:
        logger.debug(
            "Ignoring request for %d threads (maximum is %d)", number_of_threads, maximum
        )
        return

    _thread_count = number_of_threads


def reset_thread_count() -> None:
    """Return to numba's default worker count."""
    global _thread_count
    _thread_count = None


def activate_thread_count() -> int:
    """Apply the process-wide count to numba's pool for the calling thread.

    Returns:
        The number of threads numba will use.
    """
    if _thread_count is None:
        nb.set_num_threads(max_thread_count())
    else:
        nb.set_num_threads(_thread_count)
    return nb.get_num_threads()
