"""
Conversion of caller-supplied arguments into native values.

Sequence names become an immutable tuple of strings. Distances become a
read-only, flat float64 numpy buffer, either borrowed from a caller's numpy
array without copying or built element by element from a generic sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from pydecenttree.core.exceptions import (
    ElementNotNumericError,
    ElementNotTextCoercibleError,
    NotASequenceError,
    WrongDimensionalityError,
    WrongElementTypeError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistanceBuffer:
    """Flat, row-major, read-only view of an N x N distance matrix.

    Attributes:
        values: 1-D float64 array. Never writeable.
        borrowed: True when ``values`` shares memory with the caller's numpy
            array. A borrowed buffer must not be kept after the call that
            produced it returns.
    """

    values: np.ndarray
    borrowed: bool

    @property
    def element_count(self) -> int:
        return int(self.values.size)


def _as_list(name: str, value: Any) -> list[Any]:
    try:
        return list(value)
    except Exception as e:
        raise NotASequenceError(name) from e


def collect_labels(name: str, value: Any) -> tuple[str, ...]:
    """Collect the text form of every element of a sequence.

    Elements need not be strings; anything with a ``str()`` form is accepted.

    Args:
        name: Argument name used in error messages.
        value: Any iterable of text-coercible objects.

    Returns:
        Labels in input order.

    Raises:
        NotASequenceError: If ``value`` is not iterable.
        ElementNotTextCoercibleError: If an element's ``str()`` fails.
    """
    labels: list[str] = []
    for index, item in enumerate(_as_list(name, value)):
        try:
            labels.append(str(item))
        except Exception as e:
            raise ElementNotTextCoercibleError(name, index) from e
    return tuple(labels)


def _as_double(item: Any) -> float:
    # Numeric objects only; float() would also parse text
    if isinstance(item, (str, bytes, bytearray)):
        raise TypeError(f"{type(item).__name__} is not a number")
    return float(item)


def collect_distances(name: str, value: Any) -> DistanceBuffer:
    """Copy a generic sequence of numbers into an owned float64 buffer.

    Args:
        name: Argument name used in error messages.
        value: Any iterable of numbers (int, float, numpy scalars, ...).

    Returns:
        Owned, read-only DistanceBuffer.

    Raises:
        NotASequenceError: If ``value`` is not iterable.
        ElementNotNumericError: If an element is not numeric or does not fit
            in a double.
    """
    doubles: list[float] = []
    for index, item in enumerate(_as_list(name, value)):
        try:
            doubles.append(_as_double(item))
        except (TypeError, ValueError, OverflowError) as e:
            raise ElementNotNumericError(name, index) from e

    values = np.asarray(doubles, dtype=np.float64)
    values.flags.writeable = False
    return DistanceBuffer(values=values, borrowed=False)


def is_typed_matrix(value: Any) -> bool:
    """Return True if ``value`` is a numpy array."""
    return isinstance(value, np.ndarray)


def read_typed_matrix(name: str, array: np.ndarray) -> DistanceBuffer:
    """Expose a numpy array's storage as a flat distance buffer.

    Args:
        name: Argument name used in error messages.
        array: 1-D or 2-D float64 numpy array.

    Returns:
        Read-only DistanceBuffer. Borrowed (no copy) for C-contiguous input.

    Raises:
        WrongElementTypeError: If the dtype is not float64.
        WrongDimensionalityError: If the array is not 1-D or 2-D.
    """
    if array.dtype != np.float64:
        raise WrongElementTypeError(name, str(array.dtype))

    if array.ndim < 1 or array.ndim > 2:
        raise WrongDimensionalityError(name, array.ndim)

    if array.flags.c_contiguous:
        values = array.reshape(-1).view()
        borrowed = True
    else:
        logger.debug("%s matrix is not C-contiguous; copying %d elements", name, array.size)
        values = np.ascontiguousarray(array).reshape(-1)
        borrowed = False

    values.flags.writeable = False
    return DistanceBuffer(values=values, borrowed=borrowed)


def materialize_distances(name: str, value: Any) -> DistanceBuffer:
    """Build a distance buffer from a numpy array or a generic sequence.

    The numpy path is taken whenever ``value`` is an ndarray, and its
    failures are final; other objects go through :func:`collect_distances`.
    """
    if is_typed_matrix(value):
        return read_typed_matrix(name, value)
    return collect_distances(name, value)
