"""
Custom exceptions with actionable guidance.

Every failure of a tree construction request is reported as exactly one
exception from this module. Messages begin with "Error: " and describe the
first check that failed.
"""

from __future__ import annotations


class DecentTreeError(TypeError):
    """Base exception for pydecenttree errors.

    Derives from TypeError, the exception type raised by the pydecenttree
    extension module for every rejected request.
    """

    def __init__(self, message: str, suggestion: str | None = None):
        if not message.startswith("Error: "):
            message = f"Error: {message}"
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class RequestError(DecentTreeError):
    """Base class for request-level precondition failures."""



class MissingAlgorithmNameError(RequestError):
    """Raised when no algorithm name was supplied."""

    def __init__(self):
        super().__init__(
            message="Algorithm name not specified",
            suggestion="Pass one of the registered algorithm names, e.g. algorithm='NJ'.",
        )


class UnknownAlgorithmError(RequestError):
    """Raised when the algorithm name is not registered."""

    def __init__(self, algorithm_name: str, available: list[str] | None = None):
        suggestion = None
        if available:
            suggestion = f"Available algorithms: {', '.join(available)}"
        super().__init__(
            message=f"Algorithm {algorithm_name} not found.",
            suggestion=suggestion,
        )
        self.algorithm_name = algorithm_name


class MissingDistancesError(RequestError):
    """Raised when no distance matrix was supplied."""

    def __init__(self):
        super().__init__(message="No distances were supplied")


class TooFewSequencesError(RequestError):
    """Raised when fewer than three sequence names were supplied."""

    def __init__(self, name: str, count: int):
        super().__init__(
            message=(
                f"{name} contains only {count} sequences (must have at least 3)."
            ),
        )
        self.count = count


class DistanceMatrixSizeMismatchError(RequestError):
    """Raised when the distance matrix does not hold N*N elements."""

    def __init__(self, sequence_count: int, actual: int):
        expected = sequence_count * sequence_count
        super().__init__(
            message=(
                f"There are {sequence_count} sequences but the distance matrix "
                f"contains {actual} elements (should be {expected})."
            ),
            suggestion=(
                "Supply the full square matrix in row-major order, "
                "one row and one column per sequence name."
            ),
        )
        self.sequence_count = sequence_count
        self.expected = expected
        self.actual = actual


class MarshalingError(DecentTreeError):
    """Base class for failures converting an argument to a native value."""

    def __init__(self, name: str, message: str, suggestion: str | None = None):
        super().__init__(message=f"{name} {message}", suggestion=suggestion)
        self.name = name


class NotASequenceError(MarshalingError):
    """Raised when an argument cannot be iterated as a sequence."""

    def __init__(self, name: str):
        super().__init__(name, "is not a sequence.")


class ElementNotTextCoercibleError(MarshalingError):
    """Raised when an element of the names sequence has no text form."""

    def __init__(self, name: str, index: int):
        super().__init__(name, f"could not convert item {index} to string.")
        self.index = index


class ElementNotNumericError(MarshalingError):
    """Raised when an element of the distance sequence is not a number."""

    def __init__(self, name: str, index: int):
        super().__init__(name, f"could not convert item {index} to a number.")
        self.index = index


class WrongElementTypeError(MarshalingError):
    """Raised when a numpy distance matrix is not of dtype float64."""

    def __init__(self, name: str, dtype: str):
        super().__init__(
            name,
            f"matrix is not a matrix of type Float (dtype is {dtype}).",
            suggestion="Convert the array with array.astype(numpy.float64).",
        )
        self.dtype = dtype


class WrongDimensionalityError(MarshalingError):
    """Raised when a numpy distance matrix is neither 1-D nor 2-D."""

    def __init__(self, name: str, dimensions: int):
        super().__init__(
            name,
            f"matrix has {dimensions} dimensions "
            "(only 1 and 2 dimensional matrices are allowed).",
        )
        self.dimensions = dimensions


class ConstructionFailedError(DecentTreeError):
    """Raised when a tree builder reports failure."""

    def __init__(self, algorithm_name: str):
        super().__init__(
            message=(
                f"Call to constructTreeStringInMemory failed for algorithm "
                f"{algorithm_name}."
            ),
            suggestion="Run with verbosity=1 to see the algorithm's own diagnostics.",
        )
        self.algorithm_name = algorithm_name


class MatrixFileError(DecentTreeError):
    """Raised when a distance matrix file cannot be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Could not read distance matrix '{path}': {reason}",
            suggestion=(
                "Use a square PHYLIP distance file (first line is the taxon count) "
                "or a CSV/TSV with a header row and names in the first column."
            ),
        )
        self.path = path
        self.reason = reason


class InvalidOptionsError(RequestError):
    """Raised when a scalar option has the wrong type."""

    def __init__(self, details: str):
        super().__init__(
            message=f"Invalid construction options: {details}",
            suggestion="number_of_threads, precision and verbosity must be integers.",
        )
        self.details = details
