"""Exception hierarchy for eigenfinder.

Every error raised by the library derives from :class:`EigenfinderError` and
from the closest built-in exception, so callers can catch either
``DimensionError`` or plain ``ValueError``.

Non-convergence of the QR algorithm is deliberately absent: iteration
exhaustion yields a result with ``converged=False``, never an exception.
"""


class EigenfinderError(Exception):
    """Base class for all eigenfinder errors."""


class NullInputError(EigenfinderError, TypeError):
    """A required matrix, operand or data argument was ``None``."""


class DimensionError(EigenfinderError, ValueError):
    """Non-positive dimensions or incompatible operand shapes."""


class MatrixIndexError(EigenfinderError, IndexError):
    """Element or basis-vector index outside the matrix bounds."""


class InvalidShapeError(EigenfinderError, ValueError):
    """Matrix cannot be narrowed to a scalar (not 1×1)."""


class ZeroVectorError(EigenfinderError, ValueError):
    """Operation undefined for the zero vector (e.g. normalisation)."""


class ConfigurationError(EigenfinderError, ValueError):
    """Invalid solver configuration or unknown preset name."""


class MatrixFormatError(EigenfinderError, ValueError):
    """Malformed textual or JSON matrix input."""


__all__ = [
    "EigenfinderError",
    "NullInputError",
    "DimensionError",
    "MatrixIndexError",
    "InvalidShapeError",
    "ZeroVectorError",
    "ConfigurationError",
    "MatrixFormatError",
]
