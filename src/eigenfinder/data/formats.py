"""
Matrix input parsing and eigenpair serialization.

Textual matrices use the format accepted by the web front end:

    rows separated by ';' or newlines, elements by whitespace or commas
    e.g. "4 -2; 1 1"  or  "4,-2\\n1,1"

JSON payloads follow the eigenvalue API:

    request:  {"matrix": [[4, -2], [1, 1]]}
    response: {"eigenpairs": [{"eigenvalue": {"real": 3.0, "imaginary": 0.0},
                               "eigenvector": [{"real": ..., "imaginary": ...}, ...]},
                              ...]}
"""

from __future__ import annotations

import cmath
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from eigenfinder.algorithms.matrix import Matrix
from eigenfinder.errors import DimensionError, MatrixFormatError, NullInputError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from eigenfinder.algorithms.qr_algorithm import Eigenpair

_ROW_SEPARATOR = re.compile(r"[;\n]+")
_ELEMENT_SEPARATOR = re.compile(r"[\s,]+")


# =============================================================================
# PARSING
# =============================================================================


def _parse_number(token: str, row: int) -> complex:
    try:
        value = complex(float(token))
    except ValueError:
        try:
            value = complex(token)
        except ValueError:
            value = None

    if value is None or not cmath.isfinite(value):
        msg = f'Value "{token}" in row {row} is not a valid number.'
        raise MatrixFormatError(msg)
    return value


def parse_matrix_text(text: str, *, square: bool = True) -> Matrix:
    """
    Parse a matrix from its textual form.

    Args:
        text: Rows separated by ';' or newlines, elements by whitespace or commas.
            Elements are real numbers or Python complex literals such as ``1+2j``.
        square: Require as many rows as columns (the eigensolver input form).

    Returns:
        The parsed Matrix

    Raises:
        NullInputError: If ``text`` is None
        MatrixFormatError: If the text is empty, contains a non-number, is not
            rectangular, or (with ``square``) is not square

    Example:
        >>> parse_matrix_text("4 -2; 1 1").shape
        (2, 2)
    """
    if text is None:
        raise NullInputError("Matrix text cannot be None")

    stripped = text.strip()
    if not stripped:
        raise MatrixFormatError("Matrix is empty.")

    rows = [row.strip() for row in _ROW_SEPARATOR.split(stripped)]
    rows = [row for row in rows if row]
    if not rows:
        raise MatrixFormatError("Matrix is empty or contains only delimiters.")

    grid: list[list[complex]] = []
    expected_columns = -1
    for i, row in enumerate(rows, start=1):
        tokens = [token for token in _ELEMENT_SEPARATOR.split(row) if token]
        if not tokens:
            raise MatrixFormatError(f"Row {i} is empty.")

        values = [_parse_number(token, i) for token in tokens]

        if expected_columns == -1:
            expected_columns = len(values)
        elif len(values) != expected_columns:
            msg = (
                f"Row {i} has {len(values)} elements, but expected {expected_columns}. "
                "Matrix is not rectangular."
            )
            raise MatrixFormatError(msg)
        grid.append(values)

    if square and len(grid) != expected_columns:
        msg = f"Matrix is {len(grid)}x{expected_columns}. It must be a square matrix (N x N)."
        raise MatrixFormatError(msg)

    return Matrix(grid)


def matrix_from_payload(payload: Mapping[str, Any] | None) -> Matrix:
    """
    Build a Matrix from an API request body ``{"matrix": number[][]}``.

    Raises:
        NullInputError: If the payload or its ``matrix`` entry is missing/null
        MatrixFormatError: If the body is not a mapping, or ``matrix`` is not a
            non-empty rectangular grid of numbers
    """
    if payload is None:
        raise NullInputError("Request body must contain a 'matrix' entry")
    if not isinstance(payload, Mapping):
        msg = f"Request body must be a JSON object, got {type(payload).__name__}"
        raise MatrixFormatError(msg)
    if payload.get("matrix") is None:
        raise NullInputError("Request body must contain a 'matrix' entry")

    try:
        return Matrix(payload["matrix"])
    except DimensionError as exc:
        raise MatrixFormatError(str(exc)) from exc


# =============================================================================
# SERIALIZATION
# =============================================================================


def complex_to_dict(value: complex) -> dict[str, float]:
    """Convert a complex number to ``{"real": ..., "imaginary": ...}``."""
    value = complex(value)
    return {"real": value.real, "imaginary": value.imag}


def eigenpair_to_dict(pair: Eigenpair) -> dict[str, Any]:
    vector = pair.eigenvector
    return {
        "eigenvalue": complex_to_dict(pair.eigenvalue),
        "eigenvector": [complex_to_dict(vector[i, 0]) for i in range(vector.row_count)],
    }


def eigenpairs_to_payload(pairs: Iterable[Eigenpair]) -> dict[str, Any]:
    """Build the API response body for a list of eigenpairs."""
    return {"eigenpairs": [eigenpair_to_dict(pair) for pair in pairs]}


def format_complex(value: complex, digits: int = 4) -> str:
    """
    Format a complex number for display.

    Returns ``a`` when the imaginary part rounds to zero, ``bi`` when the real
    part does, otherwise ``a + bi`` / ``a - bi``.

    Example:
        >>> format_complex(3 - 2j)
        '3.0000 - 2.0000i'
    """
    value = complex(value)
    real = f"{value.real:.{digits}f}"
    imaginary = f"{value.imag:.{digits}f}"
    zero = f"{0:.{digits}f}"

    if imaginary.lstrip("-") == zero:
        return real
    if real.lstrip("-") == zero:
        return f"{imaginary}i"
    if imaginary.startswith("-"):
        return f"{real} - {imaginary[1:]}i"
    return f"{real} + {imaginary}i"


__all__ = [
    "complex_to_dict",
    "eigenpair_to_dict",
    "eigenpairs_to_payload",
    "format_complex",
    "matrix_from_payload",
    "parse_matrix_text",
]
