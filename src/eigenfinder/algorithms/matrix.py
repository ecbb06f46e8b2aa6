"""Dense complex matrix with bounds-checked, value-semantic storage.

Every ``Matrix`` owns a single ``complex128`` buffer. Constructors copy their
input and every arithmetic operation returns a new matrix, so an algorithm that
mutates a matrix in place must work on a :meth:`Matrix.clone` of the caller's
value.

Arithmetic is available as named free functions (``multiply``, ``add``,
``subtract``, ``scale``, ``to_scalar``), as methods, and as operator sugar
(``@``, ``+``, ``-``, scalar ``*``, ``complex()``).

Note:
    :meth:`Matrix.transpose` is the *plain* transpose. Use
    :meth:`Matrix.conjugate_transpose` when the adjoint of a genuinely complex
    matrix is required.
"""

from __future__ import annotations

import numbers
import operator
from typing import TYPE_CHECKING, Any

import numpy as np

from eigenfinder.errors import (
    DimensionError,
    InvalidShapeError,
    MatrixIndexError,
    NullInputError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import ArrayLike, NDArray


class Matrix:
    """Dense rectangular grid of complex numbers.

    Dimensions are fixed at construction; element assignment never reshapes.

    Example:
        >>> A = Matrix([[4, -2], [1, 1]])
        >>> A.shape
        (2, 2)
        >>> (A @ Matrix.identity(2)) == A
        True
    """

    __slots__ = ("_data",)

    # Mutable value type.
    __hash__ = None  # type: ignore[assignment]

    # Make numpy scalars defer to our reflected operators.
    __array_ufunc__ = None

    def __init__(self, data: ArrayLike | Matrix) -> None:
        """Create a matrix from a literal 2-D grid of numbers.

        Args:
            data: Nested sequence or array of real/complex numbers (copied).

        Raises:
            NullInputError: If ``data`` is None.
            DimensionError: If ``data`` is not a non-empty rectangular 2-D grid.
        """
        if data is None:
            raise NullInputError("Matrix data cannot be None")
        if isinstance(data, Matrix):
            data = data._data

        try:
            array = np.array(data, dtype=np.complex128)
        except (TypeError, ValueError) as exc:
            msg = f"Matrix data must be a rectangular grid of numbers: {exc}"
            raise DimensionError(msg) from exc

        if array.ndim != 2:
            msg = f"Matrix data must be 2-D, got {array.ndim}-D"
            raise DimensionError(msg)
        if array.shape[0] == 0 or array.shape[1] == 0:
            msg = f"Matrix dimensions must be positive, got {array.shape[0]}x{array.shape[1]}"
            raise DimensionError(msg)

        self._data: NDArray[np.complex128] = array

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, array: NDArray[np.complex128]) -> Matrix:
        """Adopt an array the caller no longer references (no copy)."""
        matrix = cls.__new__(cls)
        matrix._data = array
        return matrix

    @classmethod
    def zeros(cls, rows: int, columns: int) -> Matrix:
        """Create a zero-filled ``rows``×``columns`` matrix.

        Raises:
            DimensionError: If either dimension is not positive.
        """
        if rows <= 0:
            msg = f"Matrix row count must be positive, got {rows}"
            raise DimensionError(msg)
        if columns <= 0:
            msg = f"Matrix column count must be positive, got {columns}"
            raise DimensionError(msg)
        return cls._wrap(np.zeros((rows, columns), dtype=np.complex128))

    @classmethod
    def identity(cls, size: int, index: int | None = None) -> Matrix:
        """Create the ``size``×``size`` identity, or a standard basis vector.

        Args:
            size: Dimension n.
            index: If given, return the n×1 column with a 1 at ``index``.

        Raises:
            DimensionError: If ``size`` is not positive.
            MatrixIndexError: If ``index`` is outside ``[0, size)``.
        """
        if size <= 0:
            msg = f"Identity size must be positive, got {size}"
            raise DimensionError(msg)

        if index is None:
            return cls._wrap(np.eye(size, dtype=np.complex128))

        if not 0 <= index < size:
            msg = f"Basis index {index} out of range for size {size}"
            raise MatrixIndexError(msg)
        vector = np.zeros((size, 1), dtype=np.complex128)
        vector[index, 0] = 1.0
        return cls._wrap(vector)

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        return int(self._data.shape[0])

    @property
    def column_count(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.row_count, self.column_count)

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    def _check_index(self, row: Any, column: Any) -> tuple[int, int]:
        row = operator.index(row)
        column = operator.index(column)
        if not (0 <= row < self.row_count and 0 <= column < self.column_count):
            msg = (
                f"Index ({row}, {column}) out of bounds for "
                f"{self.row_count}x{self.column_count} matrix"
            )
            raise MatrixIndexError(msg)
        return row, column

    def get(self, row: int, column: int) -> complex:
        """Return element (row, column)."""
        row, column = self._check_index(row, column)
        return complex(self._data[row, column])

    def set(self, row: int, column: int, value: complex) -> None:
        """Assign element (row, column)."""
        if value is None:
            raise NullInputError("Matrix element value cannot be None")
        row, column = self._check_index(row, column)
        self._data[row, column] = value

    def __getitem__(self, key: tuple[int, int]) -> complex:
        if not isinstance(key, tuple) or len(key) != 2:
            raise MatrixIndexError("Matrix index must be a (row, column) pair")
        return self.get(*key)

    def __setitem__(self, key: tuple[int, int], value: complex) -> None:
        if not isinstance(key, tuple) or len(key) != 2:
            raise MatrixIndexError("Matrix index must be a (row, column) pair")
        self.set(key[0], key[1], value)

    def column(self, index: int, start: int = 0) -> Matrix:
        """Return column ``index`` from row ``start`` down, as a column matrix."""
        self._check_index(start, index)
        return Matrix._wrap(self._data[start:, index : index + 1].copy())

    def set_block(self, row: int, column: int, block: Matrix) -> None:
        """Overwrite the sub-matrix whose top-left corner is (row, column)."""
        if block is None:
            raise NullInputError("Block cannot be None")
        self._check_index(row, column)
        end_row = row + block.row_count
        end_column = column + block.column_count
        if end_row > self.row_count or end_column > self.column_count:
            msg = (
                f"{block.row_count}x{block.column_count} block at ({row}, {column}) "
                f"does not fit in {self.row_count}x{self.column_count} matrix"
            )
            raise DimensionError(msg)
        self._data[row:end_row, column:end_column] = block._data

    # ------------------------------------------------------------------
    # Arithmetic (methods delegate to the free functions below)
    # ------------------------------------------------------------------

    def multiply(self, other: Matrix) -> Matrix:
        return multiply(self, other)

    def add(self, other: Matrix) -> Matrix:
        return add(self, other)

    def subtract(self, other: Matrix) -> Matrix:
        return subtract(self, other)

    def scale(self, scalar: complex) -> Matrix:
        return scale(scalar, self)

    def to_scalar(self) -> complex:
        return to_scalar(self)

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return multiply(self, other)

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: object) -> Matrix:
        if isinstance(other, numbers.Number):
            return scale(other, self)  # type: ignore[arg-type]
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __complex__(self) -> complex:
        return to_scalar(self)

    def transpose(self) -> Matrix:
        """Plain transpose (no conjugation)."""
        return Matrix._wrap(self._data.T.copy())

    def conjugate_transpose(self) -> Matrix:
        """Conjugate (Hermitian) transpose."""
        return Matrix._wrap(self._data.conj().T.copy())

    @property
    def T(self) -> Matrix:  # noqa: N802
        return self.transpose()

    @property
    def H(self) -> Matrix:  # noqa: N802
        return self.conjugate_transpose()

    # ------------------------------------------------------------------
    # Copying, comparison, conversion
    # ------------------------------------------------------------------

    def clone(self) -> Matrix:
        """Deep copy with independent storage."""
        return Matrix._wrap(self._data.copy())

    def __copy__(self) -> Matrix:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def to_numpy(self) -> NDArray[np.complex128]:
        """Return a copy of the backing array."""
        return self._data.copy()

    def to_list(self) -> list[list[complex]]:
        return self._data.tolist()

    def __iter__(self) -> Iterator[list[complex]]:
        return iter(self.to_list())

    def frobenius_norm(self) -> float:
        """||A||_F (the 2-norm for a single column or row)."""
        return float(np.linalg.norm(self._data))

    def max_below_diagonal(self) -> float:
        """Largest magnitude among entries strictly below the main diagonal."""
        return float(np.max(np.abs(np.tril(self._data, -1))))

    def is_upper_triangular(self, tolerance: float) -> bool:
        return self.max_below_diagonal() <= tolerance

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def __str__(self) -> str:
        rows = ("\t".join(repr(complex(z)) for z in row) for row in self._data)
        return "\n".join(rows)


# =============================================================================
# FREE FUNCTIONS
# =============================================================================


def _require(matrix: Matrix | None, name: str) -> Matrix:
    if matrix is None:
        raise NullInputError(f"Matrix operand '{name}' cannot be None")
    return matrix


def multiply(left: Matrix, right: Matrix) -> Matrix:
    """Matrix product ``left · right``.

    Raises:
        NullInputError: If either operand is None.
        DimensionError: If ``left.column_count != right.row_count``.
    """
    _require(left, "left")
    _require(right, "right")
    if left.column_count != right.row_count:
        msg = (
            f"Cannot multiply {left.row_count}x{left.column_count} by "
            f"{right.row_count}x{right.column_count} matrix"
        )
        raise DimensionError(msg)
    return Matrix._wrap(left._data @ right._data)


def scale(scalar: complex, matrix: Matrix) -> Matrix:
    """Elementwise scaling ``scalar · matrix`` (commutative)."""
    _require(matrix, "matrix")
    if scalar is None:
        raise NullInputError("Scalar cannot be None")
    return Matrix._wrap(matrix._data * complex(scalar))


def _check_same_shape(left: Matrix, right: Matrix, verb: str) -> None:
    if left.shape != right.shape:
        msg = (
            f"Cannot {verb} {left.row_count}x{left.column_count} and "
            f"{right.row_count}x{right.column_count} matrices: dimensions mismatch"
        )
        raise DimensionError(msg)


def add(left: Matrix, right: Matrix) -> Matrix:
    """Elementwise sum; shapes must match."""
    _require(left, "left")
    _require(right, "right")
    _check_same_shape(left, right, "add")
    return Matrix._wrap(left._data + right._data)


def subtract(left: Matrix, right: Matrix) -> Matrix:
    """Elementwise difference; shapes must match."""
    _require(left, "left")
    _require(right, "right")
    _check_same_shape(left, right, "subtract")
    return Matrix._wrap(left._data - right._data)


def to_scalar(matrix: Matrix) -> complex:
    """Narrow a 1×1 matrix to its single element.

    Raises:
        NullInputError: If ``matrix`` is None.
        InvalidShapeError: If ``matrix`` is not 1×1.
    """
    if matrix is None:
        raise NullInputError("Cannot convert a None matrix to a scalar")
    if matrix.shape != (1, 1):
        msg = (
            "Matrix must be 1x1 to be converted to a scalar. "
            f"Current dimensions: {matrix.row_count}x{matrix.column_count}"
        )
        raise InvalidShapeError(msg)
    return complex(matrix._data[0, 0])


def matrices_equal(left: Matrix | None, right: Matrix | None) -> bool:
    """Exact equality where two Nones are equal and None never equals a matrix."""
    if left is None or right is None:
        return left is None and right is None
    return left == right


def allclose(left: Matrix, right: Matrix, tolerance: float) -> bool:
    """True if shapes match and every element differs by at most ``tolerance``."""
    _require(left, "left")
    _require(right, "right")
    if left.shape != right.shape:
        return False
    return bool(np.all(np.abs(left._data - right._data) <= tolerance))


__all__ = [
    "Matrix",
    "add",
    "allclose",
    "matrices_equal",
    "multiply",
    "scale",
    "subtract",
    "to_scalar",
]
