"""Row and column vectors built on :class:`Matrix` by composition.

A ``Vector`` owns a one-row or one-column ``Matrix`` together with an
orientation tag. It is not a ``Matrix`` subclass: 1-D indexing and vector
algebra live here, 2-D indexing stays on the wrapped matrix.
"""

from __future__ import annotations

import operator
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from eigenfinder.algorithms.matrix import Matrix, to_scalar
from eigenfinder.errors import (
    DimensionError,
    MatrixIndexError,
    NullInputError,
    ZeroVectorError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import ArrayLike


class Orientation(Enum):
    """Vector layout."""

    COLUMN = "column"  # n×1
    ROW = "row"  # 1×n


class Vector:
    """Complex vector with an explicit row/column orientation.

    Example:
        >>> v = Vector([3, 4])
        >>> v.l2_norm()
        5.0
        >>> v.transpose().orientation
        <Orientation.ROW: 'row'>
    """

    __slots__ = ("_matrix", "_orientation")

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        values: ArrayLike,
        orientation: Orientation = Orientation.COLUMN,
    ) -> None:
        if values is None:
            raise NullInputError("Vector values cannot be None")
        array = np.asarray(values, dtype=np.complex128)
        if array.ndim != 1 or array.size == 0:
            msg = f"Vector values must be a non-empty 1-D sequence, got shape {array.shape}"
            raise DimensionError(msg)

        if orientation is Orientation.COLUMN:
            self._matrix = Matrix(array.reshape(-1, 1))
        else:
            self._matrix = Matrix(array.reshape(1, -1))
        self._orientation = orientation

    @classmethod
    def _wrap(cls, matrix: Matrix, orientation: Orientation) -> Vector:
        vector = cls.__new__(cls)
        vector._matrix = matrix
        vector._orientation = orientation
        return vector

    @classmethod
    def zeros(cls, size: int, orientation: Orientation = Orientation.COLUMN) -> Vector:
        if size <= 0:
            msg = f"Vector size must be positive, got {size}"
            raise DimensionError(msg)
        if orientation is Orientation.COLUMN:
            return cls._wrap(Matrix.zeros(size, 1), orientation)
        return cls._wrap(Matrix.zeros(1, size), orientation)

    @classmethod
    def basis(cls, size: int, index: int) -> Vector:
        """Standard basis column vector e_index of length ``size``."""
        return cls._wrap(Matrix.identity(size, index), Orientation.COLUMN)

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> Vector:
        """Wrap a copy of a 1×n or n×1 matrix (1×1 is treated as a column)."""
        if matrix is None:
            raise NullInputError("Matrix cannot be None")
        if matrix.column_count == 1:
            return cls._wrap(matrix.clone(), Orientation.COLUMN)
        if matrix.row_count == 1:
            return cls._wrap(matrix.clone(), Orientation.ROW)
        msg = (
            "Only a matrix with one row or one column can be wrapped as a vector, "
            f"got {matrix.row_count}x{matrix.column_count}"
        )
        raise DimensionError(msg)

    @classmethod
    def from_column(cls, matrix: Matrix, index: int, start: int = 0) -> Vector:
        """Column ``index`` of ``matrix`` from row ``start`` down."""
        if matrix is None:
            raise NullInputError("Matrix cannot be None")
        return cls._wrap(matrix.column(index, start), Orientation.COLUMN)

    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        if self._orientation is Orientation.COLUMN:
            return self._matrix.row_count
        return self._matrix.column_count

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    def __len__(self) -> int:
        return self.size

    def _position(self, index: int) -> tuple[int, int]:
        index = operator.index(index)
        if not 0 <= index < self.size:
            msg = f"Index {index} out of bounds for vector of size {self.size}"
            raise MatrixIndexError(msg)
        if self._orientation is Orientation.COLUMN:
            return index, 0
        return 0, index

    def __getitem__(self, index: int) -> complex:
        return self._matrix.get(*self._position(index))

    def __setitem__(self, index: int, value: complex) -> None:
        row, column = self._position(index)
        self._matrix.set(row, column, value)

    def __iter__(self) -> Iterator[complex]:
        return (self[i] for i in range(self.size))

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def _check_compatible(self, other: Vector, verb: str) -> None:
        if other is None:
            raise NullInputError("Vector operand cannot be None")
        if self.size != other.size or self._orientation is not other._orientation:
            msg = (
                f"Cannot {verb} {self._orientation.value} vector of size {self.size} "
                f"and {other._orientation.value} vector of size {other.size}"
            )
            raise DimensionError(msg)

    def add(self, other: Vector) -> Vector:
        self._check_compatible(other, "add")
        return Vector._wrap(self._matrix.add(other._matrix), self._orientation)

    def subtract(self, other: Vector) -> Vector:
        self._check_compatible(other, "subtract")
        return Vector._wrap(self._matrix.subtract(other._matrix), self._orientation)

    def scale(self, scalar: complex) -> Vector:
        return Vector._wrap(self._matrix.scale(scalar), self._orientation)

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def dot(self, other: Vector) -> complex:
        """Bilinear product Σ aᵢ·bᵢ (no conjugation); orientations may differ."""
        if other is None:
            raise NullInputError("Vector operand cannot be None")
        if self.size != other.size:
            msg = f"Vectors must have the same size for dot product ({self.size} != {other.size})"
            raise DimensionError(msg)
        return to_scalar(self._as_row() @ other._as_column())

    def l2_norm(self) -> float:
        """√Σ|vᵢ|²."""
        return self._matrix.frobenius_norm()

    def normalize(self) -> Vector:
        norm = self.l2_norm()
        if norm == 0.0:
            raise ZeroVectorError("Cannot normalize a zero vector")
        return self.scale(1.0 / norm)

    def transpose(self) -> Vector:
        flipped = (
            Orientation.ROW
            if self._orientation is Orientation.COLUMN
            else Orientation.COLUMN
        )
        return Vector._wrap(self._matrix.transpose(), flipped)

    def _as_row(self) -> Matrix:
        if self._orientation is Orientation.ROW:
            return self._matrix
        return self._matrix.transpose()

    def _as_column(self) -> Matrix:
        if self._orientation is Orientation.COLUMN:
            return self._matrix
        return self._matrix.transpose()

    def as_matrix(self) -> Matrix:
        """Copy of the backing 1×n / n×1 matrix."""
        return self._matrix.clone()

    def clone(self) -> Vector:
        return Vector._wrap(self._matrix.clone(), self._orientation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._orientation is other._orientation and self._matrix == other._matrix

    def __repr__(self) -> str:
        values = ", ".join(f"{z:.4f}" for z in self)
        return f"Vector([{values}], {self._orientation.value})"


__all__ = ["Orientation", "Vector"]
