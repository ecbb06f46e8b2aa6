"""Tests for the dense complex Matrix type."""

import copy

import numpy as np
import pytest

from eigenfinder.algorithms.matrix import (
    Matrix,
    add,
    allclose,
    matrices_equal,
    multiply,
    scale,
    subtract,
    to_scalar,
)
from eigenfinder.errors import (
    DimensionError,
    EigenfinderError,
    InvalidShapeError,
    MatrixIndexError,
    NullInputError,
)


class TestConstruction:
    """Tests for Matrix constructors."""

    def test_zeros_shape_and_values(self) -> None:
        """zeros() should create a zero-filled matrix of the given shape."""
        m = Matrix.zeros(3, 2)
        assert m.shape == (3, 2)
        assert all(m[r, c] == 0 for r in range(3) for c in range(2))

    @pytest.mark.parametrize("rows,cols", [(0, 1), (1, 0), (-1, 3), (2, -5)])
    def test_zeros_non_positive_raises(self, rows: int, cols: int) -> None:
        """Non-positive dimensions should raise DimensionError."""
        with pytest.raises(DimensionError, match="must be positive"):
            Matrix.zeros(rows, cols)

    def test_from_data_real_values_embedded(self) -> None:
        """Real input should get zero imaginary parts."""
        m = Matrix([[1, 2], [3, 4]])
        assert m[1, 0] == 3 + 0j
        assert isinstance(m[1, 0], complex)

    def test_from_data_complex_values(self) -> None:
        """Complex literals should be preserved."""
        m = Matrix([[1 + 2j, -3j]])
        assert m.shape == (1, 2)
        assert m[0, 0] == 1 + 2j
        assert m[0, 1] == -3j

    def test_from_data_none_raises(self) -> None:
        """None data should raise NullInputError."""
        with pytest.raises(NullInputError):
            Matrix(None)  # type: ignore[arg-type]

    def test_from_data_copies_input(self) -> None:
        """The matrix must not alias caller storage."""
        source = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.complex128)
        m = Matrix(source)
        source[0, 0] = 99
        assert m[0, 0] == 1

    @pytest.mark.parametrize(
        "data",
        [[], [[]], [1, 2, 3], [[1, 2], [3]], [[[1]]]],
    )
    def test_from_data_bad_shape_raises(self, data) -> None:
        """Non-2-D, empty or ragged data should raise DimensionError."""
        with pytest.raises(DimensionError):
            Matrix(data)

    def test_identity(self) -> None:
        """identity(n) should be the n×n identity."""
        m = Matrix.identity(4)
        assert m.shape == (4, 4)
        np.testing.assert_array_equal(m.to_numpy(), np.eye(4))

    def test_identity_non_positive_raises(self) -> None:
        """identity(0) should raise DimensionError."""
        with pytest.raises(DimensionError):
            Matrix.identity(0)

    @pytest.mark.parametrize("index", [0, 2, 4])
    def test_identity_basis_vector(self, index: int) -> None:
        """identity(n, i) should be the n×1 basis vector e_i."""
        e = Matrix.identity(5, index)
        assert e.shape == (5, 1)
        for r in range(5):
            assert e[r, 0] == (1 if r == index else 0)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_identity_basis_index_out_of_range(self, index: int) -> None:
        """Out-of-range basis index should raise MatrixIndexError."""
        with pytest.raises(MatrixIndexError):
            Matrix.identity(3, index)

    def test_identity_basis_bad_size_checked_first(self) -> None:
        """Non-positive size should raise DimensionError even with an index."""
        with pytest.raises(DimensionError):
            Matrix.identity(0, 0)


class TestElementAccess:
    """Tests for bounds-checked indexing."""

    @pytest.fixture
    def matrix(self) -> Matrix:
        return Matrix([[1, 2, 3], [4, 5, 6]])

    def test_get_and_set(self, matrix: Matrix) -> None:
        """Assignment should be visible through get()."""
        matrix[1, 2] = 7 - 1j
        assert matrix.get(1, 2) == 7 - 1j
        matrix.set(0, 0, 2.5)
        assert matrix[0, 0] == 2.5

    def test_set_does_not_change_shape(self, matrix: Matrix) -> None:
        """Element mutation never reshapes."""
        matrix[0, 1] = 10
        assert matrix.shape == (2, 3)

    @pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_bounds_get_raises(self, matrix: Matrix, row: int, col: int) -> None:
        """Indices outside [0, rows)×[0, cols) should raise MatrixIndexError."""
        with pytest.raises(MatrixIndexError):
            matrix[row, col]

    def test_out_of_bounds_set_raises(self, matrix: Matrix) -> None:
        """Out-of-bounds assignment should raise MatrixIndexError."""
        with pytest.raises(MatrixIndexError):
            matrix[5, 5] = 1

    def test_index_error_is_builtin_index_error(self, matrix: Matrix) -> None:
        """MatrixIndexError should be catchable as IndexError."""
        with pytest.raises(IndexError):
            matrix.get(9, 9)

    def test_non_pair_key_raises(self, matrix: Matrix) -> None:
        """A single index is not a valid matrix key."""
        with pytest.raises(MatrixIndexError):
            matrix[0]  # type: ignore[index]

    def test_column_extraction(self, matrix: Matrix) -> None:
        """column() should return a copy of the (sub-)column."""
        col = matrix.column(1)
        assert col.shape == (2, 1)
        assert col[1, 0] == 5
        tail = matrix.column(2, start=1)
        assert tail.shape == (1, 1)
        assert tail[0, 0] == 6
        col[0, 0] = 100
        assert matrix[0, 1] == 2

    def test_set_block(self) -> None:
        """set_block() should write a sub-matrix in place."""
        m = Matrix.identity(3)
        m.set_block(1, 1, Matrix([[5, 6], [7, 8]]))
        assert m[1, 1] == 5
        assert m[2, 2] == 8
        assert m[0, 0] == 1

    def test_set_block_overflow_raises(self) -> None:
        """A block that does not fit should raise DimensionError."""
        with pytest.raises(DimensionError):
            Matrix.identity(2).set_block(1, 1, Matrix.identity(2))


class TestArithmetic:
    """Tests for multiply/add/subtract/scale."""

    def test_multiply_known_product(self) -> None:
        """Standard matrix product."""
        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[5, 6], [7, 8]])
        expected = Matrix([[19, 22], [43, 50]])
        assert multiply(a, b) == expected
        assert a.multiply(b) == expected
        assert a @ b == expected

    def test_multiply_rectangular(self) -> None:
        """(2×3)·(3×1) should be 2×1."""
        a = Matrix([[1, 0, 2], [0, 1, 1]])
        b = Matrix([[1], [2], [3]])
        assert (a @ b) == Matrix([[7], [5]])

    def test_multiply_complex(self) -> None:
        """Complex entries multiply without conjugation."""
        a = Matrix([[1j, 0], [0, 1]])
        assert (a @ a) == Matrix([[-1, 0], [0, 1]])

    def test_multiply_dimension_mismatch_raises(self) -> None:
        """left.columns != right.rows should raise DimensionError."""
        with pytest.raises(DimensionError):
            multiply(Matrix.zeros(2, 3), Matrix.zeros(2, 3))

    def test_multiply_none_raises(self) -> None:
        """None operands should raise NullInputError."""
        with pytest.raises(NullInputError):
            multiply(None, Matrix.identity(2))  # type: ignore[arg-type]
        with pytest.raises(NullInputError):
            multiply(Matrix.identity(2), None)  # type: ignore[arg-type]

    def test_scale_is_commutative(self) -> None:
        """s·M == M·s."""
        m = Matrix([[1, -2], [3j, 4]])
        assert (2j * m) == (m * 2j)
        assert scale(2j, m) == m.scale(2j)
        assert (2 * m)[1, 0] == 6j

    def test_scale_with_numpy_scalar(self) -> None:
        """numpy scalars should defer to Matrix scaling."""
        m = Matrix([[1, 2]])
        result = np.float64(3.0) * m
        assert isinstance(result, Matrix)
        assert result == Matrix([[3, 6]])

    def test_scale_none_raises(self) -> None:
        """scale(s, None) should raise NullInputError."""
        with pytest.raises(NullInputError):
            scale(2, None)  # type: ignore[arg-type]

    def test_add_and_subtract(self) -> None:
        """Elementwise sum and difference."""
        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[4, 3], [2, 1]])
        assert add(a, b) == Matrix([[5, 5], [5, 5]])
        assert subtract(a, b) == Matrix([[-3, -1], [1, 3]])
        assert (a + b) - b == a

    @pytest.mark.parametrize("op", [add, subtract])
    def test_shape_mismatch_raises(self, op) -> None:
        """Mismatched shapes must raise, never truncate or pad."""
        with pytest.raises(DimensionError, match="dimensions mismatch"):
            op(Matrix.zeros(2, 2), Matrix.zeros(2, 3))

    @pytest.mark.parametrize("op", [add, subtract])
    def test_none_operand_raises(self, op) -> None:
        """None operands should raise NullInputError."""
        with pytest.raises(NullInputError):
            op(Matrix.zeros(2, 2), None)

    def test_operands_unchanged(self) -> None:
        """Arithmetic returns new matrices without touching its inputs."""
        a = Matrix([[1, 2], [3, 4]])
        snapshot = a.clone()
        _ = a @ a
        _ = a + a
        _ = 3 * a
        assert a == snapshot


class TestTranspose:
    """Tests for plain and conjugate transposes."""

    def test_transpose_shape(self) -> None:
        """An m×n matrix should transpose to n×m."""
        m = Matrix([[1, 2, 3], [4, 5, 6]])
        t = m.transpose()
        assert t.shape == (3, 2)
        assert t[2, 1] == 6

    def test_transpose_does_not_conjugate(self) -> None:
        """transpose() is the plain transpose."""
        m = Matrix([[1 + 1j, 2 - 3j]])
        assert m.transpose()[1, 0] == 2 - 3j
        assert m.T == m.transpose()

    def test_conjugate_transpose(self) -> None:
        """conjugate_transpose() should conjugate every entry."""
        m = Matrix([[1 + 1j, 2 - 3j]])
        h = m.conjugate_transpose()
        assert h[0, 0] == 1 - 1j
        assert h[1, 0] == 2 + 3j
        assert m.H == h

    @pytest.mark.parametrize("shape", [(1, 1), (3, 2), (2, 5), (4, 4)])
    def test_transpose_involution(self, shape: tuple[int, int]) -> None:
        """Transpose(Transpose(A)) == A exactly."""
        rng = np.random.default_rng(0)
        a = Matrix(rng.standard_normal(shape) + 1j * rng.standard_normal(shape))
        assert a.transpose().transpose() == a


class TestToScalar:
    """Tests for 1×1 narrowing."""

    def test_one_by_one(self) -> None:
        """A genuine 1×1 matrix returns its element exactly."""
        m = Matrix([[3 - 4j]])
        assert to_scalar(m) == 3 - 4j
        assert m.to_scalar() == 3 - 4j
        assert complex(m) == 3 - 4j

    @pytest.mark.parametrize("shape", [(1, 2), (2, 1), (2, 2), (3, 5)])
    def test_other_shapes_raise(self, shape: tuple[int, int]) -> None:
        """Anything other than 1×1 raises InvalidShapeError."""
        with pytest.raises(InvalidShapeError, match="must be 1x1"):
            to_scalar(Matrix.zeros(*shape))

    def test_none_raises(self) -> None:
        """to_scalar(None) should raise NullInputError."""
        with pytest.raises(NullInputError):
            to_scalar(None)  # type: ignore[arg-type]

    def test_dot_product_narrowing(self) -> None:
        """xᵀ·x narrows to the sum of squares."""
        x = Matrix([[1], [2], [2]])
        assert to_scalar(x.transpose() @ x) == 9


class TestCloneAndEquality:
    """Tests for deep copies and exact equality."""

    def test_clone_is_independent(self) -> None:
        """Mutating a clone should not touch the original."""
        a = Matrix([[1, 2], [3, 4]])
        b = a.clone()
        b[0, 0] = 10
        assert a[0, 0] == 1
        assert b[0, 0] == 10

    def test_copy_module_returns_independent_copy(self) -> None:
        """copy.copy and copy.deepcopy should both give independent storage."""
        a = Matrix([[1, 2]])
        for b in (copy.copy(a), copy.deepcopy(a)):
            b[0, 1] = 0
            assert a[0, 1] == 2

    def test_equality_exact(self) -> None:
        """Equality compares every element exactly."""
        a = Matrix([[1.0, 2.0]])
        assert a == Matrix([[1, 2]])
        assert a != Matrix([[1.0, 2.0 + 1e-15]])

    def test_equality_requires_same_shape(self) -> None:
        """A row and a column with the same entries are unequal."""
        assert Matrix([[1, 2]]) != Matrix([[1], [2]])

    def test_none_handling(self) -> None:
        """None equals None; None never equals a matrix."""
        a = Matrix.identity(2)
        assert matrices_equal(None, None)
        assert not matrices_equal(a, None)
        assert not matrices_equal(None, a)
        assert matrices_equal(a, a.clone())
        assert (a == None) is False  # noqa: E711

    def test_unhashable(self) -> None:
        """Mutable matrices cannot be hashed."""
        with pytest.raises(TypeError):
            hash(Matrix.identity(1))

    def test_allclose(self) -> None:
        """allclose should respect tolerance and shape."""
        a = Matrix([[1, 2]])
        assert allclose(a, Matrix([[1 + 1e-12, 2]]), 1e-9)
        assert not allclose(a, Matrix([[1.1, 2]]), 1e-9)
        assert not allclose(a, Matrix([[1], [2]]), 1e-9)


class TestNorms:
    """Tests for norm helpers."""

    def test_frobenius_norm(self) -> None:
        """Frobenius norm should include imaginary parts."""
        assert Matrix([[3, 4j]]).frobenius_norm() == pytest.approx(5.0)

    def test_max_below_diagonal(self) -> None:
        """Only entries strictly below the diagonal should count."""
        m = Matrix([[1, 100], [-3j, 2], [0.5, 0]])
        assert m.max_below_diagonal() == pytest.approx(3.0)
        assert not m.is_upper_triangular(1e-9)
        assert Matrix([[1, 2], [0, 3]]).is_upper_triangular(1e-9)

    def test_single_element_is_upper_triangular(self) -> None:
        """A 1×1 matrix has nothing below its diagonal."""
        assert Matrix([[7]]).is_upper_triangular(1e-9)


class TestErrorHierarchy:
    """All errors share a common base class."""

    def test_base_class(self) -> None:
        """Every error should derive from EigenfinderError."""
        for exc in (NullInputError, DimensionError, MatrixIndexError, InvalidShapeError):
            assert issubclass(exc, EigenfinderError)

    def test_builtin_compatibility(self) -> None:
        """Errors should also be the matching built-in exceptions."""
        assert issubclass(NullInputError, TypeError)
        assert issubclass(DimensionError, ValueError)
        assert issubclass(InvalidShapeError, ValueError)
