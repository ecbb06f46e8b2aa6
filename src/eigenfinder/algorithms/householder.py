"""Householder QR decomposition for general (rectangular) complex matrices.

Factors an m×n matrix A into Q (m×m) and upper-triangular R (m×n) with
A = Q·R, zeroing one column below the diagonal per reflection.

Algorithm (column j = 0 … min(m, n) − 1, starting from R = A, Q = I):
    1. x := R[j:m, j]
    2. α := −(x₀/|x₀|)·‖x‖₂   (α := ‖x‖₂ when x₀ = 0)
    3. v := x − α·e₁           (skip column if ‖v‖₂ ≤ ε)
    4. H(v) := I − 2·v·vᵀ / (vᵀ·v)   (skip column if |vᵀ·v| < ε)
    5. R := H·R,  Q := Q·H     with H(v) embedded in the trailing block

The sign of α follows the phase of x₀ so that x − α·e₁ never suffers
cancellation.

By default the reflector uses the plain transpose, which gives an orthogonal Q
and triangular R for real input. ``unitary=True`` switches to conjugate
transposes so that complex input yields a unitary Q.

References:
- Golub & Van Loan: "Matrix Computations" (4th ed.), §5.1-5.2
- Trefethen & Bau: "Numerical Linear Algebra", Lecture 10
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eigenfinder.algorithms.matrix import Matrix, to_scalar
from eigenfinder.algorithms.vector import Vector
from eigenfinder.data.solver_config import DEFAULT_CONFIG
from eigenfinder.errors import NullInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QRResult:
    """Result of a QR decomposition."""

    q: Matrix
    """m×m orthogonal (unitary) factor."""

    r: Matrix
    """m×n upper-triangular factor."""

    reflections: int = 0
    """Number of Householder reflections actually applied."""

    def reconstruct(self) -> Matrix:
        """Return Q·R."""
        return self.q @ self.r


def householder_vector(x: Vector, *, epsilon: float = DEFAULT_CONFIG.epsilon) -> Vector | None:
    """Return v = x − α·e₁, or None if x is already aligned with e₁.

    Args:
        x: Column to be reflected onto a multiple of e₁.
        epsilon: Threshold on ‖v‖₂ below which no reflection is needed.
    """
    norm = x.l2_norm()
    x0 = x[0]
    if x0 == 0:
        alpha = complex(norm)
    else:
        alpha = -(x0 / abs(x0)) * norm

    v = x.subtract(Vector.basis(x.size, 0).scale(alpha))
    if v.l2_norm() <= epsilon:
        return None
    return v


def householder_reflector(
    x: Vector,
    *,
    epsilon: float = DEFAULT_CONFIG.epsilon,
    unitary: bool = False,
) -> Matrix | None:
    """Build the reflector H(v) that maps ``x`` onto a multiple of e₁.

    Returns:
        The size(x)×size(x) reflector, or None when the column needs no
        reflection or the Householder vector is degenerate.
    """
    v = householder_vector(x, epsilon=epsilon)
    if v is None:
        return None

    v_col = v.as_matrix()
    v_adj = v_col.conjugate_transpose() if unitary else v_col.transpose()

    denominator = to_scalar(v_adj @ v_col)
    if abs(denominator) < epsilon:
        return None

    return Matrix.identity(x.size) - (2 / denominator) * (v_col @ v_adj)


def decompose(
    matrix: Matrix,
    *,
    epsilon: float = DEFAULT_CONFIG.epsilon,
    unitary: bool = False,
) -> QRResult:
    """Compute A = Q·R by Householder reflections.

    Args:
        matrix: Any m×n matrix (not modified).
        epsilon: Skip threshold for aligned or degenerate columns.
        unitary: Use conjugate transposes in the reflectors.

    Returns:
        QRResult with Q (m×m) and R (m×n).

    Raises:
        NullInputError: If ``matrix`` is None.

    Example:
        >>> A = Matrix([[12, -51, 4], [6, 167, -68], [-4, 24, -41]])
        >>> qr = decompose(A)
        >>> (qr.reconstruct() - A).frobenius_norm() < 1e-9
        True
    """
    if matrix is None:
        raise NullInputError("Input matrix cannot be None for QR decomposition")

    m, n = matrix.shape
    q = Matrix.identity(m)
    r = matrix.clone()
    reflections = 0

    for j in range(min(m, n)):
        x = Vector.from_column(r, j, start=j)
        h_sub = householder_reflector(x, epsilon=epsilon, unitary=unitary)
        if h_sub is None:
            continue

        h = Matrix.identity(m)
        h.set_block(j, j, h_sub)

        r = h @ r
        q = q @ h
        reflections += 1

    logger.debug(f"QR decomposition of {m}x{n} matrix: {reflections} reflections")

    return QRResult(q=q, r=r, reflections=reflections)


__all__ = [
    "QRResult",
    "decompose",
    "householder_reflector",
    "householder_vector",
]
