"""Matrix generation utilities for eigenvalue experiments.

This module provides functions for creating matrices with known eigenvalues,
used to check the QR algorithm against ground truth.

Key Features:
- Reproducible matrix generation with seed control
- Diagonal, similarity-transformed and rotation-block spectra
- Matrix fingerprinting for experiment verification

References:
- Golub & Van Loan: "Matrix Computations" (4th ed.), Section 7.1
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from eigenfinder.algorithms.matrix import Matrix

if TYPE_CHECKING:
    from numpy.typing import NDArray


DEFAULT_SEED: int = 42
"""Default random seed for reproducible experiments."""

EXPERIMENT_KINDS: tuple[str, ...] = ("diagonal", "known", "rotation")


@dataclass(frozen=True, slots=True)
class MatrixFingerprint:
    """Fingerprint for matrix identification and verification.

    Used to verify that different experiments use identical matrices.
    """

    eigenvalue_signature: tuple[complex, ...]
    """Reference eigenvalues sorted by descending magnitude."""

    matrix_size: int
    """Matrix dimension n."""

    frobenius_norm: float
    """||A||_F for additional verification."""

    seed: int
    """Random seed used for generation."""

    kind: str
    """Matrix type: 'diagonal', 'known' or 'rotation'."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "eigenvalue_signature": [
                {"real": z.real, "imaginary": z.imag} for z in self.eigenvalue_signature
            ],
            "matrix_size": self.matrix_size,
            "frobenius_norm": self.frobenius_norm,
            "random_seed": self.seed,
            "kind": self.kind,
        }


def create_diagonal_matrix(values: Sequence[complex]) -> Matrix:
    """Create diag(values); its eigenvalues are exactly ``values``."""
    return Matrix(np.diag(np.asarray(values, dtype=np.complex128)))


def _random_orthogonal(n: int, rng: np.random.Generator) -> NDArray[np.float64]:
    q, _ = np.linalg.qr(rng.standard_normal((n, n)))
    return q


def create_known_spectrum_matrix(
    eigenvalues: Sequence[float],
    *,
    seed: int | None = None,
) -> Matrix:
    """Create a non-symmetric matrix with the given eigenvalues.

    Mathematical Construction:
        S = U @ diag(σ) @ V  with U, V random orthogonal, σ ∈ [1, 2]
        A = S @ diag(λ) @ S⁻¹

    The singular values of S are bounded so that κ(S) ≤ 2 and the spectrum
    survives round-off.

    Args:
        eigenvalues: Desired eigenvalues.
        seed: Random seed for reproducibility.

    Returns:
        n×n matrix (real if the eigenvalues are real).
    """
    rng = np.random.default_rng(seed)
    n = len(eigenvalues)

    u = _random_orthogonal(n, rng)
    v = _random_orthogonal(n, rng)
    s = u @ np.diag(np.linspace(1.0, 2.0, n)) @ v

    a = s @ np.diag(np.asarray(eigenvalues)) @ np.linalg.inv(s)
    return Matrix(a)


def create_rotation_block_matrix(angle: float, scale: float = 1.0) -> Matrix:
    """Create the real 2×2 matrix scale·[[cos θ, −sin θ], [sin θ, cos θ]].

    Its eigenvalues are the conjugate pair scale·e^{±iθ}.
    """
    c, s = np.cos(angle), np.sin(angle)
    return Matrix([[scale * c, -scale * s], [scale * s, scale * c]])


def create_random_matrix(
    rows: int,
    columns: int,
    *,
    seed: int | None = None,
    complex_entries: bool = False,
) -> Matrix:
    """Create a matrix with entries uniform in [−50, 50) (both parts if complex)."""
    rng = np.random.default_rng(seed)
    data = rng.uniform(-50.0, 50.0, (rows, columns))
    if complex_entries:
        data = data + 1j * rng.uniform(-50.0, 50.0, (rows, columns))
    return Matrix(data)


def compute_fingerprint(
    matrix: Matrix,
    *,
    seed: int = DEFAULT_SEED,
    kind: str = "unknown",
) -> MatrixFingerprint:
    """Compute fingerprint for matrix identification.

    Args:
        matrix: Square input matrix.
        seed: Random seed used for generation.
        kind: Matrix type identifier.

    Returns:
        MatrixFingerprint for verification.
    """
    eigenvalues = np.linalg.eigvals(matrix.to_numpy())
    order = np.argsort(-np.abs(eigenvalues), kind="stable")

    return MatrixFingerprint(
        eigenvalue_signature=tuple(complex(z) for z in eigenvalues[order]),
        matrix_size=matrix.row_count,
        frobenius_norm=matrix.frobenius_norm(),
        seed=seed,
        kind=kind,
    )


@dataclass(frozen=True, slots=True)
class ExperimentSetup:
    """Container for an experiment matrix with metadata."""

    matrix: Matrix
    """The n×n input matrix."""

    fingerprint: MatrixFingerprint
    """Matrix fingerprint for verification."""

    true_eigenvalues: tuple[complex, ...]
    """Eigenvalues used to construct the matrix (ground truth)."""


def create_experiment(
    n: int,
    *,
    kind: str = "known",
    seed: int = DEFAULT_SEED,
) -> ExperimentSetup:
    """Create a matrix with known eigenvalues and full metadata.

    Args:
        n: Matrix dimension (``rotation`` always produces 2×2).
        kind: "diagonal", "known" (similarity transform) or "rotation".
        seed: Random seed (default: 42 for reproducibility).

    Returns:
        ExperimentSetup with matrix, fingerprint and ground-truth eigenvalues.

    Example:
        >>> setup = create_experiment(4, kind="known")
        >>> setup.true_eigenvalues
        ((4+0j), (3+0j), (2+0j), (1+0j))
    """
    rng = np.random.default_rng(seed)

    if kind == "diagonal":
        values = rng.uniform(-50.0, 50.0, n)
        matrix = create_diagonal_matrix(values)
        true_eigenvalues = tuple(complex(v) for v in values)
    elif kind == "known":
        # Distinct magnitudes so the unshifted iteration separates them.
        values = np.arange(n, 0, -1, dtype=np.float64)
        matrix = create_known_spectrum_matrix(values, seed=seed)
        true_eigenvalues = tuple(complex(v) for v in values)
    elif kind == "rotation":
        angle = float(rng.uniform(0.1, np.pi - 0.1))
        matrix = create_rotation_block_matrix(angle)
        true_eigenvalues = (complex(np.exp(1j * angle)), complex(np.exp(-1j * angle)))
    else:
        msg = f"Unknown kind: {kind}. Valid: {list(EXPERIMENT_KINDS)}"
        raise ValueError(msg)

    fingerprint = compute_fingerprint(matrix, seed=seed, kind=kind)

    return ExperimentSetup(
        matrix=matrix,
        fingerprint=fingerprint,
        true_eigenvalues=true_eigenvalues,
    )


__all__ = [
    "DEFAULT_SEED",
    "EXPERIMENT_KINDS",
    "ExperimentSetup",
    "MatrixFingerprint",
    "compute_fingerprint",
    "create_diagonal_matrix",
    "create_experiment",
    "create_known_spectrum_matrix",
    "create_random_matrix",
    "create_rotation_block_matrix",
]
