"""Unshifted QR algorithm for eigenvalues and eigenvectors.

Repeats A_{k+1} = R_k·Q_k, where A_k = Q_k·R_k is the Householder QR
decomposition of the current iterate, until A_k is upper triangular within
tolerance or the iteration cap is reached. Eigenvalues are read from the
diagonal of the terminal iterate, with 2×2 blocks (complex-conjugate pairs of
a real matrix) solved in closed form.

Eigenvectors:
    "schur" (default): the columns of Q_total = Q_0·Q_1·…·Q_k, paired with the
    eigenvalues by position. Only the first column is guaranteed to be an
    eigenvector; the others are Schur vectors. The pairing is kept as-is.

    "inverse_iteration": one eigenvector per eigenvalue, recovered by
    shifted inverse iteration on the input matrix. Opt-in.

Non-convergence is not an error: the last iterate is used and the trace
reports ``converged=False``. Real matrices with complex eigenvalues never zero
their 2×2 sub-diagonal entries, so they always run to the cap.

References:
- Golub & Van Loan: "Matrix Computations" (4th ed.), §7.3-7.6
- Watkins: "Understanding the QR Algorithm", SIAM Review 24 (1982)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from eigenfinder.algorithms.householder import decompose
from eigenfinder.algorithms.matrix import Matrix
from eigenfinder.data.solver_config import DEFAULT_CONFIG, SolverConfig
from eigenfinder.errors import ConfigurationError, DimensionError, NullInputError

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)


EIGENVECTOR_METHODS: tuple[str, ...] = ("schur", "inverse_iteration")
"""Supported eigenvector recovery strategies."""

_INVERSE_ITERATION_STEPS = 10
_INVERSE_ITERATION_SEED = 0
# Relative offsets tried in turn when A − μI is numerically singular.
_SHIFT_OFFSETS = (1e-10, 1e-8, 1e-6, 1e-4)


@dataclass(frozen=True, slots=True)
class Eigenpair:
    """Eigenvalue with its (candidate) eigenvector."""

    eigenvalue: complex
    """Eigenvalue λ."""

    eigenvector: Matrix
    """n×1 column vector."""

    def residual(self, matrix: Matrix) -> float:
        """‖A·v − λ·v‖₂."""
        return (matrix @ self.eigenvector - self.eigenvalue * self.eigenvector).frobenius_norm()


@dataclass(frozen=True, slots=True)
class IterationResult:
    """Result of a single QR step."""

    iteration: int
    """Iteration count after this step."""

    off_diagonal: float
    """Largest sub-diagonal magnitude of the new iterate."""

    algorithm_time: float
    """Time for the step (seconds)."""


class QRAlgorithm:
    """QR-iteration engine holding A_k and the accumulated Q_total.

    Example:
        >>> engine = QRAlgorithm(Matrix([[4, -2], [1, 1]]))
        >>> while engine.should_continue:
        ...     _ = engine.iterate()
        >>> sorted(round(z.real, 6) for z in engine.eigenvalues())
        [2.0, 3.0]
    """

    __slots__ = ("_a_k", "_q_total", "_n", "_iteration", "_config")

    def __init__(self, matrix: Matrix, config: SolverConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            matrix: Square input matrix (cloned; never modified).
            config: Numerical thresholds (defaults to DEFAULT_CONFIG).

        Raises:
            NullInputError: If ``matrix`` is None.
            DimensionError: If ``matrix`` is not square.
        """
        if matrix is None:
            raise NullInputError("Input matrix cannot be None for finding eigenpairs")
        if not matrix.is_square:
            msg = (
                "Input matrix must be square for finding eigenpairs, "
                f"got {matrix.row_count}x{matrix.column_count}"
            )
            raise DimensionError(msg)

        self._config = config if config is not None else DEFAULT_CONFIG
        self._n = matrix.row_count
        self._a_k = matrix.clone()
        self._q_total = Matrix.identity(self._n)
        self._iteration = 0

    def iterate(self) -> IterationResult:
        """Execute one step: A_k = Q_k·R_k, A_{k+1} = R_k·Q_k, Q_total ·= Q_k."""
        start = time.perf_counter()

        qr = decompose(
            self._a_k,
            epsilon=self._config.epsilon,
            unitary=self._config.unitary,
        )
        self._a_k = qr.r @ qr.q
        self._q_total = self._q_total @ qr.q
        self._iteration += 1
        off_diagonal = self._a_k.max_below_diagonal()

        logger.debug(f"QR iteration {self._iteration}: max sub-diagonal {off_diagonal:.3e}")

        return IterationResult(
            iteration=self._iteration,
            off_diagonal=off_diagonal,
            algorithm_time=time.perf_counter() - start,
        )

    @property
    def is_converged(self) -> bool:
        """True if every sub-diagonal entry of A_k is within tolerance."""
        return self._a_k.is_upper_triangular(self._config.tolerance)

    @property
    def should_continue(self) -> bool:
        return self._iteration < self._config.max_iterations and not self.is_converged

    @property
    def iteration(self) -> int:
        return self._iteration

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def current_iterate(self) -> Matrix:
        """Copy of A_k."""
        return self._a_k.clone()

    @property
    def accumulated_q(self) -> Matrix:
        """Copy of Q_total."""
        return self._q_total.clone()

    def eigenvalues(self) -> list[complex]:
        return extract_eigenvalues(self._a_k, self._config.tolerance)

    def schur_vectors(self) -> list[Matrix]:
        """Columns of Q_total in column order."""
        return [self._q_total.column(j) for j in range(self._n)]


def extract_eigenvalues(matrix: Matrix, tolerance: float = DEFAULT_CONFIG.tolerance) -> list[complex]:
    """Read eigenvalues off a (quasi-)upper-triangular matrix.

    Scans the diagonal top to bottom. A sub-diagonal entry above ``tolerance``
    marks a 2×2 block [[a, b], [c, d]] whose eigenvalues are
    (trace ± √(trace² − 4·det)) / 2, using the complex square root.

    Args:
        matrix: Square matrix, typically the terminal QR iterate.
        tolerance: Sub-diagonal magnitude treated as zero.

    Returns:
        n eigenvalues, block roots in (+, −) order.
    """
    if matrix is None:
        raise NullInputError("Matrix cannot be None")
    if not matrix.is_square:
        msg = f"Matrix must be square, got {matrix.row_count}x{matrix.column_count}"
        raise DimensionError(msg)

    n = matrix.row_count
    eigenvalues: list[complex] = []
    i = 0
    while i < n:
        if i + 1 < n and abs(matrix[i + 1, i]) > tolerance:
            a = matrix[i, i]
            b = matrix[i, i + 1]
            c = matrix[i + 1, i]
            d = matrix[i + 1, i + 1]

            trace = a + d
            det = a * d - b * c
            # Adding 0j clears a signed-zero imaginary part so the principal root comes first.
            discriminant = complex(trace * trace - 4 * det) + 0j
            root = complex(np.sqrt(discriminant))

            eigenvalues.append((trace + root) / 2)
            eigenvalues.append((trace - root) / 2)
            i += 2
        else:
            eigenvalues.append(matrix[i, i])
            i += 1

    return eigenvalues


def _shifted_solve(
    a: NDArray[np.complex128],
    eigenvalue: complex,
    x: NDArray[np.complex128],
) -> NDArray[np.complex128] | None:
    """Solve (A − μI)·y = x for μ slightly off the eigenvalue."""
    n = a.shape[0]
    magnitude = max(1.0, abs(eigenvalue))
    for offset in _SHIFT_OFFSETS:
        mu = eigenvalue + offset * magnitude
        try:
            y = np.linalg.solve(a - mu * np.eye(n), x)
        except np.linalg.LinAlgError:
            continue
        if np.all(np.isfinite(y)) and np.linalg.norm(y) > 0:
            return y
    return None


def inverse_iteration(
    matrix: Matrix,
    eigenvalue: complex,
    *,
    tolerance: float = DEFAULT_CONFIG.tolerance,
    max_steps: int = _INVERSE_ITERATION_STEPS,
    seed: int = _INVERSE_ITERATION_SEED,
) -> Matrix:
    """Recover an eigenvector for ``eigenvalue`` by shifted inverse iteration.

    Starts from a seeded random complex vector and repeatedly solves
    (A − μI)·y = x, normalising each step, until ‖A·x − λ·x‖ ≤ tolerance·max(1, |λ|)
    or ``max_steps`` is reached.

    Returns:
        Unit-norm n×1 column whose largest-magnitude entry is real and positive.
    """
    if matrix is None:
        raise NullInputError("Matrix cannot be None")
    if not matrix.is_square:
        msg = f"Matrix must be square, got {matrix.row_count}x{matrix.column_count}"
        raise DimensionError(msg)

    a = matrix.to_numpy()
    n = a.shape[0]
    magnitude = max(1.0, abs(eigenvalue))

    rng = np.random.default_rng(seed)
    x = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    x /= np.linalg.norm(x)

    for _ in range(max_steps):
        y = _shifted_solve(a, eigenvalue, x)
        if y is None:
            logger.warning(f"Inverse iteration could not solve the shifted system for λ={eigenvalue}")
            break
        x = y / np.linalg.norm(y)
        if np.linalg.norm(a @ x - eigenvalue * x) <= tolerance * magnitude:
            break

    pivot = x[int(np.argmax(np.abs(x)))]
    x = x * (np.conj(pivot) / abs(pivot))
    return Matrix(x.reshape(n, 1))


@dataclass(frozen=True, slots=True)
class EigenTrace:
    """Complete trace of a QR-algorithm run."""

    eigenpairs: tuple[Eigenpair, ...]
    """Eigenpairs in extraction order."""

    iterations: int
    """Number of QR steps performed."""

    converged: bool
    """Whether A_k became upper triangular within tolerance."""

    final_off_diagonal: float
    """Largest sub-diagonal magnitude of the terminal iterate."""

    total_time: float
    """Total execution time (seconds)."""

    eigenvector_method: str
    """Eigenvector strategy used."""

    history: tuple[dict[str, Any], ...]
    """Per-iteration metrics."""

    @property
    def eigenvalues(self) -> list[complex]:
        return [pair.eigenvalue for pair in self.eigenpairs]

    @property
    def eigenvectors(self) -> list[Matrix]:
        return [pair.eigenvector for pair in self.eigenpairs]


def solve(
    matrix: Matrix,
    config: SolverConfig | None = None,
    *,
    eigenvector_method: str = "schur",
) -> EigenTrace:
    """Run the QR algorithm to convergence or the iteration cap.

    Args:
        matrix: Square input matrix.
        config: Numerical thresholds (defaults to DEFAULT_CONFIG).
        eigenvector_method: "schur" or "inverse_iteration".

    Returns:
        EigenTrace with eigenpairs and execution history.

    Raises:
        NullInputError: If ``matrix`` is None.
        DimensionError: If ``matrix`` is not square.
        ConfigurationError: If ``eigenvector_method`` is unknown.
    """
    if eigenvector_method not in EIGENVECTOR_METHODS:
        msg = (
            f"Unknown eigenvector_method: {eigenvector_method!r}. "
            f"Valid: {list(EIGENVECTOR_METHODS)}"
        )
        raise ConfigurationError(msg)

    engine = QRAlgorithm(matrix, config)
    cfg = engine.config

    history: list[dict[str, Any]] = []
    start_time = time.perf_counter()

    while engine.should_continue:
        result = engine.iterate()
        history.append(
            {
                "iteration": result.iteration,
                "off_diagonal": result.off_diagonal,
                "algorithm_time": result.algorithm_time,
            }
        )

    converged = engine.is_converged
    final_off_diagonal = engine.current_iterate.max_below_diagonal()
    if not converged:
        logger.warning(
            f"QR algorithm stopped after {engine.iteration} iterations without "
            f"converging (max sub-diagonal {final_off_diagonal:.3e} > {cfg.tolerance:.1e})"
        )

    eigenvalues = engine.eigenvalues()
    if eigenvector_method == "schur":
        eigenvectors = engine.schur_vectors()
    else:
        eigenvectors = [
            inverse_iteration(matrix, value, tolerance=cfg.tolerance) for value in eigenvalues
        ]

    eigenpairs = tuple(
        Eigenpair(eigenvalue=value, eigenvector=vector)
        for value, vector in zip(eigenvalues, eigenvectors, strict=True)
    )
    total_time = time.perf_counter() - start_time

    logger.info(
        f"QR algorithm finished: n={matrix.row_count}, iterations={engine.iteration}, "
        f"converged={converged}"
    )

    return EigenTrace(
        eigenpairs=eigenpairs,
        iterations=engine.iteration,
        converged=converged,
        final_off_diagonal=final_off_diagonal,
        total_time=total_time,
        eigenvector_method=eigenvector_method,
        history=tuple(history),
    )


def find_eigenpairs(
    matrix: Matrix,
    config: SolverConfig | None = None,
    *,
    eigenvector_method: str = "schur",
) -> list[Eigenpair]:
    """Eigenpairs of a square matrix (see :func:`solve` for the full trace)."""
    return list(solve(matrix, config, eigenvector_method=eigenvector_method).eigenpairs)


__all__ = [
    "EIGENVECTOR_METHODS",
    "EigenTrace",
    "Eigenpair",
    "IterationResult",
    "QRAlgorithm",
    "extract_eigenvalues",
    "find_eigenpairs",
    "inverse_iteration",
    "solve",
]
