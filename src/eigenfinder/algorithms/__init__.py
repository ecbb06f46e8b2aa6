"""Numerical algorithms module.

This module contains implementations of:
- Dense complex matrix and vector types
- Householder QR decomposition
- Unshifted QR algorithm for eigenpairs
- Matrix generation utilities with known spectra
"""

from eigenfinder.algorithms.householder import (
    QRResult,
    decompose,
    householder_reflector,
    householder_vector,
)
from eigenfinder.algorithms.matrices import (
    DEFAULT_SEED,
    EXPERIMENT_KINDS,
    ExperimentSetup,
    MatrixFingerprint,
    compute_fingerprint,
    create_diagonal_matrix,
    create_experiment,
    create_known_spectrum_matrix,
    create_random_matrix,
    create_rotation_block_matrix,
)
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
from eigenfinder.algorithms.qr_algorithm import (
    EIGENVECTOR_METHODS,
    EigenTrace,
    Eigenpair,
    IterationResult,
    QRAlgorithm,
    extract_eigenvalues,
    find_eigenpairs,
    inverse_iteration,
    solve,
)
from eigenfinder.algorithms.vector import Orientation, Vector

__all__ = [
    # Matrix core
    "Matrix",
    "add",
    "allclose",
    "matrices_equal",
    "multiply",
    "scale",
    "subtract",
    "to_scalar",
    "Orientation",
    "Vector",
    # Householder QR
    "QRResult",
    "decompose",
    "householder_reflector",
    "householder_vector",
    # QR algorithm
    "EIGENVECTOR_METHODS",
    "EigenTrace",
    "Eigenpair",
    "IterationResult",
    "QRAlgorithm",
    "extract_eigenvalues",
    "find_eigenpairs",
    "inverse_iteration",
    "solve",
    # Matrix generation
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
