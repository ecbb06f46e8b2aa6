"""Eigenfinder: eigenpairs of dense complex matrices by the unshifted QR algorithm."""

__version__ = "0.1.0"

from eigenfinder.algorithms.householder import QRResult, decompose
from eigenfinder.algorithms.matrix import Matrix
from eigenfinder.algorithms.qr_algorithm import (
    Eigenpair,
    EigenTrace,
    find_eigenpairs,
    solve,
)
from eigenfinder.algorithms.vector import Orientation, Vector
from eigenfinder.data.solver_config import DEFAULT_CONFIG, SolverConfig, get_config
from eigenfinder.errors import (
    DimensionError,
    EigenfinderError,
    InvalidShapeError,
    MatrixIndexError,
    NullInputError,
)

__all__ = [
    "__version__",
    # Core types
    "Matrix",
    "Vector",
    "Orientation",
    "QRResult",
    "Eigenpair",
    "EigenTrace",
    # Operations
    "decompose",
    "find_eigenpairs",
    "solve",
    # Configuration
    "DEFAULT_CONFIG",
    "SolverConfig",
    "get_config",
    # Errors
    "EigenfinderError",
    "DimensionError",
    "InvalidShapeError",
    "MatrixIndexError",
    "NullInputError",
]
