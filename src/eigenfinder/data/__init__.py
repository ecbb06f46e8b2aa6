"""Data module for solver configuration and matrix input/output formats."""

from eigenfinder.data.solver_config import (
    DEFAULT_CONFIG,
    Preset,
    SolverConfig,
    get_config,
    list_presets,
)
from eigenfinder.data.formats import (
    complex_to_dict,
    eigenpair_to_dict,
    eigenpairs_to_payload,
    format_complex,
    matrix_from_payload,
    parse_matrix_text,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Preset",
    "SolverConfig",
    "get_config",
    "list_presets",
    "complex_to_dict",
    "eigenpair_to_dict",
    "eigenpairs_to_payload",
    "format_complex",
    "matrix_from_payload",
    "parse_matrix_text",
]
