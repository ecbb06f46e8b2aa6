"""
Solver Configuration - Single Source of Truth

This module defines the numerical thresholds used by the Householder QR
decomposition and the QR-algorithm eigensolver. Thresholds are passed to the
algorithms explicitly so that tests can exercise different numerical regimes
deterministically.

References:
    - Golub & Van Loan: "Matrix Computations" (4th ed.), Sections 5.1 and 7.3
    - Higham: "Accuracy and Stability of Numerical Algorithms" (2nd ed.)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from eigenfinder.errors import ConfigurationError


class Preset(Enum):
    """Named numerical regimes."""

    DEFAULT = "default"
    STRICT = "strict"
    LOOSE = "loose"


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Thresholds for decomposition and eigenvalue iteration."""

    epsilon: float = 1e-9
    """Householder skip threshold for aligned or degenerate columns."""

    tolerance: float = 1e-9
    """Sub-diagonal magnitude treated as zero (convergence and 2×2 blocks)."""

    max_iterations: int = 500
    """Iteration cap for the QR algorithm."""

    unitary: bool = False
    """Use conjugate transposes in the reflectors (unitary Q for complex input)."""

    def __post_init__(self) -> None:
        if not self.epsilon > 0:
            msg = f"epsilon must be positive, got {self.epsilon}"
            raise ConfigurationError(msg)
        if not self.tolerance > 0:
            msg = f"tolerance must be positive, got {self.tolerance}"
            raise ConfigurationError(msg)
        if isinstance(self.max_iterations, bool) or not isinstance(
            self.max_iterations, int
        ):
            msg = f"max_iterations must be an integer, got {self.max_iterations!r}"
            raise ConfigurationError(msg)
        if self.max_iterations < 0:
            msg = f"max_iterations must be non-negative, got {self.max_iterations}"
            raise ConfigurationError(msg)

    def with_overrides(self, **overrides: Any) -> "SolverConfig":
        """Return a copy with the given fields replaced (``None`` values ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            msg = f"Unknown configuration fields: {sorted(unknown)}"
            raise ConfigurationError(msg)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "epsilon": self.epsilon,
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
            "unitary": self.unitary,
        }


# =============================================================================
# PRESETS
# =============================================================================
# "default": ε = tolerance = 1e-9, 500 steps.
# "strict" tightens both thresholds towards FP64 round-off and allows more
# iterations; "loose" is meant for quick looks at slowly converging inputs.

_PRESETS: dict[Preset, SolverConfig] = {
    Preset.DEFAULT: SolverConfig(epsilon=1e-9, tolerance=1e-9, max_iterations=500),
    Preset.STRICT: SolverConfig(epsilon=1e-12, tolerance=1e-12, max_iterations=2000),
    Preset.LOOSE: SolverConfig(epsilon=1e-6, tolerance=1e-6, max_iterations=200),
}


# =============================================================================
# PUBLIC API
# =============================================================================


def get_config(preset: Preset | str = Preset.DEFAULT) -> SolverConfig:
    """
    Get the solver configuration for a named preset.

    Args:
        preset: Preset (enum or string like 'default', 'STRICT')

    Returns:
        SolverConfig for the preset

    Raises:
        ConfigurationError: If the preset is unknown

    Example:
        >>> get_config("strict").tolerance
        1e-12
    """
    if isinstance(preset, str):
        preset = _parse_preset(preset)
    return _PRESETS[preset]


def list_presets() -> list[Preset]:
    """List all available presets."""
    return list(_PRESETS)


DEFAULT_CONFIG: SolverConfig = _PRESETS[Preset.DEFAULT]
"""Configuration used when callers pass none."""


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _parse_preset(name: str) -> Preset:
    """Parse a string into a Preset enum."""
    normalized = name.strip().lower()

    for preset in Preset:
        if preset.value == normalized:
            return preset

    valid = [p.value for p in Preset]
    raise ConfigurationError(f"Unknown preset: '{name}'. Valid: {valid}")
