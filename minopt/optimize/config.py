"""Validated configuration for the solvers.

Values are checked when they are supplied: constructing an
:class:`AdamConfig` (or replacing one of its fields) with an out-of-range value
raises :class:`~minopt.exceptions.InvalidConfigurationError` immediately.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np

from minopt.exceptions import InvalidConfigurationError

# Maps the 1-based iteration index to a step size.
StepSizeSchedule = Callable[[int], float]


def constant_schedule(alpha: float) -> StepSizeSchedule:
    """Return a schedule yielding ``alpha`` at every iteration."""

    def schedule(_: int) -> float:
        return alpha

    return schedule


def inverse_sqrt_schedule(alpha0: float) -> StepSizeSchedule:
    """Return the schedule ``alpha0 / sqrt(k)``."""

    def schedule(k: int) -> float:
        return alpha0 / math.sqrt(k)

    return schedule


def check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidConfigurationError(
            f"{name} must be a positive integer, got {value!r}."
        )


def check_positive(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}.")
    if not value > 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value!r}.")


def check_open_unit_interval(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}.")
    if not 0.0 < value < 1.0:
        raise InvalidConfigurationError(
            f"{name} must lie in the open interval (0, 1), got {value!r}."
        )


def default_internal_epsilon(dtype: Any = np.float64) -> float:
    """Square root of the machine epsilon of ``dtype``."""
    return float(np.sqrt(np.finfo(dtype).eps))


@dataclass(frozen=True)
class AdamConfig:
    """
    Configuration for :func:`minopt.optimize.adam`.

    Args:
        max_iterations: Iteration cap. At most ``max_iterations - 1`` update
            steps are taken. Must be a positive integer. Defaults to 100.
        alpha_schedule: Step size as a function of the 1-based iteration
            index. Defaults to a constant 0.01.
        beta_1: First-moment decay, in (0, 1). Defaults to 0.9.
        beta_2: Second-moment decay, in (0, 1). Defaults to 0.999.
        absolute_epsilon: The solver stops once the gradient norm falls below
            this value. Must be positive. Defaults to 1e-6.
        verbose: Report progress every 10 iterations, not only at
            convergence. Defaults to False.
        internal_epsilon: Denominator regularizer, in (0, 1). None means the
            square root of the machine epsilon of the iterate's dtype.
    """

    max_iterations: int = 100
    alpha_schedule: StepSizeSchedule = field(default_factory=lambda: constant_schedule(0.01))
    beta_1: float = 0.9
    beta_2: float = 0.999
    absolute_epsilon: float = 1e-6
    verbose: bool = False
    internal_epsilon: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate AdamConfig invariants."""
        check_positive_int("max_iterations", self.max_iterations)
        if not callable(self.alpha_schedule):
            raise InvalidConfigurationError("alpha_schedule must be callable.")
        check_open_unit_interval("beta_1", self.beta_1)
        check_open_unit_interval("beta_2", self.beta_2)
        check_positive("absolute_epsilon", self.absolute_epsilon)
        if not isinstance(self.verbose, (bool, np.bool_)):
            raise InvalidConfigurationError(
                f"verbose must be a bool, got {self.verbose!r}."
            )
        if self.internal_epsilon is not None:
            check_open_unit_interval("internal_epsilon", self.internal_epsilon)

    def resolve_internal_epsilon(self, dtype: Any) -> float:
        if self.internal_epsilon is not None:
            return float(self.internal_epsilon)
        return default_internal_epsilon(dtype)


def configure_adam(config: Optional[AdamConfig] = None, **overrides: Any) -> AdamConfig:
    """Return ``config`` (or the defaults) with ``overrides`` applied.

    Raises:
        InvalidConfigurationError: If an override names an unknown option or
            holds an out-of-range value.
    """
    if config is None:
        config = AdamConfig()
    if not overrides:
        return config
    known = {f.name for f in dataclasses.fields(AdamConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown Adam option(s) {unknown}. Supported options: {sorted(known)}"
        )
    return dataclasses.replace(config, **overrides)


__all__ = [
    "AdamConfig",
    "StepSizeSchedule",
    "check_open_unit_interval",
    "check_positive",
    "check_positive_int",
    "configure_adam",
    "constant_schedule",
    "default_internal_epsilon",
    "inverse_sqrt_schedule",
]
