"""Function and DifferentiableFunction wrappers consumed by the solvers."""

from .core import (
    DifferentiableFunction,
    DifferentiableStrategy,
    EvaluationCounter,
    EvaluationStrategy,
    Function,
)
from .finite_difference import approx_derivative

__all__ = [
    "DifferentiableFunction",
    "DifferentiableStrategy",
    "EvaluationCounter",
    "EvaluationStrategy",
    "Function",
    "approx_derivative",
]
