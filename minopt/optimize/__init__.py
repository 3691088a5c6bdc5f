"""Iterative solvers built on the Function abstractions.

Example
-------
>>> from minopt import DifferentiableFunction
>>> from minopt.objectives import square_root
>>> from minopt.optimize import newton, steffensen
>>> f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
>>> f.start_counting()
>>> res = newton(f, 2.0)
>>> round(res.x, 12), f.value_count, f.derivative_count
(1.414213562373, 5, 5)
"""

from .adam import adam
from .config import (
    AdamConfig,
    StepSizeSchedule,
    configure_adam,
    constant_schedule,
    default_internal_epsilon,
    inverse_sqrt_schedule,
)
from .core import Callback, IterationRecord, OptimizeResult
from .root_finding import ROOT_MAXITER, ROOT_TOL, newton, steffensen

__all__ = [
    "AdamConfig",
    "Callback",
    "IterationRecord",
    "OptimizeResult",
    "ROOT_MAXITER",
    "ROOT_TOL",
    "StepSizeSchedule",
    "adam",
    "configure_adam",
    "constant_schedule",
    "default_internal_epsilon",
    "inverse_sqrt_schedule",
    "newton",
    "steffensen",
]
