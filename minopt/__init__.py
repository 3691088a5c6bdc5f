"""minopt - a minimal numerical-optimization toolkit.

Function wrappers with evaluation counting, Newton and Steffensen scalar root
finders, and the Adam minimizer.
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidConfigurationError,
    MinoptError,
    PreconditionViolationError,
    SingularDerivativeError,
)
from .function import (
    DifferentiableFunction,
    EvaluationCounter,
    Function,
    approx_derivative,
)
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    AdamConfig,
    IterationRecord,
    OptimizeResult,
    adam,
    configure_adam,
    constant_schedule,
    inverse_sqrt_schedule,
    newton,
    steffensen,
)

__all__ = [
    "AdamConfig",
    "DifferentiableFunction",
    "EvaluationCounter",
    "Function",
    "InvalidConfigurationError",
    "IterationRecord",
    "MinoptError",
    "OptimizeResult",
    "PreconditionViolationError",
    "SingularDerivativeError",
    "adam",
    "approx_derivative",
    "configure_adam",
    "configure_logging",
    "constant_schedule",
    "get_logger",
    "inverse_sqrt_schedule",
    "newton",
    "set_log_level",
    "steffensen",
]
