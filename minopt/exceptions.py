"""Exception types raised by minopt.

Non-convergence is not an error: solvers report it through
``OptimizeResult.success``.
"""

from __future__ import annotations

from typing import Any, Optional


class MinoptError(Exception):
    """Base class for all minopt errors."""


class InvalidConfigurationError(MinoptError, ValueError):
    """A configuration value lies outside its allowed range."""


class PreconditionViolationError(MinoptError, RuntimeError):
    """An operation was requested on an object not prepared for it.

    Raised when reading an evaluation counter before ``start_counting()`` or
    when requesting a derivative from a function built without one.
    """


class SingularDerivativeError(MinoptError, ArithmeticError):
    """A root-finding step would divide a nonzero residual by zero."""

    def __init__(
        self, message: str, iteration: Optional[int] = None, x: Any = None
    ) -> None:
        super().__init__(message)
        self.iteration = iteration
        self.x = x
