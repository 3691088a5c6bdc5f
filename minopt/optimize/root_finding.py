"""Scalar root finding: Newton and Steffensen iterations.

Both solvers stop as soon as a step satisfies ``|delta| < tol`` and report
``success=False`` when ``maxiter`` steps pass without that happening. A step
that would divide a nonzero residual by zero raises
:class:`~minopt.exceptions.SingularDerivativeError`.
"""

from __future__ import annotations

from typing import Optional, Union

from minopt.exceptions import SingularDerivativeError
from minopt.function import DifferentiableFunction, Function
from minopt.logging import get_logger

from .config import check_positive, check_positive_int
from .core import Callback, IterationRecord, OptimizeResult, report_iteration

logger = get_logger(__name__)

ROOT_TOL = 1e-10
ROOT_MAXITER = 20


def _step(numerator: float, denominator: float, iteration: int, x: float, what: str) -> float:
    if numerator == 0:
        return 0.0
    if denominator == 0:
        raise SingularDerivativeError(
            f"{what} vanished at iteration {iteration} (x = {x!r}).",
            iteration=iteration,
            x=x,
        )
    return -numerator / denominator


def newton(
    function: DifferentiableFunction,
    x0: float,
    tol: float = ROOT_TOL,
    maxiter: int = ROOT_MAXITER,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Newton's method for a scalar equation ``f(x) = 0``.

    Each iteration makes one ``value_and_derivative`` call and steps by
    ``-f / df``.

    Example
    -------
    >>> from minopt.objectives import square_root
    >>> f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
    >>> res = newton(f, 2.0)
    >>> res.success, res.nit
    (True, 5)
    """
    check_positive("tol", tol)
    check_positive_int("maxiter", maxiter)
    x = x0
    fx: Optional[float] = None
    history: list[IterationRecord] = []
    success = False
    nit = 0
    for iteration in range(1, maxiter + 1):
        fx, dfx = function.value_and_derivative(x)
        delta = _step(fx, dfx, iteration, x, "Derivative")
        success = abs(delta) < tol
        x = x + delta
        nit = iteration
        report_iteration(IterationRecord(iteration, x, fx, abs(delta)), callback, history)
        if success:
            break
    message = "Step tolerance satisfied." if success else "Maximum iterations reached."
    logger.debug("newton: %s (nit=%d, x=%r)", message, nit, x)
    return OptimizeResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        nfev=nit,
        njev=nit,
        history=history,
    )


def steffensen(
    function: Union[Function, DifferentiableFunction],
    x0: float,
    tol: float = ROOT_TOL,
    maxiter: int = ROOT_MAXITER,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Steffensen's method for a scalar equation ``f(x) = 0``.

    Derivative free: the residual itself is used as the finite-difference
    step, ``delta = -f**2 / (f(x + f) - f)``. Two value evaluations per
    iteration. A :class:`DifferentiableFunction` is downgraded with
    :meth:`~DifferentiableFunction.as_function`, so its value counter keeps
    counting.
    """
    check_positive("tol", tol)
    check_positive_int("maxiter", maxiter)
    if isinstance(function, DifferentiableFunction):
        function = function.as_function()
    x = x0
    fx: Optional[float] = None
    history: list[IterationRecord] = []
    success = False
    nit = 0
    for iteration in range(1, maxiter + 1):
        fx = function.evaluate(x)
        gx = function.evaluate(x + fx)
        delta = _step(fx * fx, gx - fx, iteration, x, "Secant slope f(x + f) - f(x)")
        success = abs(delta) < tol
        x = x + delta
        nit = iteration
        report_iteration(IterationRecord(iteration, x, fx, abs(delta)), callback, history)
        if success:
            break
    message = "Step tolerance satisfied." if success else "Maximum iterations reached."
    logger.debug("steffensen: %s (nit=%d, x=%r)", message, nit, x)
    return OptimizeResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        nfev=2 * nit,
        njev=0,
        history=history,
    )


__all__ = ["ROOT_MAXITER", "ROOT_TOL", "newton", "steffensen"]
