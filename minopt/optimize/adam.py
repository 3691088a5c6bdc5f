"""Adam gradient-based minimization."""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from minopt.function import DifferentiableFunction
from minopt.logging import get_logger

from .config import AdamConfig, configure_adam
from .core import Callback, IterationRecord, OptimizeResult, report_iteration

logger = get_logger(__name__)


def adam(
    function: DifferentiableFunction,
    x0: np.ndarray,
    config: Optional[AdamConfig] = None,
    callback: Optional[Callback] = None,
    **overrides: Any,
) -> OptimizeResult:
    """Minimize ``function`` with the Adam update rule.

    Iterations run for ``k = 1, ..., max_iterations - 1``. Each one evaluates
    the gradient, stops if its Euclidean norm is below ``absolute_epsilon``,
    and otherwise applies the bias-corrected moment update. Progress records
    (which cost one extra value evaluation) are produced at convergence and,
    when ``verbose`` is set, at every ``k`` with ``k % 10 == 1``.

    Parameters
    ----------
    function:
        Objective; ``derivative`` must return a gradient shaped like ``x0``.
    x0:
        Starting point. A float ndarray is updated in place and returned as
        ``result.x``; anything else is first converted to a new float array.
    config:
        Base configuration; defaults to ``AdamConfig()``.
    callback:
        Receives every :class:`IterationRecord` produced.
    **overrides:
        Per-call :class:`AdamConfig` field overrides, validated on entry.

    Returns
    -------
    OptimizeResult
        ``success`` is True only if the gradient tolerance was met.

    Example
    -------
    >>> f = DifferentiableFunction.from_callables(
    ...     lambda x: float(x @ x), lambda x: 2 * x)
    >>> res = adam(f, np.array([0.5, -0.5]), max_iterations=5000,
    ...            alpha_schedule=lambda k: 0.05)
    >>> res.success
    True
    """
    config = configure_adam(config, **overrides)
    if isinstance(x0, np.ndarray) and np.issubdtype(x0.dtype, np.floating):
        x = x0
    else:
        x = np.array(x0, dtype=float)

    m = np.zeros_like(x)
    v = np.zeros_like(x)
    beta_1 = config.beta_1
    beta_2 = config.beta_2
    internal_epsilon = config.resolve_internal_epsilon(x.dtype)
    level = logging.INFO if config.verbose else logging.DEBUG

    history: list[IterationRecord] = []
    success = False
    fx: Optional[float] = None
    grad_norm: Optional[float] = None
    nit = 0
    nfev = 0
    njev = 0
    for k in range(1, config.max_iterations):
        grad = np.asarray(function.derivative(x), dtype=x.dtype)
        njev += 1
        nit = k
        grad_norm = float(np.linalg.norm(grad))
        success = grad_norm < config.absolute_epsilon

        if success or (config.verbose and k % 10 == 1):
            fx = float(function.value(x))
            nfev += 1
            report_iteration(
                IterationRecord(k, x.copy(), fx, grad_norm), callback, history, level
            )
        if success:
            break

        m *= beta_1
        m += (1 - beta_1) * grad
        v *= beta_2
        v += (1 - beta_2) * grad * grad
        m_hat = m / (1 - beta_1**k)
        v_hat = v / (1 - beta_2**k)
        x -= config.alpha_schedule(k) * m_hat / (np.sqrt(v_hat) + internal_epsilon)

    message = "Gradient tolerance satisfied." if success else "Maximum iterations reached."
    logger.debug("adam: %s (nit=%d, grad_norm=%s)", message, nit, grad_norm)
    return OptimizeResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        nfev=nfev,
        njev=njev,
        grad_norm=grad_norm,
        history=history,
    )


__all__ = ["adam"]
