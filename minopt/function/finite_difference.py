"""Central-difference derivatives for functions without an analytic one.

Pure NumPy, deterministic, meant for small problems and for checking
hand-written derivatives.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from minopt.exceptions import InvalidConfigurationError


def approx_derivative(
    fun: Callable[[Any], float], x: Any, eps: float = 1e-6
) -> Any:
    """Compute a central-difference derivative of ``fun`` at ``x``.

    Parameters
    ----------
    fun:
        Objective returning a scalar given x.
    x:
        Scalar or 1D array where the derivative is approximated.
    eps:
        Perturbation size for finite differences. Must be positive.

    Returns
    -------
    float or np.ndarray
        A float for scalar ``x``, otherwise a gradient with the shape of ``x``.
    """
    if eps <= 0:
        raise InvalidConfigurationError("eps must be positive")
    if np.ndim(x) == 0:
        x = float(x)
        return (fun(x + eps) - fun(x - eps)) / (2.0 * eps)
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei.flat[i] = eps
        grad.flat[i] = (fun(x + ei) - fun(x - ei)) / (2.0 * eps)
    return grad


__all__ = ["approx_derivative"]
