"""Example objectives written as combined probes.

Each probe has the shape ``probe(x, compute_value, compute_derivative, c)`` and
returns ``(value, derivative)``, skipping whichever output is not requested.
Wrap them with :meth:`DifferentiableFunction.from_combined_probe_function`,
binding ``c``.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np


def square_root(
    x: float, compute_value: bool, compute_derivative: bool, c: float
) -> Tuple[Optional[float], Optional[float]]:
    """``f(x) = x**2 - c``, whose positive root is ``sqrt(c)``."""
    f = x * x - c if compute_value else None
    df = 2 * x if compute_derivative else None
    return f, df


def rosenbrock(
    x: np.ndarray, compute_value: bool, compute_derivative: bool, c: float = 100.0
) -> Tuple[Optional[float], Optional[np.ndarray]]:
    """Two-dimensional Rosenbrock function ``(1 - x0)**2 + c (x1 - x0**2)**2``."""
    if x.shape != (2,):
        raise ValueError(f"rosenbrock expects a point of shape (2,), got {x.shape}")
    f = None
    df = None
    if compute_value:
        f = float((1 - x[0]) ** 2 + c * (x[1] - x[0] ** 2) ** 2)
    if compute_derivative:
        df = np.array(
            [
                2 * (-1 + x[0] + 2 * c * x[0] ** 3 - 2 * c * x[0] * x[1]),
                2 * c * (x[1] - x[0] ** 2),
            ]
        )
    return f, df


__all__ = ["rosenbrock", "square_root"]
