"""DifferentiableFunction backed by PyTorch autograd.

The objective is written with torch operations on a tensor input; the solvers
keep working with floats and NumPy arrays on their side of the boundary.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

import numpy as np
import torch

from minopt.function import DifferentiableFunction


def autograd_function(
    fn: Callable[..., torch.Tensor],
    *args: Any,
    dtype: torch.dtype = torch.float64,
) -> DifferentiableFunction:
    """
    Wrap a torch-traceable scalar objective.

    Parameters
    ----------
    fn:
        Callable ``fn(x, *args)`` taking a tensor and returning a 0-D tensor.
    *args:
        Extra arguments bound to every call.
    dtype:
        Floating dtype used for the input tensor. Defaults to torch.float64.

    Returns
    -------
    DifferentiableFunction
        ``value`` returns a float; ``derivative`` returns a float for scalar
        inputs and an ndarray shaped like the input otherwise.

    Raises
    ------
    ValueError
        If ``fn`` does not return a single-element tensor.
    """

    def probe(
        x: Any, compute_value: bool, compute_derivative: bool
    ) -> Tuple[Optional[float], Any]:
        scalar_input = np.ndim(x) == 0
        xt = torch.as_tensor(np.asarray(x, dtype=float), dtype=dtype)
        if not compute_derivative:
            with torch.no_grad():
                y = fn(xt, *args)
            return _as_float(y), None

        xt = xt.detach().requires_grad_(True)
        y = fn(xt, *args)
        value = _as_float(y)
        grad = None
        if y.requires_grad:
            (grad,) = torch.autograd.grad(y, xt, allow_unused=True)
        # an objective that ignores x has a zero derivative
        if grad is None:
            grad = torch.zeros_like(xt)
        grad_np = grad.detach().cpu().numpy()
        derivative = float(grad_np) if scalar_input else grad_np
        return (value if compute_value else None), derivative

    return DifferentiableFunction.from_combined_probe_function(probe)


def _as_float(y: torch.Tensor) -> float:
    if y.numel() != 1:
        raise ValueError(
            f"Objective must return a single-element tensor, got shape {tuple(y.shape)}"
        )
    return float(y.detach().item())


__all__ = ["autograd_function"]
