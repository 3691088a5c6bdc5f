"""PyTorch integration for minopt."""

from .autograd import autograd_function

__all__ = ["autograd_function"]
