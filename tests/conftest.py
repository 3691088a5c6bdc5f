"""Pytest configuration and shared fixtures for minopt tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Combined-probe objectives wrapped as DifferentiableFunctions
"""

import os

import numpy as np
import pytest
import torch

from minopt import DifferentiableFunction
from minopt.objectives import square_root


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture
def sqrt2() -> DifferentiableFunction:
    """``x**2 - 2`` with counting started."""
    f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
    f.start_counting()
    return f
