import numpy as np
import pytest
import torch

from minopt.optimize import adam, constant_schedule, newton
from minopt.torch import autograd_function


def test_scalar_value_and_derivative():
    f = autograd_function(lambda x, c: x**2 - c, 2.0)
    value, derivative = f.value_and_derivative(3.0)
    assert value == pytest.approx(7.0)
    assert derivative == pytest.approx(6.0)
    assert isinstance(derivative, float)


def test_vector_gradient():
    f = autograd_function(lambda x: torch.sum(torch.sin(x)))
    x = np.array([0.1, 0.2, 0.3])
    assert np.allclose(f.derivative(x), np.cos(x))
    assert f.value(x) == pytest.approx(float(np.sum(np.sin(x))))


def test_newton_on_autograd_function():
    f = autograd_function(lambda x: x**2 - 2.0)
    f.start_counting()
    res = newton(f, 2.0)
    assert res.success
    assert res.x == pytest.approx(np.sqrt(2.0), abs=1e-12)
    assert f.derivative_count == res.nit


def test_adam_on_autograd_function():
    target = torch.tensor([1.0, -2.0], dtype=torch.float64)
    f = autograd_function(lambda x: torch.sum((x - target) ** 2))
    x = np.zeros(2)
    res = adam(f, x, max_iterations=3000, alpha_schedule=constant_schedule(0.05))
    assert res.success
    assert np.allclose(x, [1.0, -2.0], atol=1e-5)


def test_non_scalar_output_rejected():
    f = autograd_function(lambda x: x * 2)
    with pytest.raises(ValueError):
        f.value(np.array([1.0, 2.0]))


def test_objective_independent_of_input_has_zero_derivative():
    f = autograd_function(lambda x: torch.tensor(3.0, dtype=torch.float64))
    value, derivative = f.value_and_derivative(np.array([1.0, 2.0]))
    assert value == pytest.approx(3.0)
    assert np.array_equal(derivative, [0.0, 0.0])

    g = autograd_function(lambda x: 0.0 * x + 1.0)
    assert g.derivative(2.0) == 0.0
