import math

import numpy as np
import pytest

from minopt import InvalidConfigurationError
from minopt.optimize import (
    AdamConfig,
    configure_adam,
    constant_schedule,
    default_internal_epsilon,
    inverse_sqrt_schedule,
)


def test_defaults():
    config = AdamConfig()
    assert config.max_iterations == 100
    assert config.alpha_schedule(1) == 0.01
    assert config.alpha_schedule(57) == 0.01
    assert config.beta_1 == 0.9
    assert config.beta_2 == 0.999
    assert config.absolute_epsilon == 1e-6
    assert config.verbose is False
    assert config.resolve_internal_epsilon(np.float64) == pytest.approx(
        math.sqrt(np.finfo(np.float64).eps)
    )


def test_internal_epsilon_follows_dtype():
    assert default_internal_epsilon(np.float32) > default_internal_epsilon(np.float64)
    assert AdamConfig(internal_epsilon=1e-4).resolve_internal_epsilon(np.float32) == 1e-4


@pytest.mark.parametrize("beta", [0.0, 1.0, -0.5, 1.5])
def test_beta_outside_open_interval_rejected(beta):
    with pytest.raises(InvalidConfigurationError):
        AdamConfig(beta_1=beta)
    with pytest.raises(InvalidConfigurationError):
        AdamConfig(beta_2=beta)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_iterations": 0},
        {"max_iterations": -3},
        {"max_iterations": 10.0},
        {"max_iterations": True},
        {"absolute_epsilon": 0.0},
        {"absolute_epsilon": -1e-6},
        {"internal_epsilon": 0.0},
        {"internal_epsilon": 1.0},
        {"verbose": 1},
        {"alpha_schedule": 0.01},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(InvalidConfigurationError):
        AdamConfig(**kwargs)


def test_numpy_bool_verbose_accepted():
    assert AdamConfig(verbose=np.bool_(True)).verbose


def test_config_is_immutable():
    config = AdamConfig()
    with pytest.raises(AttributeError):
        config.beta_1 = 0.5


def test_configure_adam_overrides_subset():
    base = AdamConfig(max_iterations=50)
    config = configure_adam(base, verbose=True, beta_1=0.6)
    assert config.max_iterations == 50
    assert config.verbose is True
    assert config.beta_1 == 0.6
    assert base.verbose is False
    assert configure_adam(base) is base


def test_configure_adam_validates_overrides():
    with pytest.raises(InvalidConfigurationError):
        configure_adam(beta_2=1.0)


def test_configure_adam_unknown_option():
    with pytest.raises(InvalidConfigurationError, match="learning_rate"):
        configure_adam(learning_rate=0.1)


def test_schedules():
    assert constant_schedule(0.3)(1) == 0.3
    assert constant_schedule(0.3)(1000) == 0.3
    schedule = inverse_sqrt_schedule(2.0)
    assert schedule(1) == 2.0
    assert schedule(4) == 1.0
