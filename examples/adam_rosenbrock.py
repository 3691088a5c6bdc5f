"""
Example: minimizing the Rosenbrock function with Adam

Uses a decaying step size alpha_k = 1 / sqrt(k) and aggressive moment decay
(beta_1 = beta_2 = 0.6). Progress is logged every 10 iterations.
"""

import logging

import numpy as np

from minopt import DifferentiableFunction, adam, configure_logging, inverse_sqrt_schedule
from minopt.objectives import rosenbrock


def main() -> None:
    configure_logging(level=logging.INFO)

    f = DifferentiableFunction.from_combined_probe_function(rosenbrock, 10.0)
    x = np.full(2, 2.0)

    f.start_counting()
    res = adam(
        f,
        x,
        beta_1=0.6,
        beta_2=0.6,
        alpha_schedule=inverse_sqrt_schedule(1.0),
        absolute_epsilon=0.01,
        verbose=True,
    )

    print(f"has converged: {res.success}")
    print(f"x: {x}")
    print(f"f counter:  {f.value_count}")
    print(f"df counter: {f.derivative_count}")


if __name__ == "__main__":
    main()
