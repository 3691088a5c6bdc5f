"""
Example: scalar root finding with Newton and Steffensen

Solves x**2 - 2 = 0 from x = 2 with both methods, printing every iteration
and the number of value / derivative evaluations each method needed.
"""

import sys

from minopt import DifferentiableFunction, IterationRecord, newton, steffensen
from minopt.objectives import square_root


def show_iteration(record: IterationRecord) -> None:
    print(
        f"{record.iteration:4d} x = {record.x:22.17g} f = {record.fun:22.17g}",
        file=sys.stderr,
    )


def main() -> None:
    f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
    x_init = 2.0

    print("\nNewton", file=sys.stderr)
    f.start_counting()
    res = newton(f, x_init, callback=show_iteration)
    print(f"has converged: {res.success}")
    print(f"f counter:  {f.value_count}")
    print(f"df counter: {f.derivative_count}")

    print("\nSteffensen", file=sys.stderr)
    f.start_counting()
    res = steffensen(f.as_function(), x_init, callback=show_iteration)
    print(f"has converged: {res.success}")
    print(f"f counter:  {f.value_count}")
    print(f"df counter: {f.derivative_count}")


if __name__ == "__main__":
    main()
