"""
Example: numerical differentiation on the Rosenbrock function.

Only the function value is supplied; the gradient is approximated with
central finite differences. Iteration progress is logged at DEBUG level.
"""

import numpy as np

from steepest import (
    GradientDescent,
    GradientDescentConfig,
    NumericallyDifferentiated,
    ValueOnly,
    configure_logging,
)


def rosenbrock(x: np.ndarray) -> float:
    return (1.0 - x[0]) ** 2 + 100.0 * (x[1] - x[0] ** 2) ** 2


def main() -> None:
    configure_logging(level="INFO")

    function = NumericallyDifferentiated(ValueOnly(rosenbrock, dim=2))
    config = GradientDescentConfig(max_iterations=2000)
    solution = GradientDescent(config).minimize(function, np.array([-3.0, -4.0]))

    print("=" * 60)
    print(f"Solution for Rosenbrock function: x = {solution.position}")
    print(f"Value: {solution.value:.6g}")
    print(f"Status: {solution.status.value} ({solution.message})")
    print(f"Iterations: {solution.nit}, gradient norm: {solution.grad_norm:.3e}")


if __name__ == "__main__":
    main()
