"""
Example: minimal usage of steepest.

Minimizes the Rosenbrock function from a random starting point with plain
gradient descent and the analytic gradient.
"""

import numpy as np

from steepest import GradientDescent, Rosenbrock


def main() -> None:
    # the target function; for educational reasons the Rosenbrock valley
    function = Rosenbrock()
    rng = np.random.default_rng(42)

    minimizer = GradientDescent()
    solution = minimizer.minimize(function, function.random_start(rng))

    print(
        f"Found solution for Rosenbrock function at f({solution.position}) = "
        f"{solution.value:.6g}"
    )
    print(f"Status: {solution.status.value} after {solution.nit} iterations")


if __name__ == "__main__":
    main()
