"""
Example: fitting a linear regression model with stochastic gradient descent.

The sum of squared errors over 100 noisy observations is a sum of one term
per observation, so every SGD step only looks at a single sample.
"""

import numpy as np

from steepest import Differentiable, DifferentiableSummation, SGDConfig, StochasticGradientDescent

TRUE_COEFFICIENTS = np.array([13.37, -4.2, np.pi])


def linear_regression(w: np.ndarray, x: np.ndarray) -> float:
    """f(x) = w_0 + w_1 x_1 + w_2 x_2 + ..."""
    return float(w[0] + w[1:] @ x)


def squared_error(x: np.ndarray, y: float) -> Differentiable:
    """Half squared error of one observation, as a function of the weights."""

    def value(w: np.ndarray) -> float:
        return 0.5 * (y - linear_regression(w, x)) ** 2

    def gradient(w: np.ndarray) -> np.ndarray:
        e = y - linear_regression(w, x)
        return -e * np.concatenate(([1.0], x))

    return Differentiable(value, gradient, dim=TRUE_COEFFICIENTS.size)


def main() -> None:
    rng = np.random.default_rng(0)
    print(
        f"Trying to approximate the true linear regression coefficients "
        f"{TRUE_COEFFICIENTS} using SGD given 100 noisy samples"
    )
    samples = rng.random((100, 2))
    noise = rng.standard_normal(100)
    targets = TRUE_COEFFICIENTS[0] + samples @ TRUE_COEFFICIENTS[1:] + noise

    sse = DifferentiableSummation(squared_error(x, y) for x, y in zip(samples, targets))
    config = SGDConfig(max_iterations=20_000, step_size=0.05, seed=0)
    solution = StochasticGradientDescent(config).minimize(sse, np.ones(TRUE_COEFFICIENTS.size))

    print(f"Found coefficients {solution.position} with a SSE = {solution.value:.4f}")


if __name__ == "__main__":
    main()
