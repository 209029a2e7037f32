"""Benchmark gradient descent with analytic and numerical gradients."""

import time
from typing import Dict

import numpy as np

from steepest import (
    GradientDescent,
    GradientDescentConfig,
    NumericallyDifferentiated,
    Rosenbrock,
    Sphere,
)
from steepest.function import DifferentiableFunction


def benchmark_minimize(
    function: DifferentiableFunction,
    x0: np.ndarray,
    config: GradientDescentConfig,
    repeats: int = 5,
) -> Dict[str, float]:
    """Time repeated ``minimize`` calls.

    Args:
        function: Objective to minimize.
        x0: Starting point.
        config: Gradient descent configuration.
        repeats: Number of timed runs.

    Returns:
        Dictionary with timing results of the last run.
    """
    minimizer = GradientDescent(config)
    # Warmup
    minimizer.minimize(function, x0)

    start = time.perf_counter()
    solution = None
    for _ in range(repeats):
        solution = minimizer.minimize(function, x0)
    end = time.perf_counter()

    time_per_run = (end - start) / repeats
    return {
        "time_per_run_sec": time_per_run,
        "iterations": solution.nit,
        "time_per_iteration_sec": time_per_run / max(solution.nit, 1),
        "value": solution.value,
        "status": solution.status.value,
    }


def _report(label: str, results: Dict[str, float]) -> None:
    print(f"{label}:")
    print(f"  Time per run: {results['time_per_run_sec']*1e3:.2f} ms")
    print(f"  Iterations: {results['iterations']} ({results['status']})")
    print(f"  Time per iteration: {results['time_per_iteration_sec']*1e6:.1f} us")
    print(f"  Final value: {results['value']:.3e}")


if __name__ == "__main__":
    print("Benchmarking gradient descent...")
    config = GradientDescentConfig(max_iterations=2000)

    rosenbrock = Rosenbrock()
    x0 = np.array([-3.0, -4.0])
    _report("Rosenbrock (analytic)", benchmark_minimize(rosenbrock, x0, config))
    _report(
        "Rosenbrock (finite differences)",
        benchmark_minimize(NumericallyDifferentiated(rosenbrock), x0, config),
    )

    for n in (10, 100):
        sphere = Sphere(n)
        x0 = np.linspace(-5.0, 5.0, n)
        _report(f"Sphere n={n} (analytic)", benchmark_minimize(sphere, x0, config))
        _report(
            f"Sphere n={n} (finite differences)",
            benchmark_minimize(NumericallyDifferentiated(sphere), x0, config),
        )
