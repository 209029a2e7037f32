import numpy as np
import pytest

from steepest import NumericallyDifferentiated, Rosenbrock, ValueOnly, approx_grad


def test_approx_grad_matches_linear_function():
    def fun(x: np.ndarray) -> float:
        return float(3 * x[0] - 2 * x[1])

    grad = approx_grad(fun, np.array([0.2, -0.1]))
    assert np.allclose(grad, np.array([3.0, -2.0]), atol=1e-6)


def test_approx_grad_invalid_eps():
    with pytest.raises(ValueError):
        approx_grad(lambda x: float(x[0]), np.array([0.0]), eps=0.0)
    with pytest.raises(ValueError):
        NumericallyDifferentiated(ValueOnly(lambda x: float(x[0])), eps=-1e-6)


def test_approx_grad_counts_evaluations():
    grad, evals = approx_grad(lambda x: float(x @ x), np.ones(4), return_evals=True)
    assert evals == 8
    assert grad.shape == (4,)


def test_square_norm_gradient_matches_analytic(rng):
    f = NumericallyDifferentiated(ValueOnly(lambda x: float(x @ x)))
    eps = f.eps
    for _ in range(20):
        x = rng.uniform(-5.0, 5.0, size=3)
        assert np.allclose(f.gradient(x), 2 * x, atol=10 * eps)


def test_step_scales_with_coordinate_magnitude():
    f = NumericallyDifferentiated(ValueOnly(lambda x: float(x @ x)))
    x = np.array([1e6, -2e6])
    assert np.allclose(f.gradient(x), 2 * x, rtol=1e-9)


def test_rosenbrock_gradient_accuracy(rng):
    problem = Rosenbrock()
    numeric = NumericallyDifferentiated(problem)
    for _ in range(200):
        x = problem.random_start(rng)
        analytic = problem.gradient(x)
        approx = numeric.gradient(x)
        assert np.all(np.isfinite(approx))
        assert np.allclose(approx, analytic, rtol=1e-4, atol=1e-4)


def test_gradient_is_not_cached():
    calls = []

    def fun(x: np.ndarray) -> float:
        calls.append(x.copy())
        return float(np.sum(x**2))

    f = NumericallyDifferentiated(ValueOnly(fun, dim=3))
    x = np.array([1.0, 2.0, 3.0])
    g1 = f.gradient(x)
    g2 = f.gradient(x)
    assert len(calls) == 12
    assert np.array_equal(g1, g2)
    assert np.array_equal(x, [1.0, 2.0, 3.0])


def test_value_and_dim_delegate_to_wrapped_function():
    inner = ValueOnly(lambda x: float(np.prod(x)), dim=2)
    f = NumericallyDifferentiated(inner)
    assert f.dim == 2
    assert f.value(np.array([2.0, 3.0])) == pytest.approx(6.0)
    assert np.allclose(f.gradient(np.array([2.0, 3.0])), [3.0, 2.0], atol=1e-6)
