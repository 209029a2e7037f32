import numpy as np
import pytest

from steepest import (
    ArmijoLineSearch,
    ExactLineSearch,
    FixedStepWidth,
    InvalidConfigurationError,
)
from steepest.line_search import backtracking_armijo


def quadratic_fun(x: np.ndarray) -> float:
    return float(x.T @ x)


def quadratic_grad(x: np.ndarray) -> np.ndarray:
    return 2 * x


def test_backtracking_armijo_monotone():
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    direction = -grad
    res = backtracking_armijo(quadratic_fun, x, direction, grad)
    assert res.success
    assert 0 < res.alpha <= 1.0
    assert res.value == pytest.approx(quadratic_fun(x + res.alpha * direction))
    assert res.value <= quadratic_fun(x) - 1e-4 * res.alpha * grad @ grad
    assert res.nfev > 0


def test_backtracking_armijo_reuses_known_value():
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    fresh = backtracking_armijo(quadratic_fun, x, -grad, grad)
    known = backtracking_armijo(quadratic_fun, x, -grad, grad, fx=quadratic_fun(x))
    assert fresh.alpha == known.alpha
    assert fresh.nfev == known.nfev + 1


def test_backtracking_armijo_raises_on_invalid_params():
    x = np.array([1.0])
    grad = quadratic_grad(x)
    with pytest.raises(ValueError):
        backtracking_armijo(quadratic_fun, x, -grad, grad, c=1.5)
    with pytest.raises(ValueError):
        backtracking_armijo(quadratic_fun, x, -grad, grad, rho=1.1)
    with pytest.raises(ValueError):
        backtracking_armijo(quadratic_fun, x, -grad, grad, min_step=0.0)


def test_backtracking_armijo_fails_on_ascent_direction():
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    res = backtracking_armijo(quadratic_fun, x, grad, grad, min_step=1e-6)
    assert not res.success
    assert res.alpha == 0.0
    assert np.array_equal(res.position, x)
    assert res.value == quadratic_fun(x)
    # 1, 1/2, ..., 2**-19 are tried before the step drops below 1e-6
    assert res.nfev == 1 + 20


def overflowing_quadratic(x: np.ndarray) -> float:
    return float("inf") if np.any(np.abs(x) > 10) else float(x @ x)


def test_non_finite_trial_value_shrinks_step():
    x = np.array([6.0, 8.0])
    grad = quadratic_grad(x)
    res = backtracking_armijo(overflowing_quadratic, x, -grad, grad, alpha0=2.0)
    # alpha = 2 overflows, alpha = 1 mirrors x without decrease, alpha = 0.5 hits 0
    assert res.success
    assert res.alpha == 0.5
    assert np.allclose(res.position, 0.0)
    assert res.nfev == 4


def test_nan_trial_value_is_rejected():
    def fun(x: np.ndarray) -> float:
        return float("nan") if x[0] < 0 else float(x @ x)

    x = np.array([1.0])
    grad = quadratic_grad(x)
    res = backtracking_armijo(fun, x, -grad, grad, fx=1.0)
    assert res.success
    assert res.alpha == 0.5
    assert res.value == 0.0


def test_armijo_line_search_uses_configuration():
    search = ArmijoLineSearch(initial_step=0.25, decay=0.5, slope=1e-4, min_step=1e-8)
    x = np.array([3.0, -4.0])
    grad = quadratic_grad(x)
    res = search.search(quadratic_fun, x, -grad, grad, quadratic_fun(x))
    assert res.success
    assert res.alpha == 0.25
    assert np.allclose(res.position, [1.5, -2.0])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_step": 0.0},
        {"initial_step": float("inf")},
        {"decay": 1.0},
        {"slope": 0.0},
        {"min_step": -1.0},
    ],
)
def test_armijo_line_search_rejects_invalid_configuration(kwargs):
    with pytest.raises(InvalidConfigurationError):
        ArmijoLineSearch(**kwargs)


def test_fixed_step_width_always_moves():
    search = FixedStepWidth(0.1)
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    res = search.search(quadratic_fun, x, grad, grad, quadratic_fun(x))
    assert res.success
    assert res.nfev == 1
    assert np.allclose(res.position, x + 0.1 * grad)
    with pytest.raises(InvalidConfigurationError):
        FixedStepWidth(0.0)


def test_exact_line_search_picks_best_candidate():
    search = ExactLineSearch(start_step=1e-4, stop_step=1.0, increase_factor=2.0)
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    res = search.search(quadratic_fun, x, -grad, grad, quadratic_fun(x))
    # candidates are 1e-4 * 2**k for k = 0..13, the exact minimizer is 0.5
    assert res.success
    assert res.nfev == 14
    assert res.alpha == pytest.approx(0.4096)
    assert res.value < quadratic_fun(x)


def test_exact_line_search_excludes_stop_step():
    search = ExactLineSearch(start_step=0.25, stop_step=1.0, increase_factor=2.0)
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    res = search.search(quadratic_fun, x, -grad, grad, quadratic_fun(x))
    assert res.nfev == 2
    assert res.alpha == 0.5


def test_exact_line_search_skips_non_finite_candidates():
    search = ExactLineSearch(start_step=0.125, stop_step=4.0, increase_factor=2.0)
    x = np.array([6.0, 8.0])
    grad = quadratic_grad(x)
    res = search.search(overflowing_quadratic, x, -grad, grad, overflowing_quadratic(x))
    # candidates 0.125 .. 2.0, the last one overflows
    assert res.success
    assert res.nfev == 5
    assert res.alpha == 0.5
    assert res.value == 0.0


def test_exact_line_search_fails_without_improvement():
    search = ExactLineSearch()
    x = np.array([1.0, -2.0])
    grad = quadratic_grad(x)
    res = search.search(quadratic_fun, x, grad, grad, quadratic_fun(x))
    assert not res.success
    assert np.array_equal(res.position, x)


def test_exact_line_search_rejects_invalid_configuration():
    with pytest.raises(InvalidConfigurationError):
        ExactLineSearch(start_step=1.0, stop_step=0.5)
    with pytest.raises(InvalidConfigurationError):
        ExactLineSearch(increase_factor=1.0)
