"""Step-length selection along a descent direction."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .core import Array
from .errors import InvalidConfigurationError

Objective = Callable[[Array], float]


@dataclass(frozen=True)
class LineSearchResult:
    """Outcome of a line search.

    On failure ``alpha`` is 0 and ``position``/``value`` are the starting ones.
    """

    alpha: float
    position: Array
    value: float
    nfev: int
    success: bool


def _trial(f: Objective, x: Array, alpha: float, p: Array) -> tuple[Array, float]:
    candidate = x + alpha * p
    return candidate, float(f(candidate))


def backtracking_armijo(
    f: Objective,
    x: Array,
    p: Array,
    grad_fx: Array,
    fx: Optional[float] = None,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    min_step: float = 1e-12,
) -> LineSearchResult:
    """Armijo backtracking line search.

    Accepts the first ``alpha = alpha0 * rho**k`` with
    ``f(x + alpha p) <= f(x) + c alpha <grad_fx, p>`` and gives up once
    ``alpha`` drops below ``min_step``. A trial step whose value is NaN or
    infinite is rejected like any other.
    """
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    if min_step <= 0:
        raise ValueError("min_step must be positive")
    nfev = 0
    if fx is None:
        fx = float(f(x))
        nfev += 1
    alpha = float(alpha0)
    grad_dot = float(np.dot(grad_fx, p))
    while alpha >= min_step:
        candidate, f_new = _trial(f, x, alpha, p)
        nfev += 1
        if math.isfinite(f_new) and f_new <= fx + c * alpha * grad_dot:
            return LineSearchResult(alpha, candidate, f_new, nfev, True)
        alpha *= rho
    return LineSearchResult(0.0, x, fx, nfev, False)


class LineSearch(ABC):
    """Chooses how far to move from ``x`` along ``direction``."""

    @abstractmethod
    def search(
        self, f: Objective, x: Array, direction: Array, grad: Array, fx: float
    ) -> LineSearchResult:
        """Return the accepted step, or an unsuccessful result."""


class ArmijoLineSearch(LineSearch):
    """Backtracking search enforcing the sufficient-decrease (Armijo) rule."""

    def __init__(
        self,
        initial_step: float = 1.0,
        decay: float = 0.5,
        slope: float = 1e-4,
        min_step: float = 1e-12,
    ) -> None:
        if not (initial_step > 0 and math.isfinite(initial_step)):
            raise InvalidConfigurationError("initial_step must be positive and finite")
        if not (0 < decay < 1):
            raise InvalidConfigurationError("decay must lie in (0, 1)")
        if not (0 < slope < 1):
            raise InvalidConfigurationError("slope must lie in (0, 1)")
        if not min_step > 0:
            raise InvalidConfigurationError("min_step must be positive")
        self.initial_step = float(initial_step)
        self.decay = float(decay)
        self.slope = float(slope)
        self.min_step = float(min_step)

    def search(
        self, f: Objective, x: Array, direction: Array, grad: Array, fx: float
    ) -> LineSearchResult:
        return backtracking_armijo(
            f,
            x,
            direction,
            grad,
            fx=fx,
            alpha0=self.initial_step,
            rho=self.decay,
            c=self.slope,
            min_step=self.min_step,
        )

    def __repr__(self) -> str:
        return (
            f"ArmijoLineSearch(initial_step={self.initial_step}, decay={self.decay}, "
            f"slope={self.slope}, min_step={self.min_step})"
        )


class FixedStepWidth(LineSearch):
    """No search at all: always moves ``step * direction``."""

    def __init__(self, step: float) -> None:
        if not (step > 0 and math.isfinite(step)):
            raise InvalidConfigurationError("step must be positive and finite")
        self.step = float(step)

    def search(
        self, f: Objective, x: Array, direction: Array, grad: Array, fx: float
    ) -> LineSearchResult:
        candidate, value = _trial(f, x, self.step, direction)
        return LineSearchResult(self.step, candidate, value, 1, True)

    def __repr__(self) -> str:
        return f"FixedStepWidth(step={self.step})"


class ExactLineSearch(LineSearch):
    """
    Brute-force search over ``start_step * increase_factor**i`` below
    ``stop_step``, keeping the lowest finite value found.

    Fails when no candidate improves on ``fx``.
    """

    def __init__(
        self, start_step: float = 1e-4, stop_step: float = 1.0, increase_factor: float = 2.0
    ) -> None:
        if not (start_step > 0 and math.isfinite(start_step)):
            raise InvalidConfigurationError("start_step must be positive and finite")
        if not (stop_step > start_step and math.isfinite(stop_step)):
            raise InvalidConfigurationError("stop_step must be finite and exceed start_step")
        if not (increase_factor > 1 and math.isfinite(increase_factor)):
            raise InvalidConfigurationError("increase_factor must be finite and exceed 1")
        self.start_step = float(start_step)
        self.stop_step = float(stop_step)
        self.increase_factor = float(increase_factor)

    def search(
        self, f: Objective, x: Array, direction: Array, grad: Array, fx: float
    ) -> LineSearchResult:
        best = LineSearchResult(0.0, x, fx, 0, False)
        alpha = self.start_step
        nfev = 0
        while alpha < self.stop_step:
            candidate, value = _trial(f, x, alpha, direction)
            nfev += 1
            if math.isfinite(value) and value < best.value:
                best = LineSearchResult(alpha, candidate, value, 0, True)
            alpha *= self.increase_factor
        return LineSearchResult(best.alpha, best.position, best.value, nfev, best.success)

    def __repr__(self) -> str:
        return (
            f"ExactLineSearch(start_step={self.start_step}, stop_step={self.stop_step}, "
            f"increase_factor={self.increase_factor})"
        )


__all__ = [
    "ArmijoLineSearch",
    "ExactLineSearch",
    "FixedStepWidth",
    "LineSearch",
    "LineSearchResult",
    "backtracking_armijo",
]
