"""Well-known test functions with analytic gradients and known minima.

* ``Sphere``: ``f(x) = sum_i x_i**2``, convex, minimum ``f(0, ..., 0) = 0``.
* ``Rosenbrock``: ``f(x, y) = (a - x)**2 + b (y - x**2)**2``, a narrow curved
  valley with minimum ``f(a, a**2) = 0``.

See http://www.sfu.ca/~ssurjano/optimization.html for both.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Optional

import numpy as np

from .core import Array
from .errors import DimensionMismatchError
from .function import DifferentiableFunction


class Problem(DifferentiableFunction):
    """An objective with a known domain and global minimum."""

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Dimension of the input domain."""

    @abstractmethod
    def domain(self) -> list[tuple[float, float]]:
        """Open ``(lower, upper)`` interval for every coordinate."""

    @abstractmethod
    def minimum(self) -> tuple[Array, float]:
        """Position and value of the global minimum."""

    @abstractmethod
    def random_start(self, rng: Optional[np.random.Generator] = None) -> Array:
        """Draw a feasible starting point."""

    @property
    def dim(self) -> int:
        return self.dimensions

    def is_legal_position(self, x: Array) -> bool:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dimensions,):
            return False
        return all(lower < xi < upper for xi, (lower, upper) in zip(x, self.domain()))

    def _point(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dimensions,):
            raise DimensionMismatchError(self.dimensions, x.shape)
        return x


class Sphere(Problem):
    """n-dimensional sphere function, continuous, convex and unimodal."""

    def __init__(self, dimensions: int = 2) -> None:
        if dimensions < 1:
            raise ValueError("dimensions must be at least 1")
        self._dimensions = int(dimensions)

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def domain(self) -> list[tuple[float, float]]:
        return [(-np.inf, np.inf)] * self._dimensions

    def minimum(self) -> tuple[Array, float]:
        return np.zeros(self._dimensions), 0.0

    def random_start(self, rng: Optional[np.random.Generator] = None) -> Array:
        rng = np.random.default_rng() if rng is None else rng
        return rng.uniform(-5.12, 5.12, size=self._dimensions)

    def value(self, x: Array) -> float:
        x = self._point(x)
        return float(np.sum(x**2))

    def gradient(self, x: Array) -> Array:
        return 2.0 * self._point(x)

    def __repr__(self) -> str:
        return f"Sphere(dimensions={self._dimensions})"


class Rosenbrock(Problem):
    """Two-dimensional Rosenbrock function, commonly used with a=1, b=100."""

    def __init__(self, a: float = 1.0, b: float = 100.0) -> None:
        self.a = float(a)
        self.b = float(b)

    @property
    def dimensions(self) -> int:
        return 2

    def domain(self) -> list[tuple[float, float]]:
        return [(-np.inf, np.inf), (-np.inf, np.inf)]

    def minimum(self) -> tuple[Array, float]:
        return np.array([self.a, self.a**2]), 0.0

    def random_start(self, rng: Optional[np.random.Generator] = None) -> Array:
        rng = np.random.default_rng() if rng is None else rng
        return rng.uniform(-2.048, 2.048, size=2)

    def value(self, x: Array) -> float:
        x = self._point(x)
        return float((self.a - x[0]) ** 2 + self.b * (x[1] - x[0] ** 2) ** 2)

    def gradient(self, x: Array) -> Array:
        x = self._point(x)
        return np.array(
            [
                -2.0 * (self.a - x[0]) - 4.0 * self.b * x[0] * (x[1] - x[0] ** 2),
                2.0 * self.b * (x[1] - x[0] ** 2),
            ]
        )

    def __repr__(self) -> str:
        return f"Rosenbrock(a={self.a}, b={self.b})"


__all__ = ["Problem", "Rosenbrock", "Sphere"]
