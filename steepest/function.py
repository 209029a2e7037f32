"""Objective function abstractions.

A :class:`Function` can only be evaluated. A :class:`DifferentiableFunction`
can also report its gradient. Which one a caller holds is decided when it is
built: wrap a raw callable in :class:`ValueOnly`, pair it with an analytic
gradient in :class:`Differentiable`, or synthesize the gradient with
:class:`steepest.numeric.NumericallyDifferentiated`.

Implementations must be pure: evaluating twice at the same point gives the same
result. The minimizers rely on this and share functions freely between runs.

Example
-------
>>> import numpy as np
>>> from steepest.function import Differentiable
>>> square = Differentiable(lambda x: float(x @ x), lambda x: 2 * x, dim=2)
>>> square.probe(np.array([1.0, 2.0]))
(5.0, array([2., 4.]))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

import numpy as np

from .core import Array, as_point
from .errors import DimensionMismatchError

Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]


class Function(ABC):
    """A scalar objective ``f(x)`` over real vectors."""

    dim: Optional[int] = None

    @abstractmethod
    def value(self, x: Array) -> float:
        """Evaluate the objective at ``x``."""

    def __call__(self, x: Array) -> float:
        return self.value(x)


class DifferentiableFunction(Function):
    """An objective that can also compute its gradient."""

    @abstractmethod
    def gradient(self, x: Array) -> Array:
        """Evaluate the gradient ``(df/dx_1, ..., df/dx_n)`` at ``x``."""

    def probe(self, x: Array) -> tuple[float, Array]:
        """Return the value and the gradient at ``x``."""
        return self.value(x), self.gradient(x)


def _check_dim(dim: Optional[int]) -> Optional[int]:
    if dim is not None and int(dim) <= 0:
        raise ValueError("dim must be a positive integer")
    return None if dim is None else int(dim)


class ValueOnly(Function):
    """Wraps a raw scalar callable."""

    def __init__(self, fun: Objective, dim: Optional[int] = None) -> None:
        self.fun = fun
        self.dim = _check_dim(dim)

    def value(self, x: Array) -> float:
        return float(self.fun(as_point(x, self.dim)))

    def __repr__(self) -> str:
        return f"ValueOnly(fun={self.fun!r}, dim={self.dim})"


class Differentiable(DifferentiableFunction):
    """Wraps a raw scalar callable together with its analytic gradient."""

    def __init__(self, fun: Objective, grad: Gradient, dim: Optional[int] = None) -> None:
        self.fun = fun
        self.grad = grad
        self.dim = _check_dim(dim)

    def value(self, x: Array) -> float:
        return float(self.fun(as_point(x, self.dim)))

    def gradient(self, x: Array) -> Array:
        x = as_point(x, self.dim)
        grad = np.asarray(self.grad(x), dtype=float)
        if grad.shape != x.shape:
            raise DimensionMismatchError(x.shape[0], grad.shape, what="gradient")
        return grad

    def __repr__(self) -> str:
        return f"Differentiable(fun={self.fun!r}, grad={self.grad!r}, dim={self.dim})"


class Summation(Function):
    """
    Sum of individual objectives, ``f(x) = sum_i f_i(x)``.

    Stochastic methods evaluate only a subset of the terms per step, see
    :meth:`partial_value`.
    """

    def __init__(self, terms: Iterable[Function], dim: Optional[int] = None) -> None:
        self._terms = tuple(terms)
        if not self._terms:
            raise ValueError("Summation requires at least one term")
        dims = {term.dim for term in self._terms if term.dim is not None}
        if dim is not None:
            dims.add(int(dim))
        if len(dims) > 1:
            raise ValueError(f"Summation terms disagree on dimension: {sorted(dims)}")
        self.dim = dims.pop() if dims else None

    @property
    def terms(self) -> tuple[Function, ...]:
        return self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def value(self, x: Array) -> float:
        return self.partial_value(x, range(len(self._terms)))

    def partial_value(self, x: Array, indices: Iterable[int]) -> float:
        """Sum of the values of the selected terms."""
        x = as_point(x, self.dim)
        return float(sum(self._terms[i].value(x) for i in indices))


class DifferentiableSummation(Summation, DifferentiableFunction):
    """Sum of differentiable objectives; the gradient is summed term-wise."""

    def __init__(
        self, terms: Iterable[DifferentiableFunction], dim: Optional[int] = None
    ) -> None:
        super().__init__(terms, dim=dim)

    def gradient(self, x: Array) -> Array:
        return self.partial_gradient(x, range(len(self._terms)))

    def partial_gradient(self, x: Array, indices: Iterable[int]) -> Array:
        """Sum of the gradients of the selected terms."""
        x = as_point(x, self.dim)
        grad = np.zeros_like(x)
        for i in indices:
            grad += self._terms[i].gradient(x)
        return grad


def from_callables(
    fun: Objective,
    grad: Optional[Gradient] = None,
    dim: Optional[int] = None,
    eps: float = 1e-6,
) -> DifferentiableFunction:
    """
    Build a gradient-capable function from raw callables.

    With ``grad`` the analytic gradient is used, otherwise it is approximated
    by central finite differences with step ``eps``.
    """
    if grad is not None:
        return Differentiable(fun, grad, dim=dim)
    from .numeric import NumericallyDifferentiated

    return NumericallyDifferentiated(ValueOnly(fun, dim=dim), eps=eps)


__all__ = [
    "Differentiable",
    "DifferentiableFunction",
    "DifferentiableSummation",
    "Function",
    "Gradient",
    "Objective",
    "Summation",
    "ValueOnly",
    "from_callables",
]
