"""Finite-difference gradients for value-only objectives.

The step along coordinate ``i`` is ``h_i = eps * max(1, |x_i|)``: an absolute
step near the origin and a relative one for large coordinates. ``eps`` is fixed
when the adapter is built, so the policy never changes within a run.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .core import Array, as_point
from .function import DifferentiableFunction, Function

Objective = Callable[[Array], float]

DEFAULT_EPS = 1e-6


def approx_grad(
    fun: Objective, x: Array, eps: float = DEFAULT_EPS, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Base perturbation size, scaled by ``max(1, |x_i|)`` per coordinate.
    return_evals:
        Also return the number of objective evaluations (always ``2 * x.size``).
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    grad = np.zeros_like(x, dtype=float)
    steps = eps * np.maximum(1.0, np.abs(x))
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = steps[i]
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad[i] = (fx_plus - fx_minus) / (2.0 * steps[i])
    if return_evals:
        return grad, evals
    return grad


class NumericallyDifferentiated(DifferentiableFunction):
    """
    Gives a value-only function a central-difference gradient.

    Every :meth:`gradient` call costs ``2n`` evaluations of the wrapped
    function and nothing is cached between calls. The truncation error is
    ``O(eps**2)``; supply an analytic gradient through
    :class:`steepest.function.Differentiable` when exact derivatives matter.

    Example
    -------
    >>> import numpy as np
    >>> from steepest.function import ValueOnly
    >>> square = NumericallyDifferentiated(ValueOnly(lambda x: float(x @ x)))
    >>> bool(np.allclose(square.gradient(np.array([1.0, -2.0])), [2.0, -4.0]))
    True
    """

    def __init__(self, function: Function, eps: float = DEFAULT_EPS) -> None:
        if eps <= 0:
            raise ValueError("eps must be positive")
        self.function = function
        self.eps = float(eps)
        self.dim = function.dim

    def value(self, x: Array) -> float:
        return self.function.value(x)

    def gradient(self, x: Array) -> Array:
        return approx_grad(self.function.value, as_point(x, self.dim), eps=self.eps)

    def __repr__(self) -> str:
        return f"NumericallyDifferentiated({self.function!r}, eps={self.eps})"


NumericalDifferentiation = NumericallyDifferentiated


__all__ = [
    "DEFAULT_EPS",
    "NumericalDifferentiation",
    "NumericallyDifferentiated",
    "approx_grad",
]
