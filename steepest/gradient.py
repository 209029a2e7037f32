"""Steepest descent with a backtracking line search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .core import (
    Array,
    IterationEvent,
    Minimizer,
    ProgressCallback,
    Solution,
    Status,
    as_point,
    check_convergence,
    check_integer,
)
from .errors import (
    DimensionMismatchError,
    InvalidConfigurationError,
    NonFiniteValueError,
)
from .function import DifferentiableFunction
from .line_search import ArmijoLineSearch, LineSearch
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GradientDescentConfig:
    """
    Tunable parameters of :class:`GradientDescent`.

    Args:
        max_iterations: Upper bound on accepted iterations. ``0`` only checks
            the starting point.
        gradient_tolerance: The run converges once the Euclidean norm of the
            gradient drops below this value.
        initial_step: Step length the line search starts from in every
            iteration.
        line_search_decay: Factor in (0, 1) shrinking a rejected step.
        line_search_slope: Armijo coefficient ``c`` in (0, 1).
        min_step: The line search fails once the step length falls below this.

    Raises:
        InvalidConfigurationError: If any value is out of range.
    """

    max_iterations: int = 10_000
    gradient_tolerance: float = 1e-4
    initial_step: float = 1.0
    line_search_decay: float = 0.5
    line_search_slope: float = 1e-4
    min_step: float = 1e-12

    def __post_init__(self) -> None:
        check_integer("max_iterations", self.max_iterations, 0)
        if not self.gradient_tolerance > 0:
            raise InvalidConfigurationError("gradient_tolerance must be positive")
        if not (self.initial_step > 0 and math.isfinite(self.initial_step)):
            raise InvalidConfigurationError("initial_step must be positive and finite")
        if not (0 < self.line_search_decay < 1):
            raise InvalidConfigurationError("line_search_decay must lie in (0, 1)")
        if not (0 < self.line_search_slope < 1):
            raise InvalidConfigurationError("line_search_slope must lie in (0, 1)")
        if not self.min_step > 0:
            raise InvalidConfigurationError("min_step must be positive")

    def armijo(self) -> ArmijoLineSearch:
        """Line search described by this configuration."""
        return ArmijoLineSearch(
            initial_step=self.initial_step,
            decay=self.line_search_decay,
            slope=self.line_search_slope,
            min_step=self.min_step,
        )


class GradientDescent(Minimizer):
    """
    Classic gradient descent along ``-grad f(x)``.

    Each iteration evaluates the gradient, stops if its norm is below
    ``gradient_tolerance`` or the iteration budget is spent, and otherwise asks
    the line search for a step. The Armijo search restarts from
    ``initial_step`` in every iteration. A failed line search ends the run
    with :attr:`Status.LINE_SEARCH_FAILED`; none of the terminal states raise.
    The solution holds the lowest point accepted and the gradient norm
    evaluated there.

    Args:
        config: Algorithm parameters, defaults to ``GradientDescentConfig()``.
        line_search: Overrides the Armijo search built from ``config``.
        callback: Receives an :class:`IterationEvent` after every accepted
            iteration.
        history: Record accepted positions on the solution.

    Example
    -------
    >>> import numpy as np
    >>> from steepest import Differentiable, GradientDescent
    >>> f = Differentiable(lambda x: float(x @ x), lambda x: 2 * x)
    >>> sol = GradientDescent().minimize(f, np.array([3.0, -4.0]))
    >>> sol.status.value, bool(np.allclose(sol.position, 0.0))
    ('converged', True)
    """

    def __init__(
        self,
        config: Optional[GradientDescentConfig] = None,
        line_search: Optional[LineSearch] = None,
        callback: Optional[ProgressCallback] = None,
        history: bool = False,
    ) -> None:
        self.config = config if config is not None else GradientDescentConfig()
        self.line_search = line_search if line_search is not None else self.config.armijo()
        self.callback = callback
        self.history = history

    def minimize(self, function: DifferentiableFunction, x0: Array) -> Solution:
        if not isinstance(function, DifferentiableFunction):
            raise TypeError(
                "GradientDescent needs a DifferentiableFunction; wrap value-only "
                "functions in NumericallyDifferentiated."
            )
        cfg = self.config
        x = as_point(x0, function.dim).copy()
        logger.info(
            "Starting gradient descent: gradient_tolerance=%g, max_iterations=%d, "
            "line_search=%r",
            cfg.gradient_tolerance,
            cfg.max_iterations,
            self.line_search,
        )

        hist: list[Array] = [x.copy()] if self.history else []
        nfev = 0
        njev = 0
        nit = 0
        fx = float(function.value(x))
        nfev += 1
        if not math.isfinite(fx):
            raise NonFiniteValueError("objective value", nit)
        logger.info("Starting with f(x0) = %.10g", fx)
        best_x, best_fx = x, fx
        best_grad_norm = float("nan")

        while True:
            grad = np.asarray(function.gradient(x), dtype=float)
            njev += 1
            if grad.shape != x.shape:
                raise DimensionMismatchError(x.size, grad.shape, what="gradient")
            if not np.all(np.isfinite(grad)):
                raise NonFiniteValueError("gradient", nit)
            grad_norm = float(np.linalg.norm(grad))
            if x is best_x:
                best_grad_norm = grad_norm

            if check_convergence(grad_norm, cfg.gradient_tolerance):
                status = Status.CONVERGED
                best_x, best_fx, best_grad_norm = x, fx, grad_norm
                break
            if nit >= cfg.max_iterations:
                status = Status.MAX_ITERATIONS
                break

            step = self.line_search.search(function.value, x, -grad, grad, fx)
            nfev += step.nfev
            if not step.success:
                status = Status.LINE_SEARCH_FAILED
                best_x, best_fx, best_grad_norm = x, fx, grad_norm
                break

            x, fx = step.position, step.value
            if not math.isfinite(fx):
                raise NonFiniteValueError("objective value", nit + 1)
            nit += 1
            if fx <= best_fx:
                best_x, best_fx = x, fx
            logger.debug(
                "Iteration %6d: f = %.10g, |g| = %.3e, step = %.3e",
                nit,
                fx,
                grad_norm,
                step.alpha,
            )
            if self.history:
                hist.append(x.copy())
            if self.callback is not None:
                self.callback(IterationEvent(nit, x.copy(), fx, grad_norm, step.alpha))

        logger.info(
            "Gradient descent stopped after %d iterations (%s): f = %.10g, |g| = %.3e",
            nit,
            status.value,
            best_fx,
            best_grad_norm,
        )
        return Solution(
            position=best_x,
            value=best_fx,
            status=status,
            nit=nit,
            grad_norm=best_grad_norm,
            nfev=nfev,
            njev=njev,
            history=hist,
        )


__all__ = ["GradientDescent", "GradientDescentConfig"]
