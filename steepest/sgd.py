"""Stochastic gradient descent over sums of objectives."""

from __future__ import annotations

import logging
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
from .errors import InvalidConfigurationError, NonFiniteValueError
from .function import DifferentiableSummation
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SGDConfig:
    """
    Parameters of :class:`StochasticGradientDescent`.

    Args:
        max_iterations: Number of mini-batch steps.
        gradient_tolerance: Stop once the full gradient norm is below this. It
            is only evaluated when a mini-batch gradient norm is below it too.
        step_size: Fixed step width (learning rate).
        mini_batch: Number of distinct terms drawn per step, capped at the
            number of terms.
        seed: Seed for the term sampler. ``None`` draws fresh entropy.
    """

    max_iterations: int = 1000
    gradient_tolerance: float = 1e-4
    step_size: float = 0.01
    mini_batch: int = 1
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        check_integer("max_iterations", self.max_iterations, 0)
        if not self.gradient_tolerance > 0:
            raise InvalidConfigurationError("gradient_tolerance must be positive")
        if not (self.step_size > 0 and math.isfinite(self.step_size)):
            raise InvalidConfigurationError("step_size must be positive and finite")
        check_integer("mini_batch", self.mini_batch, 1)


class StochasticGradientDescent(Minimizer):
    """
    Gradient descent that follows the gradient of a random subset of terms.

    Every iteration draws ``mini_batch`` terms without replacement, sums their
    gradients and moves ``step_size`` against it. A mini-batch that looks
    stationary is confirmed against the full gradient before the run counts as
    converged. The sampler is created per call from ``config.seed``, so seeded
    runs repeat exactly.
    """

    def __init__(
        self,
        config: Optional[SGDConfig] = None,
        callback: Optional[ProgressCallback] = None,
        history: bool = False,
    ) -> None:
        self.config = config if config is not None else SGDConfig()
        self.callback = callback
        self.history = history

    def minimize(self, function: DifferentiableSummation, x0: Array) -> Solution:
        if not isinstance(function, DifferentiableSummation):
            raise TypeError("StochasticGradientDescent needs a DifferentiableSummation")
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        n_terms = len(function)
        batch = min(cfg.mini_batch, n_terms)
        x = as_point(x0, function.dim).copy()
        logger.info(
            "Starting stochastic gradient descent: %d terms, mini_batch=%d, "
            "step_size=%g, max_iterations=%d",
            n_terms,
            batch,
            cfg.step_size,
            cfg.max_iterations,
        )

        hist: list[Array] = [x.copy()] if self.history else []
        nfev = 0
        njev = 0
        nit = 0
        status = Status.MAX_ITERATIONS
        grad_norm = float("nan")
        while nit < cfg.max_iterations:
            indices = rng.choice(n_terms, size=batch, replace=False)
            grad = function.partial_gradient(x, indices)
            njev += 1
            if not np.all(np.isfinite(grad)):
                raise NonFiniteValueError("gradient", nit)
            grad_norm = float(np.linalg.norm(grad))
            if check_convergence(grad_norm, cfg.gradient_tolerance):
                full_norm = float(np.linalg.norm(function.gradient(x)))
                njev += 1
                if check_convergence(full_norm, cfg.gradient_tolerance):
                    grad_norm = full_norm
                    status = Status.CONVERGED
                    break
            x = x - cfg.step_size * grad
            nit += 1
            if self.history:
                hist.append(x.copy())
            if self.callback is not None or logger.isEnabledFor(logging.DEBUG):
                fx = function.value(x)
                nfev += 1
                logger.debug("Iteration %6d: f = %.10g, |g| = %.3e", nit, fx, grad_norm)
                if self.callback is not None:
                    self.callback(IterationEvent(nit, x.copy(), fx, grad_norm, cfg.step_size))

        fx = float(function.value(x))
        nfev += 1
        if not math.isfinite(fx):
            raise NonFiniteValueError("objective value", nit)
        logger.info(
            "Stochastic gradient descent stopped after %d iterations (%s): f = %.10g",
            nit,
            status.value,
            fx,
        )
        return Solution(
            position=x,
            value=fx,
            status=status,
            nit=nit,
            grad_norm=grad_norm,
            nfev=nfev,
            njev=njev,
            history=hist,
        )


__all__ = ["SGDConfig", "StochasticGradientDescent"]
