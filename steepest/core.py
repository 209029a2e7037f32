"""Core interfaces shared by all minimizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from .errors import DimensionMismatchError, InvalidConfigurationError

if TYPE_CHECKING:
    from .function import Function

Array = np.ndarray


class Status(Enum):
    """Why a minimization run stopped."""

    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    LINE_SEARCH_FAILED = "line_search_failed"


_MESSAGES = {
    Status.CONVERGED: "Gradient tolerance satisfied.",
    Status.MAX_ITERATIONS: "Maximum iterations reached.",
    Status.LINE_SEARCH_FAILED: "Line search found no acceptable step.",
}


@dataclass(frozen=True)
class Solution:
    """
    Terminal output of a :meth:`Minimizer.minimize` call.

    Attributes:
        position: Final point. The array is read-only.
        value: Objective value at ``position``.
        status: Terminal state of the run.
        nit: Number of accepted iterations.
        grad_norm: Euclidean norm of the last gradient evaluated.
        nfev: Objective evaluations made by the minimizer itself. Evaluations
            hidden inside a finite-difference gradient are not included.
        njev: Gradient evaluations.
        history: Accepted positions, starting with the initial point, when the
            minimizer was asked to record them.
    """

    position: Array
    value: float
    status: Status
    nit: int = 0
    grad_norm: float = float("nan")
    nfev: int = 0
    njev: int = 0
    history: List[Array] = field(default_factory=list)

    def __post_init__(self) -> None:
        position = np.array(self.position, dtype=float)
        position.setflags(write=False)
        object.__setattr__(self, "position", position)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED

    @property
    def message(self) -> str:
        return _MESSAGES[self.status]


@dataclass(frozen=True)
class IterationEvent:
    """Progress record handed to a minimizer callback after each iteration."""

    iteration: int
    position: Array
    value: float
    grad_norm: float
    step: float


ProgressCallback = Callable[[IterationEvent], None]


class Minimizer(ABC):
    """Strategy interface implemented by every minimization algorithm."""

    @abstractmethod
    def minimize(self, function: "Function", x0: Array) -> Solution:
        """Minimize ``function`` starting from ``x0``."""


def as_point(x: Array, dim: Optional[int] = None) -> Array:
    """Convert ``x`` to a float vector, checking it against ``dim``."""
    point = np.asarray(x, dtype=float)
    if point.ndim != 1 or (dim is not None and point.shape[0] != dim):
        raise DimensionMismatchError(dim, point.shape)
    return point


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if the gradient norm is below tolerance."""
    return grad_norm < tol


def check_integer(name: str, value: object, minimum: int) -> None:
    """Reject configuration values that are not integers of at least ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfigurationError(f"{name} must be an integer")
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be at least {minimum}")


__all__ = [
    "Array",
    "IterationEvent",
    "Minimizer",
    "ProgressCallback",
    "Solution",
    "Status",
    "as_point",
    "check_convergence",
    "check_integer",
]
