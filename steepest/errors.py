"""Exception types raised by the minimizers.

Only genuine failures are raised. Running out of iterations or failing to find
an acceptable step are ordinary outcomes reported through
:class:`steepest.core.Status` on the returned solution.
"""

from __future__ import annotations

from typing import Optional


class OptimizationError(Exception):
    """Base class for all errors raised by steepest."""


class DimensionMismatchError(OptimizationError, ValueError):
    """Raised when a point does not have the dimension a function expects."""

    def __init__(self, expected: Optional[int], actual: object, what: str = "point") -> None:
        self.expected = expected
        self.actual = actual
        if expected is None:
            message = f"Expected a one-dimensional {what}, got shape {actual}."
        else:
            message = f"Expected {what} of dimension {expected}, got shape {actual}."
        super().__init__(message)


class InvalidConfigurationError(OptimizationError, ValueError):
    """Raised for out-of-range configuration values."""


class NonFiniteValueError(OptimizationError, ArithmeticError):
    """Raised when an objective or gradient evaluates to NaN or infinity."""

    def __init__(self, what: str, iteration: Optional[int] = None) -> None:
        self.what = what
        self.iteration = iteration
        where = "" if iteration is None else f" at iteration {iteration}"
        super().__init__(f"Non-finite {what} encountered{where}.")


__all__ = [
    "DimensionMismatchError",
    "InvalidConfigurationError",
    "NonFiniteValueError",
    "OptimizationError",
]
