"""steepest - first-order numerical minimization for NumPy.

Example
-------
>>> import numpy as np
>>> from steepest import GradientDescent, NumericallyDifferentiated, ValueOnly
>>> f = NumericallyDifferentiated(ValueOnly(lambda x: float(np.sum((x - 1.0) ** 2))))
>>> sol = GradientDescent().minimize(f, np.zeros(3))
>>> bool(np.allclose(sol.position, 1.0, atol=1e-4))
True
"""

__version__ = "0.1.0"

# Results and strategy interface
from .core import IterationEvent, Minimizer, Solution, Status

# Errors
from .errors import (
    DimensionMismatchError,
    InvalidConfigurationError,
    NonFiniteValueError,
    OptimizationError,
)

# Objective functions
from .function import (
    Differentiable,
    DifferentiableFunction,
    DifferentiableSummation,
    Function,
    Summation,
    ValueOnly,
    from_callables,
)
from .gradient import GradientDescent, GradientDescentConfig
from .line_search import (
    ArmijoLineSearch,
    ExactLineSearch,
    FixedStepWidth,
    LineSearch,
    LineSearchResult,
    backtracking_armijo,
)
from .logging import configure_logging, get_logger, set_log_level
from .numeric import NumericalDifferentiation, NumericallyDifferentiated, approx_grad
from .problems import Problem, Rosenbrock, Sphere
from .sgd import SGDConfig, StochasticGradientDescent

__all__ = [
    "ArmijoLineSearch",
    "Differentiable",
    "DifferentiableFunction",
    "DifferentiableSummation",
    "DimensionMismatchError",
    "ExactLineSearch",
    "FixedStepWidth",
    "Function",
    "GradientDescent",
    "GradientDescentConfig",
    "InvalidConfigurationError",
    "IterationEvent",
    "LineSearch",
    "LineSearchResult",
    "Minimizer",
    "NonFiniteValueError",
    "NumericalDifferentiation",
    "NumericallyDifferentiated",
    "OptimizationError",
    "Problem",
    "Rosenbrock",
    "SGDConfig",
    "Solution",
    "Sphere",
    "Status",
    "StochasticGradientDescent",
    "Summation",
    "ValueOnly",
    "__version__",
    "approx_grad",
    "backtracking_armijo",
    "configure_logging",
    "from_callables",
    "get_logger",
    "set_log_level",
]
