"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from steepest import Differentiable, GradientDescent
from steepest.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_namespaced_logger():
    """Test that get_logger returns a logger below the package namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "steepest.test_module"
    assert get_logger("steepest.gradient").name == "steepest.gradient"
    assert get_logger().name == "steepest"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    # pytest may attach its own capture handlers next to ours
    assert sum(type(h) is logging.StreamHandler for h in logger1.handlers) == 1


def test_set_log_level_accepts_names_and_numbers():
    """Test that set_log_level updates existing loggers."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to the root logger."""
    assert get_logger("test_module").propagate is False


def test_configure_logging_redirects_output():
    """Test that configure_logging swaps the stream of existing loggers."""
    logger = get_logger("test_module")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger.debug("Debug message")
        assert "[DEBUG] steepest.test_module: Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_gradient_descent_reports_progress():
    """Test that minimization logs its start, iterations and stop reason."""
    stream = StringIO()
    try:
        configure_logging(level="DEBUG", stream=stream)
        f = Differentiable(lambda x: float(x @ x), lambda x: 2 * x)
        GradientDescent().minimize(f, np.array([1.0, 1.0]))
        output = stream.getvalue()
        assert "Starting gradient descent" in output
        assert "Iteration      1" in output
        assert "converged" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_default_level_is_quiet(capsys):
    """Test that nothing is emitted at INFO level by default."""
    logger = get_logger("quiet_module")
    logger.info("should not appear")
    assert "should not appear" not in capsys.readouterr().err
