"""Logging utilities for steepest.

Minimizers report the start and end of a run at INFO and every accepted
iteration at DEBUG. Nothing is printed unless the level is lowered.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger below the ``steepest`` namespace.

    Loggers are cached so repeated calls never stack duplicate handlers.

    Args:
        name: Logger name, typically ``__name__``. ``None`` returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from steepest.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting minimization")
    """
    if name is None:
        name = "steepest"
    logger_name = name if name == "steepest" or name.startswith("steepest.") else f"steepest.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every steepest logger, existing and future.

    Args:
        level: A ``logging`` level or its name (``"DEBUG"``, ``"INFO"``...).
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Replace the handlers of all steepest loggers.

    Typically called once at application startup, e.g. to watch iteration
    progress with ``configure_logging("DEBUG")``.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. ``None`` keeps the default.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    stream = sys.stderr if stream is None else stream

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level


__all__ = ["configure_logging", "get_logger", "set_log_level"]
