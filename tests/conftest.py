"""Pytest configuration and shared fixtures for steepest tests.

This module provides:
- A deterministic numpy RNG fixture
- A shared quadratic objective
"""

import os

import numpy as np
import pytest

from steepest import Differentiable, set_log_level


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the legacy global numpy RNG for every test."""
    np.random.seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def reset_log_level():
    """Restore the default log level after tests that lower it."""
    yield
    set_log_level("WARNING")

@pytest.fixture
def sphere() -> Differentiable:
    """``f(x) = |x|^2`` with its analytic gradient ``2x``."""
    return Differentiable(lambda x: float(x @ x), lambda x: 2 * x)
