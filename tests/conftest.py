"""Shared test fixtures for cne-optim tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- sphere: Sum-of-squares objective
- counting_objective: Objective that records how often it was called
- ranked_candidates: Small population whose fitness equals its index
"""

import numpy as np
import pytest


def sphere_fn(x: np.ndarray) -> float:
    """Module-level sphere function (picklable for joblib workers)."""
    return float(np.sum(x**2))


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sphere():
    """Sum-of-squares objective as a plain callable."""
    return sphere_fn


class CountingObjective:
    """Objective with an evaluate() method that counts its calls."""

    def __init__(self, value: float | None = None) -> None:
        self.value = value
        self.calls = 0

    def evaluate(self, x: np.ndarray) -> float:
        self.calls += 1
        if self.value is not None:
            return self.value
        return float(np.sum(x**2))


@pytest.fixture
def counting_objective() -> CountingObjective:
    """Sphere objective that counts evaluations."""
    return CountingObjective()


@pytest.fixture
def constant_zero_objective() -> CountingObjective:
    """Objective that always returns 0.0 and counts evaluations."""
    return CountingObjective(value=0.0)


@pytest.fixture
def ranked_candidates() -> np.ndarray:
    """Population of 8 candidates of shape (2, 2); candidate i is filled with i.

    Paired with ``np.arange(8.0)`` as fitness, candidate i has rank i.
    """
    return np.stack([np.full((2, 2), float(i)) for i in range(8)])
