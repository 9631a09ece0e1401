"""Pytest configuration and shared fixtures for eqqp tests.

This module provides:
- A deterministic numpy RNG fixture
- Random problem builders used across the solver tests
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def strictly_convex_qp(rng: np.random.Generator):
    """Random strictly convex QP with a full-row-rank constraint matrix.

    Returns:
        Tuple ``(G, c, A, b)`` with ``n = 6`` variables and ``m = 3`` rows.
    """
    n, m = 6, 3
    root = rng.standard_normal((n, n))
    hessian = root @ root.T + n * np.eye(n)
    linear = rng.standard_normal(n)
    a_mat = rng.standard_normal((m, n))
    b_vec = rng.standard_normal(m)
    return hessian, linear, a_mat, b_vec


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))
