"""Shared test fixtures for pycdfmvn."""

from __future__ import annotations

import numpy as np
import pytest

from pycdfmvn.backend import get_backend


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture
def pd_3x3():
    """3x3 positive-definite symmetric matrix."""
    return np.array([[4.0, 2.0, 1.0],
                     [2.0, 5.0, 3.0],
                     [1.0, 3.0, 6.0]])


@pytest.fixture
def corr_3x3():
    """3x3 correlation matrix with distinct positive correlations."""
    return np.array([[1.0, 0.6, 0.3],
                     [0.6, 1.0, 0.5],
                     [0.3, 0.5, 1.0]])


@pytest.fixture
def cov_3x3(corr_3x3):
    """Covariance with standard deviations (1.0, 1.5, 2.0) around ``corr_3x3``."""
    omega = np.diag([1.0, 1.5, 2.0])
    return omega @ corr_3x3 @ omega


@pytest.fixture
def equicorr():
    """Factory for the equicorrelated matrix (1 - rho) I + rho J."""
    def _make(q, rho):
        return (1.0 - rho) * np.eye(q) + rho * np.ones((q, q))
    return _make


@pytest.fixture
def random_corr():
    """Factory for random well-conditioned correlation matrices."""
    def _make(rng, q):
        A = rng.standard_normal((q, q + 2))
        S = A @ A.T
        sd = np.sqrt(np.diag(S))
        R = S / np.outer(sd, sd)
        np.fill_diagonal(R, 1.0)
        return R
    return _make
