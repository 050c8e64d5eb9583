"""Tests for backend abstraction."""

from __future__ import annotations

import numpy as np
import pytest

from pycdfmvn.backend import array_namespace, get_backend, set_backend


class TestGetBackend:
    def test_numpy_backend(self):
        xp = get_backend("numpy")
        assert xp.name == "numpy"

    def test_default_is_numpy(self):
        xp = get_backend()
        assert xp.name == "numpy"

    def test_backend_is_cached(self):
        assert get_backend("numpy") is get_backend("numpy")

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            get_backend("invalid")

    def test_set_invalid_backend(self):
        with pytest.raises(ValueError):
            set_backend("jax")


class TestArrayNamespace:
    def test_infer_numpy(self):
        xp = array_namespace(np.array([1.0]))
        assert xp.name == "numpy"

    def test_infer_none_returns_default(self):
        xp = array_namespace(None)
        assert xp.name == "numpy"

    def test_lists_use_default(self):
        xp = array_namespace([0.0, 1.0], [[1.0, 0.0], [0.0, 1.0]])
        assert xp.name == "numpy"


class TestNumpyBackendOps:
    def test_normal_cdf(self, xp_numpy):
        np.testing.assert_allclose(xp_numpy.normal_cdf(xp_numpy.array(0.0)), 0.5, atol=1e-15)
        assert xp_numpy.normal_cdf(xp_numpy.array(-10.0)) < 1e-20
        assert xp_numpy.normal_cdf(xp_numpy.array(10.0)) == 1.0

    def test_normal_ppf_inverts_cdf(self, xp_numpy):
        x = np.array([-6.0, -1.5, 0.0, 0.7, 4.0])
        np.testing.assert_allclose(xp_numpy.normal_ppf(xp_numpy.normal_cdf(x)), x, atol=1e-10)

    def test_cholesky_ex_success(self, xp_numpy, pd_3x3):
        L, ok = xp_numpy.cholesky_ex(pd_3x3)
        assert ok
        np.testing.assert_allclose(L @ L.T, pd_3x3, atol=1e-12)
        np.testing.assert_array_equal(np.triu(L, 1), 0.0)

    def test_cholesky_ex_reports_failure(self, xp_numpy):
        indefinite = np.array([[1.0, 2.0], [2.0, 1.0]])
        L, ok = xp_numpy.cholesky_ex(indefinite)
        assert not ok
        assert np.isnan(L).all()


class TestTorchBackendOps:
    def test_infer_torch(self, xp_torch):
        import torch
        xp = array_namespace(torch.tensor([1.0]))
        assert xp.name == "torch"

    def test_normal_cdf_matches_numpy(self, xp_torch, xp_numpy):
        x = np.linspace(-5.0, 5.0, 11)
        np.testing.assert_allclose(
            xp_torch.to_numpy(xp_torch.normal_cdf(xp_torch.array(x))),
            xp_numpy.normal_cdf(x),
            atol=1e-12,
        )

    def test_normal_ppf_matches_numpy(self, xp_torch, xp_numpy):
        p = np.array([1e-10, 0.01, 0.5, 0.9, 1.0 - 1e-10])
        np.testing.assert_allclose(
            xp_torch.to_numpy(xp_torch.normal_ppf(xp_torch.array(p))),
            xp_numpy.normal_ppf(p),
            rtol=1e-8,
        )

    def test_cholesky_ex(self, xp_torch, pd_3x3):
        _, ok = xp_torch.cholesky_ex(xp_torch.array(pd_3x3))
        assert ok
        _, ok = xp_torch.cholesky_ex(xp_torch.array([[1.0, 2.0], [2.0, 1.0]]))
        assert not ok
