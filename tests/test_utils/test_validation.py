"""Tests for parameter validation."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from pycdfmvn.utils import (
    ParamError,
    check_cdf_params,
    is_positive_definite,
    is_symmetric,
    validate_cdf_params,
    validate_tvn_params,
)


def _errors(caplog):
    return [r for r in caplog.records if r.levelno == logging.ERROR]


class TestIsSymmetric:
    def test_symmetric(self, pd_3x3):
        assert is_symmetric(pd_3x3)

    def test_not_symmetric(self, pd_3x3):
        A = pd_3x3.copy()
        A[0, 2] += 0.1
        assert not is_symmetric(A)

    def test_not_square(self):
        assert not is_symmetric(np.ones((2, 3)))

    def test_tolerance_scales_with_magnitude(self, corr_3x3):
        A = 1e6 * corr_3x3
        A[0, 1] += 1e-4
        assert is_symmetric(A)
        B = corr_3x3.copy()
        B[0, 1] += 1e-4
        assert not is_symmetric(B)


class TestIsPositiveDefinite:
    def test_pd(self, pd_3x3):
        assert is_positive_definite(pd_3x3)

    def test_negative_eigenvalue(self):
        assert not is_positive_definite(np.array([[1.0, 2.0], [2.0, 1.0]]))

    def test_singular(self):
        assert not is_positive_definite(np.ones((3, 3)))

    def test_nonsymmetric_is_rejected(self):
        assert not is_positive_definite(np.array([[2.0, 0.5], [0.0, 2.0]]))


class TestCheckCdfParams:
    def test_valid(self, cov_3x3):
        assert check_cdf_params([0.0, 1.0, 2.0], cov_3x3, [0.0, 0.0, 0.0]) is None

    def test_infinite_limits_allowed(self, cov_3x3):
        assert check_cdf_params([np.inf, -np.inf, 0.0], cov_3x3) is None

    def test_missing_value(self, cov_3x3):
        assert check_cdf_params([0.0, np.nan, 2.0], cov_3x3) is ParamError.MISSING_VALUE
        sigma = cov_3x3.copy()
        sigma[1, 1] = np.nan
        assert check_cdf_params([0.0, 1.0, 2.0], sigma) is ParamError.MISSING_VALUE
        assert check_cdf_params([0.0, 1.0, 2.0], cov_3x3, [np.nan, 0, 0]) is ParamError.MISSING_VALUE

    def test_not_symmetric(self, cov_3x3):
        sigma = cov_3x3.copy()
        sigma[2, 0] += 0.5
        assert check_cdf_params([0.0, 1.0, 2.0], sigma) is ParamError.NOT_SYMMETRIC

    def test_dimension_mismatch(self, cov_3x3):
        assert check_cdf_params([0.0, 1.0], cov_3x3) is ParamError.DIM_MISMATCH
        assert check_cdf_params([0.0, 1.0, 2.0], cov_3x3, [0.0]) is ParamError.DIM_MISMATCH

    def test_not_positive_definite(self):
        sigma = np.array([[1.0, 0.9, 0.9], [0.9, 1.0, -0.9], [0.9, -0.9, 1.0]])
        assert check_cdf_params([0.0, 0.0, 0.0], sigma) is ParamError.NOT_POSITIVE_DEFINITE

    def test_too_many_dimensions(self):
        assert check_cdf_params(np.zeros(33), np.eye(33)) is ParamError.TOO_MANY_DIMENSIONS
        assert check_cdf_params(np.zeros(32), np.eye(32)) is None


class TestValidateCdfParams:
    def test_valid_logs_nothing(self, cov_3x3, caplog):
        assert validate_cdf_params([0.0, 1.0, 2.0], cov_3x3)
        assert _errors(caplog) == []

    @pytest.mark.parametrize(
        "b, sigma",
        [
            ([0.0, 0.0], np.array([[1.0, 0.2], [0.3, 1.0]])),
            ([0.0, 0.0], np.array([[1.0, 2.0], [2.0, 1.0]])),
            ([0.0, 0.0, 0.0], np.eye(2)),
            ([0.0, np.nan], np.eye(2)),
        ],
    )
    def test_failure_logs_once(self, b, sigma, caplog):
        assert not validate_cdf_params(b, sigma)
        errors = _errors(caplog)
        assert len(errors) == 1
        assert errors[0].name == "pycdfmvn.utils._validation"

    def test_injected_logger(self, caplog):
        sink = logging.getLogger("tests.diagnostics")
        assert not validate_cdf_params([0.0, 0.0], np.array([[1.0, 2.0], [2.0, 1.0]]), logger=sink)
        errors = _errors(caplog)
        assert len(errors) == 1
        assert errors[0].name == "tests.diagnostics"
        assert "positive definite" in errors[0].getMessage()


class TestValidateTvnParams:
    def test_valid(self, cov_3x3):
        assert validate_tvn_params([0.0, 0.0, 0.0], cov_3x3)

    def test_wrong_dimension(self, caplog):
        assert not validate_tvn_params([0.0, 0.0], np.eye(2))
        errors = _errors(caplog)
        assert len(errors) == 1
        assert "3 dimensions" in errors[0].getMessage()

    def test_inherits_cdf_checks(self, cov_3x3, caplog):
        assert not validate_tvn_params([0.0, 0.0], cov_3x3)
        assert len(_errors(caplog)) == 1
