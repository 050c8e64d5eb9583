"""Input validation for the MVN probability routines.

Validation never raises on bad numerical input. Each ``validate_*`` function
logs one ERROR record describing the first problem it finds and returns
False, so callers can hand back NaN and let batch loops continue.
"""

from __future__ import annotations

import enum
import logging

import numpy as np
from numpy.typing import NDArray

from pycdfmvn.backend._array_api import array_namespace, as_float64
from pycdfmvn.utils._qmc import MAX_DIMENSION

_logger = logging.getLogger(__name__)


class ParamError(enum.Enum):
    """Reasons a (b, Sigma, mu) triple is rejected."""

    MISSING_VALUE = "b, Sigma and mu must not contain missing values"
    NOT_SYMMETRIC = "Sigma is not symmetric"
    DIM_MISMATCH = "b, Sigma and mu have incompatible dimensions"
    TOO_MANY_DIMENSIONS = f"the lattice rule supports at most {MAX_DIMENSION} dimensions"
    NOT_POSITIVE_DEFINITE = "Sigma is not positive definite"
    WRONG_DIMENSION = "the trivariate routine requires exactly 3 dimensions"


def is_symmetric(A: NDArray) -> bool:
    """Check that ``A`` is square and symmetric relative to its scale.

    The tolerance is ``max|A| * sqrt(machine epsilon)``.
    """
    A = np.asarray(A, dtype=np.float64)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    c = np.max(np.abs(A)) if A.size else 0.0
    return bool(np.max(np.abs(A - A.T), initial=0.0) < c * np.sqrt(np.finfo(np.float64).eps))


def is_positive_definite(A: NDArray, *, xp=None) -> bool:
    """Check that ``A`` is symmetric and its Cholesky factorization succeeds."""
    if xp is None:
        xp = array_namespace(A)
    A_np = as_float64(xp, A)
    if not is_symmetric(A_np):
        return False
    _, ok = xp.cholesky_ex(xp.array(A_np))
    return bool(ok)


def check_cdf_params(b, sigma, mu=None, *, xp=None) -> ParamError | None:
    """Return the first problem with ``(b, sigma, mu)`` or None if valid.

    Infinite limits in ``b`` are allowed; only NaN counts as missing.
    Dimensions beyond the lattice generator table are rejected.
    """
    if xp is None:
        xp = array_namespace(b, sigma, mu)
    b_np = as_float64(xp, b).ravel()
    sigma_np = np.atleast_2d(as_float64(xp, sigma))
    mu_np = np.zeros_like(b_np) if mu is None else as_float64(xp, mu).ravel()

    if np.isnan(b_np).any() or np.isnan(sigma_np).any() or np.isnan(mu_np).any():
        return ParamError.MISSING_VALUE
    if not is_symmetric(sigma_np):
        return ParamError.NOT_SYMMETRIC
    q = sigma_np.shape[0]
    if b_np.size != q or mu_np.size != q:
        return ParamError.DIM_MISMATCH
    if q > MAX_DIMENSION:
        return ParamError.TOO_MANY_DIMENSIONS
    if not is_positive_definite(sigma_np, xp=xp):
        return ParamError.NOT_POSITIVE_DEFINITE
    return None


def _report(problem: ParamError | None, log: logging.Logger | None) -> bool:
    if problem is None:
        return True
    (log or _logger).error("Invalid parameters: %s.", problem.value)
    return False


def validate_cdf_params(b, sigma, mu=None, *, logger: logging.Logger | None = None, xp=None) -> bool:
    """Validate inputs of :func:`pycdfmvn.cdfmvn`.

    Parameters
    ----------
    b : array-like, shape (q,)
        Upper limits.
    sigma : array-like, shape (q, q)
        Covariance matrix.
    mu : array-like, shape (q,), optional
        Mean vector; zeros when omitted.
    logger : logging.Logger, optional
        Receives one ERROR record on failure. Defaults to this module's logger.

    Returns
    -------
    ok : bool
    """
    return _report(check_cdf_params(b, sigma, mu, xp=xp), logger)


def validate_tvn_params(b, sigma, mu=None, *, logger: logging.Logger | None = None, xp=None) -> bool:
    """Validate inputs of :func:`pycdfmvn.cdftvn` (``q`` must be 3)."""
    if xp is None:
        xp = array_namespace(b, sigma, mu)
    sigma_np = np.atleast_2d(as_float64(xp, sigma))
    if sigma_np.shape != (3, 3):
        return _report(ParamError.WRONG_DIMENSION, logger)
    return _report(check_cdf_params(b, sigma, mu, xp=xp), logger)
