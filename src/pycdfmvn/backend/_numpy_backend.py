"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg
from scipy import special


class NumpyBackend:
    """Backend wrapping NumPy + SciPy.

    Supplies the primitives consumed by the quadrature engine: the standard
    normal CDF and quantile, and a Cholesky factorization that reports
    failure instead of raising.
    """

    name = "numpy"
    float64 = np.float64

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=np.float64):
        return np.asarray(data, dtype=dtype)

    # --- Statistical distributions ---
    @staticmethod
    def normal_cdf(x):
        """Standard normal CDF."""
        return special.ndtr(x)

    @staticmethod
    def normal_ppf(p):
        """Standard normal quantile (inverse CDF)."""
        return special.ndtri(p)

    # --- Linear algebra ---
    @staticmethod
    def cholesky_ex(A):
        """Lower Cholesky factor and a success flag.

        Returns ``(L, False)`` instead of raising when ``A`` is not
        numerically positive definite or the factor contains NaN.
        """
        A = np.asarray(A, dtype=np.float64)
        try:
            L = scipy.linalg.cholesky(A, lower=True, check_finite=False)
        except np.linalg.LinAlgError:
            return np.full(A.shape, np.nan), False
        return L, bool(np.all(np.isfinite(L)))

    # --- Conversion ---
    @staticmethod
    def to_numpy(x):
        return np.asarray(x)
