"""Trivariate normal CDF by reduction to one-dimensional integrals.

For standardized limits h and correlations r21, r31, r32,

    P(X < h) = Phi(h1) * BVN(h2, h3; r32)
               + (1 / 2pi) * [ int_0^{asin r21} U_2(t) dt + int_0^{asin r31} U_3(t) dt ]

where the integrands come from differentiating along the path that
scales r21 and r31 from zero to their values (Plackett's identity).
See Genz, A. (2004). Numerical computation of rectangular bivariate and
trivariate normal and t probabilities. Statistics and Computing, 14:
251-260.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray
from scipy import integrate
from scipy.special import ndtr

from pycdfmvn.backend._array_api import array_namespace, as_float64
from pycdfmvn.mvn._cdfmvn import _standardize
from pycdfmvn.mvn._univariate import bivariate_normal_cdf
from pycdfmvn.utils._validation import validate_tvn_params

# Phi(10) is 1 in double precision.
_LIMIT_CLIP = 10.0


def _sincs(x: float) -> tuple[float, float]:
    """sin(x) and cos(x)^2, accurate near x = +/- pi/2."""
    ee = (0.5 * math.pi - abs(x)) ** 2
    if ee < 5e-5:
        sx = math.copysign(1.0 - ee * (1.0 - ee / 12.0) / 2.0, x)
        cs = ee * (1.0 - ee * (1.0 - 2.0 * ee / 15.0) / 3.0)
        return sx, cs
    sx = math.sin(x)
    return sx, 1.0 - sx * sx


def _pntgnd(ba: float, bb: float, bc: float, ra: float, rb: float, r: float, rr: float) -> float:
    dt = rr * (rr - (ra - rb) ** 2 - 2.0 * ra * rb * (1.0 - r))
    if dt <= 0.0:
        return 0.0
    bt = (bc * rr + ba * (r * rb - ra) + bb * (r * ra - rb)) / math.sqrt(dt)
    ft = (ba - r * bb) ** 2 / rr + bb * bb
    if bt <= -10.0 or ft >= 100.0:
        return 0.0
    val = math.exp(-0.5 * ft)
    if bt < 10.0:
        val *= float(ndtr(bt))
    return val


def tvn_integrand(
    theta: float,
    ha: float,
    hb: float,
    hc: float,
    asin_path: float,
    asin_other: float,
    r32: float,
) -> float:
    """Integrand of one correction term of the trivariate reduction.

    Parameters
    ----------
    theta : float
        Integration variable in [0, asin_path].
    ha, hb, hc : float
        Limits ordered as (h1, h_j, h_k) where j is the coordinate whose
        correlation with coordinate 1 follows theta.
    asin_path : float
        ``asin(r_j1)``; must be nonzero.
    asin_other : float
        ``asin(r_k1)``; the k-1 correlation is scaled along the same path.
    r32 : float
        Correlation between coordinates 2 and 3.

    Returns
    -------
    value : float
        Zero where the conditional variance term vanishes.
    """
    r, rr = _sincs(theta)
    ra, _ = _sincs(asin_other * theta / asin_path)
    return _pntgnd(ha, hb, hc, ra, r32, r, rr)


def _signed_quad(func, lo: float, hi: float, args: tuple, epsabs: float) -> float:
    """Integrate over the sorted interval, then restore the orientation."""
    a, b = (lo, hi) if lo <= hi else (hi, lo)
    val, _ = integrate.quad(func, a, b, args=args, epsabs=epsabs, epsrel=epsabs, limit=100)
    return val if lo <= hi else -val


def _tvn_standard(h: NDArray, R: NDArray, epsabs: float) -> float:
    """P(X < h) for a standardized trivariate normal with correlation R."""
    h1, h2, h3 = (float(v) for v in h)
    r12, r13, r23 = float(R[0, 1]), float(R[0, 2]), float(R[1, 2])

    # Put the largest correlation in position (3, 2).
    if abs(r12) > abs(r13):
        h2, h3 = h3, h2
        r12, r13 = r13, r12
    if abs(r13) > abs(r23):
        h1, h2 = h2, h1
        r13, r23 = r23, r13

    h1, h2, h3 = (min(max(v, -_LIMIT_CLIP), _LIMIT_CLIP) for v in (h1, h2, h3))

    if h1 == h2 == h3 == 0.0:
        return 0.125 + (math.asin(r12) + math.asin(r13) + math.asin(r23)) / (4.0 * math.pi)

    p1 = float(ndtr(h1)) * bivariate_normal_cdf(h2, h3, r23)

    rua = math.asin(r12)
    rub = math.asin(r13)
    p2 = 0.0
    if r12 != 0.0:
        p2 = _signed_quad(tvn_integrand, 0.0, rua, (h1, h2, h3, rua, rub, r23), epsabs)
    p3 = 0.0
    if r13 != 0.0:
        p3 = _signed_quad(tvn_integrand, 0.0, rub, (h1, h3, h2, rub, rua, r23), epsabs)

    p = p1 + (p2 + p3) / (2.0 * math.pi)
    return max(0.0, min(1.0, p))


def cdftvn(
    b: NDArray,
    sigma: NDArray,
    mu: NDArray | None = None,
    *,
    epsabs: float = 1e-10,
    logger: logging.Logger | None = None,
    xp=None,
) -> float:
    """Trivariate normal CDF P(X < b) for X ~ N(mu, Sigma), Sigma 3x3.

    Deterministic alternative to :func:`pycdfmvn.cdfmvn` for ``q = 3``:
    one bivariate normal term plus two adaptive 1-D quadratures.

    Parameters
    ----------
    b : array-like, shape (3,)
        Upper limits.
    sigma : array-like, shape (3, 3)
        Covariance matrix.
    mu : array-like, shape (3,), optional
        Mean vector.
    epsabs : float
        Absolute tolerance passed to ``scipy.integrate.quad``.
    logger : logging.Logger, optional
        Receives one ERROR record if the inputs are rejected.
    xp : backend, optional

    Returns
    -------
    prob : float
        NaN for invalid inputs.
    """
    if xp is None:
        xp = array_namespace(b, sigma, mu)

    if not validate_tvn_params(b, sigma, mu, logger=logger, xp=xp):
        return np.nan

    b_np = as_float64(xp, b).ravel()
    sigma_np = as_float64(xp, sigma)
    mu_np = None if mu is None else as_float64(xp, mu).ravel()
    h, R, _ = _standardize(b_np, sigma_np, mu_np)
    return _tvn_standard(h, R, epsabs)
