"""Univariate and bivariate standard normal primitives."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.special import ndtr, ndtri

from pycdfmvn.backend._array_api import array_namespace

# Kernel quantile arguments are kept inside [_PPF_FLOOR, 1 - _PPF_FLOOR].
_PPF_FLOOR = 1e-15

_GL_NODES, _GL_WEIGHTS = np.polynomial.legendre.leggauss(20)
# Shift nodes from [-1, 1] to [0, 2]; the weights then sum to 2.
_GL_NODES = _GL_NODES + 1.0


def normal_cdf(x: NDArray, *, xp=None) -> NDArray:
    """Standard normal cumulative distribution function.

    Parameters
    ----------
    x : ndarray
        Evaluation points.
    xp : backend, optional

    Returns
    -------
    cdf : ndarray
        Phi(x)
    """
    if xp is None:
        xp = array_namespace(x)
    return xp.normal_cdf(x)


def normal_ppf(p: NDArray, *, xp=None) -> NDArray:
    """Standard normal quantile function (inverse CDF).

    Parameters
    ----------
    p : ndarray
        Probabilities in (0, 1).
    xp : backend, optional

    Returns
    -------
    x : ndarray
        Phi^{-1}(p)
    """
    if xp is None:
        xp = array_namespace(p)
    return xp.normal_ppf(p)


def normal_ppf_stable(u: NDArray) -> NDArray:
    """Quantile used inside the lattice kernel.

    ``u`` is clamped to ``[1e-15, 1 - 1e-15]``. The upper half is evaluated
    as ``-Phi^{-1}(1 - u)`` so both tails are computed from the small side.
    """
    u = np.clip(u, _PPF_FLOOR, 1.0 - _PPF_FLOOR)
    return np.where(u <= 0.5, ndtri(u), -ndtri(1.0 - u))


def _bvn_upper(h: float, k: float, r: float) -> float:
    """P(X1 > h, X2 > k) for finite h, k and 0 < |r| < 1.

    Drezner & Wesolowsky (1990) with Genz's treatment of high correlation.
    """
    two_pi = 2.0 * math.pi
    hk = h * k

    if abs(r) < 0.925:
        hs = 0.5 * (h * h + k * k)
        asr = 0.5 * math.asin(r)
        sn = np.sin(asr * _GL_NODES)
        bvn = float(np.dot(np.exp((sn * hk - hs) / (1.0 - sn * sn)), _GL_WEIGHTS))
        return bvn * asr / two_pi + ndtr(-h) * ndtr(-k)

    if r < 0:
        k = -k
        hk = -hk

    bvn = 0.0
    if abs(r) < 1.0:
        a_s = (1.0 - r) * (1.0 + r)
        a = math.sqrt(a_s)
        bs = (h - k) ** 2
        asr = -0.5 * (bs / a_s + hk)
        c = (4.0 - hk) / 8.0
        d = (12.0 - hk) / 80.0
        if asr > -100.0:
            bvn = a * math.exp(asr) * (1.0 - c * (bs - a_s) * (1.0 - d * bs) / 3.0 + c * d * a_s * a_s)
        if hk > -100.0:
            b = math.sqrt(bs)
            sp = math.sqrt(two_pi) * ndtr(-b / a)
            bvn -= math.exp(-0.5 * hk) * sp * b * (1.0 - c * bs * (1.0 - d * bs) / 3.0)
        a *= 0.5
        xs = (a * _GL_NODES) ** 2
        asr = -0.5 * (bs / xs + hk)
        keep = asr > -100.0
        xs = xs[keep]
        sp = 1.0 + c * xs * (1.0 + 5.0 * d * xs)
        rs = np.sqrt(1.0 - xs)
        ep = np.exp(-0.5 * hk * xs / (1.0 + rs) ** 2) / rs
        bvn = (a * float(np.dot(np.exp(asr[keep]) * (sp - ep), _GL_WEIGHTS[keep])) - bvn) / two_pi

    if r > 0:
        return bvn + ndtr(-max(h, k))
    if h >= k:
        return -bvn
    if h < 0:
        width = ndtr(k) - ndtr(h)
    else:
        width = ndtr(-h) - ndtr(-k)
    return width - bvn


def bivariate_normal_cdf(x1: float, x2: float, rho: float) -> float:
    """Bivariate standard normal CDF P(X1 <= x1, X2 <= x2) with correlation rho.

    Uses the Drezner & Wesolowsky (1990) Gauss-Legendre scheme as refined
    by Genz (2004), accurate to about 1e-15. Infinite limits and
    ``rho`` in {-1, 0, 1} are handled exactly.

    Parameters
    ----------
    x1, x2 : float
        Upper integration limits.
    rho : float
        Correlation coefficient in [-1, 1].

    Returns
    -------
    prob : float
        P(X1 <= x1, X2 <= x2)
    """
    x1 = float(x1)
    x2 = float(x2)
    rho = max(-1.0, min(1.0, float(rho)))

    if x1 == -np.inf or x2 == -np.inf:
        return 0.0
    if x1 == np.inf:
        return float(ndtr(x2))
    if x2 == np.inf:
        return float(ndtr(x1))

    if rho == 0.0:
        return float(ndtr(x1) * ndtr(x2))
    if rho == 1.0:
        return float(ndtr(min(x1, x2)))
    if rho == -1.0:
        return float(max(0.0, ndtr(x1) + ndtr(x2) - 1.0))

    # Lower orthant at (x1, x2) is the upper orthant at (-x1, -x2).
    p = _bvn_upper(-x1, -x2, rho)
    return max(0.0, min(1.0, float(p)))
