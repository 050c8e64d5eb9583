"""Public multivariate normal CDF entry points.

Each function validates its inputs first. Invalid inputs are logged once
and answered with NaN, so a bad draw inside a simulation loop does not
abort the loop.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from pycdfmvn.backend._array_api import array_namespace, as_float64, get_backend
from pycdfmvn.mvn._lattice_rule import LatticeControl, mvncd_lattice
from pycdfmvn.utils._seeds import resolve_rng
from pycdfmvn.utils._validation import validate_cdf_params

_logger = logging.getLogger(__name__)


def cov_to_corr(sigma: NDArray) -> tuple[NDArray, NDArray]:
    """Split a covariance matrix into correlations and standard deviations.

    Returns
    -------
    R : ndarray, shape (q, q)
        ``D^-1 Sigma D^-1`` with an exact unit diagonal.
    sd : ndarray, shape (q,)
        ``sqrt(diag(Sigma))``.
    """
    sigma = np.asarray(sigma, dtype=np.float64)
    sd = np.sqrt(np.diag(sigma))
    R = sigma / np.outer(sd, sd)
    np.fill_diagonal(R, 1.0)
    return R, sd


def _standardize(b, sigma, mu):
    R, sd = cov_to_corr(sigma)
    if mu is None:
        mu = np.zeros_like(b)
    return (b - mu) / sd, R, sd


def cdfmvn(
    b: NDArray,
    sigma: NDArray,
    mu: NDArray | None = None,
    eps: float | None = None,
    *,
    control: LatticeControl | None = None,
    rng: np.random.Generator | int | None = None,
    logger: logging.Logger | None = None,
    return_error: bool = False,
    xp=None,
):
    """Compute P(X_1 < b_1, ..., X_q < b_q) for X ~ N(mu, Sigma).

    Parameters
    ----------
    b : array-like, shape (q,)
        Upper limits. ``+inf``/``-inf`` entries are allowed.
    sigma : array-like, shape (q, q)
        Covariance matrix, symmetric positive definite, q <= 32.
    mu : array-like, shape (q,), optional
        Mean vector (zeros when omitted).
    eps : float
        Target 99.7% error bound of the lattice rule. None uses
        ``control.eps`` (1e-4 for the default control).
    control : LatticeControl, optional
        Work limits of the adaptive driver; an explicit ``eps`` overrides
        ``control.eps``.
    rng : Generator, int or None
        Source of the random shifts. None draws from NumPy's global stream,
        which :func:`pycdfmvn.utils.set_seed` seeds.
    logger : logging.Logger, optional
        Receives one ERROR record if the inputs are rejected.
    return_error : bool
        Also return the error bound.
    xp : backend, optional

    Returns
    -------
    prob : float
        Probability estimate, NaN for invalid inputs.
    error : float
        Only with ``return_error=True``.
    """
    if xp is None:
        xp = array_namespace(b, sigma, mu)

    if not validate_cdf_params(b, sigma, mu, logger=logger, xp=xp):
        return (np.nan, np.nan) if return_error else np.nan

    b_np = as_float64(xp, b).ravel()
    sigma_np = np.atleast_2d(as_float64(xp, sigma))
    mu_np = None if mu is None else as_float64(xp, mu).ravel()

    b_std, R, _ = _standardize(b_np, sigma_np, mu_np)
    res = mvncd_lattice(b_std, R, control=control, eps=eps, rng=rng, logger=logger)
    if return_error:
        return res.prob, res.error
    return res.prob


def cdfmvn_rect(
    lower: NDArray,
    upper: NDArray,
    sigma: NDArray,
    mu: NDArray | None = None,
    eps: float | None = None,
    *,
    control: LatticeControl | None = None,
    rng: np.random.Generator | int | None = None,
    logger: logging.Logger | None = None,
    xp=None,
) -> float:
    """Compute P(lower < X < upper) for X ~ N(mu, Sigma).

    Uses the inclusion-exclusion identity
    P(a < X < b) = sum_{s in {0,1}^q} (-1)^{|s|} P(X < c_s),
    where c_s[i] = b[i] if s[i] = 0 else a[i]. Vertices with a ``-inf``
    component contribute nothing and are skipped. Each vertex is an
    independent lattice estimate, so the error bounds add up.

    Parameters
    ----------
    lower : array-like, shape (q,)
        Lower limits; use -inf for no lower bound.
    upper : array-like, shape (q,)
        Upper limits.
    sigma, mu, eps, control, rng, logger, xp
        As in :func:`cdfmvn`.

    Returns
    -------
    prob : float
        Probability clipped to [0, 1], NaN for invalid inputs.
    """
    if xp is None:
        xp = array_namespace(lower, upper, sigma, mu)

    lower_np = as_float64(xp, lower).ravel()
    upper_np = as_float64(xp, upper).ravel()
    if np.isnan(lower_np).any() or lower_np.size != upper_np.size:
        (logger or _logger).error(
            "Invalid parameters: lower must match upper in length and contain no missing values."
        )
        return np.nan
    if not validate_cdf_params(upper, sigma, mu, logger=logger, xp=xp):
        return np.nan

    sigma_np = np.atleast_2d(as_float64(xp, sigma))
    mu_np = None if mu is None else as_float64(xp, mu).ravel()
    upper_std, R, sd = _standardize(upper_np, sigma_np, mu_np)
    lower_std = (lower_np - (0.0 if mu_np is None else mu_np)) / sd
    q = upper_std.size

    if np.any(lower_std >= upper_std):
        return 0.0

    rng = resolve_rng(rng)
    if np.all(np.isneginf(lower_std)):
        return mvncd_lattice(upper_std, R, control=control, eps=eps, rng=rng, logger=logger).prob

    prob = 0.0
    for s in range(1 << q):
        take_lower = np.array([(s >> i) & 1 for i in range(q)], dtype=bool)
        c = np.where(take_lower, lower_std, upper_std)
        if np.any(np.isneginf(c)):
            continue
        sign = -1.0 if take_lower.sum() % 2 else 1.0
        prob += sign * mvncd_lattice(c, R, control=control, eps=eps, rng=rng, logger=logger).prob

    return max(0.0, min(1.0, prob))


def cdfmvn_batch(
    b: NDArray,
    sigma: NDArray,
    mu: NDArray | None = None,
    eps: float | None = None,
    *,
    control: LatticeControl | None = None,
    rng: np.random.Generator | int | None = None,
    logger: logging.Logger | None = None,
    xp=None,
) -> NDArray:
    """Evaluate :func:`cdfmvn` for N sets of limits.

    Parameters
    ----------
    b : ndarray, shape (N, q)
        Upper limits for each observation.
    sigma : ndarray, shape (q, q) or (N, q, q)
        Common or per-observation covariance matrix.
    mu : ndarray, shape (q,) or (N, q), optional
        Common or per-observation mean.

    Returns
    -------
    probs : ndarray, shape (N,)
        Probabilities; rows with invalid inputs are NaN. If the number of
        per-observation matrices or means does not match N, every row is
        NaN and one ERROR record is logged.
    """
    if xp is None:
        xp = array_namespace(b, sigma, mu)

    b_np = np.atleast_2d(as_float64(xp, b))
    sigma_np = as_float64(xp, sigma)
    mu_np = None if mu is None else as_float64(xp, mu)
    rng = resolve_rng(rng)

    N = b_np.shape[0]
    probs = np.full(N, np.nan)
    if (sigma_np.ndim == 3 and sigma_np.shape[0] != N) or (
        mu_np is not None and mu_np.ndim == 2 and mu_np.shape[0] != N
    ):
        (logger or _logger).error(
            "Invalid parameters: per-observation sigma and mu must have one entry per row of b."
        )
        return xp.array(probs)

    for i in range(N):
        sig_i = sigma_np[i] if sigma_np.ndim == 3 else sigma_np
        if mu_np is None:
            mu_i = None
        else:
            mu_i = mu_np[i] if mu_np.ndim == 2 else mu_np
        probs[i] = cdfmvn(
            b_np[i], sig_i, mu_i, eps,
            control=control, rng=rng, logger=logger, xp=get_backend("numpy"),
        )

    return xp.array(probs)
