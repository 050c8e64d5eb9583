"""Randomized Korobov lattice rule for multivariate normal orthant probabilities.

Computes P(X_1 < b_1, ..., X_q < b_q) for X ~ N(0, R), R a correlation
matrix, using the separation-of-variables transformation of

    Genz, A. (1992). Numerical Computation of Multivariate Normal
    Probabilities. Journal of Computational and Graphical Statistics,
    1(2): 141-149.

The (q-1)-dimensional unit-cube integral is estimated with ``n`` random
shifts of a ``p``-point Korobov lattice, periodized by Baker's transform.
The spread of the ``n`` shift means gives a 99.7% error bound. The
adaptive driver raises ``p`` through :data:`LATTICE_PRIMES` first and only
then adds shifts, until the bound drops below ``eps``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np
import scipy.linalg
from numpy.typing import NDArray
from scipy.special import ndtr

from pycdfmvn.mvn._lattice_table import LATTICE_PRIMES, lattice_generator
from pycdfmvn.mvn._univariate import normal_ppf_stable
from pycdfmvn.utils._qmc import baker_transform, shifted_lattice
from pycdfmvn.utils._seeds import resolve_rng, uniform_random

_logger = logging.getLogger(__name__)

# Cholesky pivots below this mark a numerically singular R.
_SINGULAR_PIVOT = 1e-5


@dataclass(frozen=True)
class LatticeControl:
    """Work and accuracy settings for :func:`mvncd_lattice`.

    Attributes
    ----------
    eps : float
        Target half-width of the 99.7% error bound.
    start_shifts : int
        Number of random shifts in the first round (at least 2).
    shift_step : int
        Shifts added after every prime has been tried.
    max_shifts : int
        Largest number of shifts attempted.
    n_primes : int
        How many entries of ``LATTICE_PRIMES`` (smallest first) to use.
    ridge : float
        Added to the diagonal of R before factoring.
    """

    eps: float = 1e-4
    start_shifts: int = 10
    shift_step: int = 2
    max_shifts: int = 50
    n_primes: int = len(LATTICE_PRIMES)
    ridge: float = 1e-12

    def __post_init__(self):
        if not self.eps > 0:
            raise ValueError(f"eps must be positive, got {self.eps}")
        if self.start_shifts < 2:
            raise ValueError(f"start_shifts must be at least 2, got {self.start_shifts}")
        if self.shift_step < 1:
            raise ValueError(f"shift_step must be at least 1, got {self.shift_step}")
        if self.max_shifts < self.start_shifts:
            raise ValueError("max_shifts must not be smaller than start_shifts")
        if not 1 <= self.n_primes <= len(LATTICE_PRIMES):
            raise ValueError(f"n_primes must be in 1..{len(LATTICE_PRIMES)}, got {self.n_primes}")
        if self.ridge < 0:
            raise ValueError(f"ridge must be non-negative, got {self.ridge}")


@dataclass
class LatticeResult:
    """Outcome of one adaptive lattice-rule evaluation.

    Attributes
    ----------
    prob : float
        Probability estimate.
    error : float
        99.7% error bound, ``3 * sqrt(varsum / (n * (n - 1)))``.
    n_shifts : int
        Random shifts used in the final round.
    n_points : int
        Lattice points per shift in the final round.
    converged : bool
        Whether ``error < eps`` was reached within the work limits.
    """

    prob: float
    error: float
    n_shifts: int
    n_points: int
    converged: bool


def qmc_eval(
    n: int,
    p: int,
    z: NDArray,
    b: NDArray,
    C: NDArray,
    *,
    rng: np.random.Generator | int | None = None,
) -> tuple[float, float]:
    """Estimate the orthant probability with ``n`` shifts of one lattice.

    Parameters
    ----------
    n : int
        Number of random shifts.
    p : int
        Number of lattice points.
    z : ndarray, shape (q-1,)
        Korobov generating vector.
    b : ndarray, shape (q,)
        Upper limits scaled by the Cholesky diagonal.
    C : ndarray, shape (q, q)
        Lower Cholesky factor with rows scaled to unit diagonal.
    rng : Generator, int or None
        Source of the shifts; None uses NumPy's global stream.

    Returns
    -------
    intval : float
        Mean of the per-shift lattice averages.
    varsum : float
        Sum of squared deviations of the shift averages (Welford).
    """
    rng = resolve_rng(rng)
    q = len(b)
    e1 = ndtr(b[0])
    intval = 0.0
    varsum = 0.0

    lattice = shifted_lattice(z, p, np.zeros(q - 1))

    for k in range(1, n + 1):
        w = baker_transform(np.mod(lattice + uniform_random(q - 1, rng), 1.0))

        e = np.full(p, e1)
        f = e.copy()
        y = np.empty((p, q - 1))
        for i in range(1, q):
            y[:, i - 1] = normal_ppf_stable(w[:, i - 1] * e)
            e = ndtr(b[i] - y[:, :i] @ C[i, :i])
            f *= e

        latsum = float(np.mean(f))
        delta = latsum - intval
        intval += delta / k
        varsum += delta * delta * (k - 1) / k

    return intval, varsum


def _scaled_cholesky(b: NDArray, R: NDArray, ridge: float) -> tuple[NDArray, NDArray, NDArray]:
    """Factor ``R + ridge*I`` and scale rows so the diagonal is one.

    Also returns the original Cholesky diagonal.
    """
    q = len(b)
    A = R + ridge * np.eye(q)
    try:
        C = scipy.linalg.cholesky(A, lower=True)
    except np.linalg.LinAlgError:
        # Not PD beyond the ridge: shift by the most negative eigenvalue.
        eigvals = np.linalg.eigvalsh(A)
        reg = max(ridge, -eigvals.min() + ridge)
        C = scipy.linalg.cholesky(A + reg * np.eye(q), lower=True)
    d = np.diag(C).copy()
    return b / d, C / d[:, None], d


def mvncd_lattice(
    b: NDArray,
    R: NDArray,
    *,
    control: LatticeControl | None = None,
    eps: float | None = None,
    rng: np.random.Generator | int | None = None,
    logger: logging.Logger | None = None,
) -> LatticeResult:
    """Adaptive lattice-rule estimate of P(X < b) for X ~ N(0, R).

    Parameters
    ----------
    b : array-like, shape (q,)
        Upper limits, may contain +/-inf.
    R : array-like, shape (q, q)
        Correlation matrix, 1 <= q <= 32. Not modified.
    control : LatticeControl, optional
        Work limits; defaults to ``LatticeControl()``.
    eps : float, optional
        Overrides ``control.eps``.
    rng : Generator, int or None
        Source of the random shifts.
    logger : logging.Logger, optional
        Receives a DEBUG record when the work limits are exhausted and one
        when R is numerically singular.

    Returns
    -------
    result : LatticeResult
        If the tolerance is never met, the estimate and bound of the last
        round are returned with ``converged=False``.

    Notes
    -----
    For a singular or nearly singular R the scaled integrand is a step
    function of the earlier variables. The estimate stays unbiased, but
    the spread of the shift means can understate its error, down to zero
    when a step edge happens to line up with the lattice. A DEBUG record
    is logged when a Cholesky pivot falls below 1e-5.
    """
    if control is None:
        control = LatticeControl()
    if eps is not None:
        control = replace(control, eps=eps)
    log = logger or _logger

    b = np.asarray(b, dtype=np.float64).ravel()
    R = np.array(R, dtype=np.float64)
    q = b.size

    if q == 1:
        return LatticeResult(float(ndtr(b[0])), 0.0, 0, 0, True)

    b_scaled, C, pivots = _scaled_cholesky(b, R, control.ridge)
    if pivots.min() < _SINGULAR_PIVOT:
        log.debug(
            "R is numerically singular (smallest Cholesky pivot %.3g); "
            "the error bound may understate the true error.",
            pivots.min(),
        )
    rng = resolve_rng(rng)

    prob = np.nan
    error = np.inf
    n = p = 0
    for n in range(control.start_shifts, control.max_shifts + 1, control.shift_step):
        for idx in range(control.n_primes):
            p, z = lattice_generator(q, idx)
            prob, varsum = qmc_eval(n, p, z, b_scaled, C, rng=rng)
            error = 3.0 * np.sqrt(varsum / (n * (n - 1)))
            if error < control.eps:
                return LatticeResult(prob, float(error), n, p, True)

    log.debug(
        "Lattice rule stopped at %d shifts x %d points with error %.3g (eps=%.3g).",
        n, p, error, control.eps,
    )
    return LatticeResult(prob, float(error), n, p, False)


def cdfmvn_lr(
    b: NDArray,
    R: NDArray,
    eps: float = 1e-4,
    *,
    rng: np.random.Generator | int | None = None,
) -> tuple[float, float]:
    """``(prob, error)`` for P(X < b), X ~ N(0, R); see :func:`mvncd_lattice`."""
    res = mvncd_lattice(b, R, eps=eps, rng=rng)
    return res.prob, res.error
