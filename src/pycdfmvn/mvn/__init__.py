"""Multivariate normal orthant and rectangle probabilities."""

from pycdfmvn.mvn._cdfmvn import cdfmvn, cdfmvn_batch, cdfmvn_rect, cov_to_corr
from pycdfmvn.mvn._cdftvn import cdftvn, tvn_integrand
from pycdfmvn.mvn._lattice_rule import (
    LatticeControl,
    LatticeResult,
    cdfmvn_lr,
    mvncd_lattice,
    qmc_eval,
)
from pycdfmvn.mvn._lattice_table import LATTICE_GENERATORS, LATTICE_PRIMES, lattice_generator
from pycdfmvn.mvn._univariate import (
    bivariate_normal_cdf,
    normal_cdf,
    normal_ppf,
    normal_ppf_stable,
)

__all__ = [
    "cdfmvn",
    "cdfmvn_rect",
    "cdfmvn_batch",
    "cov_to_corr",
    "cdftvn",
    "tvn_integrand",
    "LatticeControl",
    "LatticeResult",
    "mvncd_lattice",
    "cdfmvn_lr",
    "qmc_eval",
    "LATTICE_PRIMES",
    "LATTICE_GENERATORS",
    "lattice_generator",
    "normal_cdf",
    "normal_ppf",
    "normal_ppf_stable",
    "bivariate_normal_cdf",
]
