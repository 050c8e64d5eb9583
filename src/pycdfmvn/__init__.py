"""pycdfmvn: multivariate normal orthant and rectangle probabilities.

Randomized Korobov lattice-rule quadrature for ``P(X < b)`` with
``X ~ N(mu, Sigma)`` in up to 32 dimensions, plus a closed-form reduction
for the trivariate case.
"""

from pycdfmvn.mvn import (
    LatticeControl,
    LatticeResult,
    bivariate_normal_cdf,
    cdfmvn,
    cdfmvn_batch,
    cdfmvn_lr,
    cdfmvn_rect,
    cdftvn,
    cov_to_corr,
    mvncd_lattice,
    normal_cdf,
    normal_ppf,
)
from pycdfmvn.utils import (
    is_positive_definite,
    is_symmetric,
    set_seed,
    validate_cdf_params,
    validate_tvn_params,
)

__version__ = "0.1.0"

__all__ = [
    "cdfmvn",
    "cdfmvn_rect",
    "cdfmvn_batch",
    "cdftvn",
    "cdfmvn_lr",
    "mvncd_lattice",
    "LatticeControl",
    "LatticeResult",
    "cov_to_corr",
    "normal_cdf",
    "normal_ppf",
    "bivariate_normal_cdf",
    "is_symmetric",
    "is_positive_definite",
    "validate_cdf_params",
    "validate_tvn_params",
    "set_seed",
]
