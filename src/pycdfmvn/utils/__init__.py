"""Utility functions."""

from pycdfmvn.utils._qmc import baker_transform, korobov_generator, shifted_lattice
from pycdfmvn.utils._seeds import set_seed, uniform_random
from pycdfmvn.utils._validation import (
    ParamError,
    check_cdf_params,
    is_positive_definite,
    is_symmetric,
    validate_cdf_params,
    validate_tvn_params,
)

__all__ = [
    "set_seed",
    "uniform_random",
    "korobov_generator",
    "shifted_lattice",
    "baker_transform",
    "ParamError",
    "check_cdf_params",
    "is_symmetric",
    "is_positive_definite",
    "validate_cdf_params",
    "validate_tvn_params",
]
