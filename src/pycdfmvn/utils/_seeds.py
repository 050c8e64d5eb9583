"""Random number handling for the randomized lattice rule."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def set_seed(seed: int) -> None:
    """Seed the process-wide generators used when no ``rng`` is passed.

    Seeds NumPy's global generator, and torch's if it is installed.

    Parameters
    ----------
    seed : int
        Random seed value.
    """
    np.random.seed(seed)
    try:
        import torch
    except ImportError:
        return
    torch.manual_seed(seed)


def uniform_random(size, rng: np.random.Generator | int | None = None) -> NDArray:
    """Draw uniforms on [0, 1).

    Parameters
    ----------
    size : int or tuple of int
        Output shape.
    rng : numpy.random.Generator, int or None
        None draws from NumPy's global stream (advancing it). An int is
        used as a seed for a fresh ``default_rng``.
    """
    if rng is None:
        return np.random.random_sample(size)
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    return rng.random(size)


def resolve_rng(rng: np.random.Generator | int | None) -> np.random.Generator | None:
    """Turn a seed into a Generator once, so repeated draws share one stream."""
    if rng is None or isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)
