"""Korobov lattice points and the Baker periodizing transform."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# Largest dimension the Korobov generator table covers.
MAX_DIMENSION = 32


def korobov_generator(h: int, p: int, dim: int) -> NDArray:
    """Korobov generating vector ``z[k] = h**k mod p`` for ``k = 0..dim-1``.

    Parameters
    ----------
    h : int
        Korobov multiplier.
    p : int
        Number of lattice points (prime).
    dim : int
        Lattice dimension.

    Returns
    -------
    z : (dim,) int64 array
    """
    z = np.empty(dim, dtype=np.int64)
    if dim == 0:
        return z
    z[0] = 1
    for k in range(1, dim):
        z[k] = (z[k - 1] * h) % p
    return z


def shifted_lattice(z: NDArray, p: int, shift: NDArray) -> NDArray:
    """All ``p`` points ``(shift + j * z / p) mod 1`` for ``j = 1..p``.

    Returns
    -------
    points : (p, dim) array in [0, 1)
    """
    j = np.arange(1, p + 1, dtype=np.int64)[:, None]
    # exact integer residues before dividing keeps the lattice bit-stable
    base = (j * np.asarray(z, dtype=np.int64)[None, :]) % p
    return np.mod(shift[None, :] + base / p, 1.0)


def baker_transform(t: NDArray) -> NDArray:
    """Tent map ``|2t - 1|``; periodizes the integrand for the lattice rule."""
    return np.abs(2.0 * t - 1.0)
