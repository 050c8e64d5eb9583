"""Korobov multipliers for the randomized lattice rule.

``LATTICE_GENERATORS[q - 2][k]`` is the multiplier ``h`` used in dimension
``q`` (2..32) with ``LATTICE_PRIMES[k]`` points. The rule integrates over
``q - 1`` variables with generating vector ``(1, h, h**2, ...) mod p``.

Each multiplier minimises the weighted P2 figure of merit
``-1 + (1/p) sum_j prod_k (1 + 2 pi^2 g_k B2({j z_k / p}))`` with
``B2(x) = x^2 - x + 1/6`` and ``g_k = 0.8 ** max(k - 1, 0)``. Candidates are
every ``h`` in ``2..(p-1)/2`` for ``p <= 5003`` and an evenly strided
subset of about 2500 values for the two largest primes. These are not the
multipliers of Genz's published table, so estimates agree with other
implementations only to within the reported error bound, never bit for bit.
Changing any entry changes which lattice is sampled.
"""

from __future__ import annotations

import numpy as np

from pycdfmvn.utils._qmc import MAX_DIMENSION, korobov_generator

LATTICE_PRIMES = (157, 313, 619, 1249, 2503, 5003, 10007, 20011)

# fmt: off
_GENERATOR_ROWS = (
    (2, 2, 2, 2, 2, 2, 2, 2),
    (46, 119, 259, 512, 920, 1939, 3822, 8398),
    (32, 48, 256, 352, 652, 1611, 3072, 2894),
    (77, 66, 247, 213, 792, 1473, 2380, 8802),
    (71, 51, 65, 118, 742, 1352, 1870, 6014),
    (38, 67, 98, 291, 1197, 2208, 3276, 4546),
    (27, 140, 267, 430, 627, 1573, 3304, 6626),
    (62, 140, 95, 430, 1002, 467, 1722, 6290),
    (62, 130, 95, 383, 941, 2021, 206, 7898),
    (29, 130, 57, 225, 197, 1440, 584, 8626),
    (29, 130, 96, 225, 941, 1440, 584, 3306),
    (29, 130, 57, 480, 941, 2044, 4384, 1270),
    (29, 130, 57, 480, 434, 194, 4384, 4730),
    (76, 140, 57, 480, 434, 194, 4384, 4730),
    (76, 140, 57, 480, 404, 2051, 4384, 7666),
    (76, 140, 57, 480, 404, 1076, 2426, 7666),
    (76, 140, 57, 480, 404, 1440, 2426, 7666),
    (76, 140, 57, 371, 404, 1440, 4384, 7666),
    (29, 140, 57, 371, 434, 1440, 4384, 7666),
    (29, 140, 57, 371, 434, 1965, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
    (76, 140, 57, 371, 434, 1440, 584, 7666),
)
# fmt: on

LATTICE_GENERATORS = np.array(_GENERATOR_ROWS, dtype=np.int64)
LATTICE_GENERATORS.setflags(write=False)


def lattice_generator(q: int, prime_index: int) -> tuple[int, np.ndarray]:
    """Point count and generating vector for dimension ``q``.

    Parameters
    ----------
    q : int
        Problem dimension, 2..32.
    prime_index : int
        Index into :data:`LATTICE_PRIMES`.

    Returns
    -------
    p : int
        Number of lattice points.
    z : (q - 1,) int64 array
        Korobov generating vector.
    """
    if not 2 <= q <= MAX_DIMENSION:
        raise ValueError(f"Lattice table covers dimensions 2..{MAX_DIMENSION}, got {q}")
    p = LATTICE_PRIMES[prime_index]
    h = int(LATTICE_GENERATORS[q - 2, prime_index])
    return p, korobov_generator(h, p, q - 1)
