"""Tests for the Korobov generator table."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pycdfmvn.mvn import LATTICE_GENERATORS, LATTICE_PRIMES, lattice_generator


class TestLatticeTable:
    def test_shape(self):
        assert LATTICE_GENERATORS.shape == (31, 8)
        assert LATTICE_PRIMES == (157, 313, 619, 1249, 2503, 5003, 10007, 20011)

    def test_entries_are_units_mod_p(self):
        for k, p in enumerate(LATTICE_PRIMES):
            col = LATTICE_GENERATORS[:, k]
            assert np.all((col > 1) & (col <= (p - 1) // 2))
            assert all(math.gcd(int(h), p) == 1 for h in col)

    def test_read_only(self):
        with pytest.raises(ValueError):
            LATTICE_GENERATORS[0, 0] = 3

    def test_known_rows(self):
        np.testing.assert_array_equal(
            LATTICE_GENERATORS[1], [46, 119, 259, 512, 920, 1939, 3822, 8398]
        )
        np.testing.assert_array_equal(
            LATTICE_GENERATORS[30], [76, 140, 57, 371, 434, 1440, 584, 7666]
        )


class TestLatticeGenerator:
    def test_lookup(self):
        p, z = lattice_generator(3, 0)
        assert p == 157
        np.testing.assert_array_equal(z, [1, 46])

    def test_vector_length(self):
        p, z = lattice_generator(32, 7)
        assert p == 20011
        assert z.shape == (31,)
        assert z[1] == 7666
        assert z[2] == (7666 * 7666) % 20011

    @pytest.mark.parametrize("q", [1, 33])
    def test_dimension_out_of_range(self, q):
        with pytest.raises(ValueError):
            lattice_generator(q, 0)
