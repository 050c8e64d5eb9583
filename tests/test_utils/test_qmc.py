"""Tests for lattice point helpers and random number handling."""

from __future__ import annotations

import numpy as np

from pycdfmvn.utils import baker_transform, korobov_generator, set_seed, shifted_lattice, uniform_random
from pycdfmvn.utils._seeds import resolve_rng


class TestKorobovGenerator:
    def test_powers_mod_p(self):
        np.testing.assert_array_equal(korobov_generator(3, 7, 4), [1, 3, 2, 6])

    def test_first_component_is_one(self):
        z = korobov_generator(8398, 20011, 31)
        assert z[0] == 1
        assert np.all((z > 0) & (z < 20011))


class TestShiftedLattice:
    def test_unshifted_projections_are_full(self):
        p = 157
        z = korobov_generator(46, p, 2)
        pts = shifted_lattice(z, p, np.zeros(2))
        assert pts.shape == (p, 2)
        for k in range(2):
            np.testing.assert_allclose(np.sort(pts[:, k]), np.arange(p) / p, atol=1e-15)

    def test_last_point_is_the_shift(self):
        p = 313
        z = korobov_generator(119, p, 3)
        shift = np.array([0.1, 0.5, 0.9])
        pts = shifted_lattice(z, p, shift)
        np.testing.assert_allclose(pts[-1], shift, atol=1e-15)
        assert np.all((pts >= 0.0) & (pts < 1.0))


class TestBakerTransform:
    def test_values(self):
        np.testing.assert_allclose(
            baker_transform(np.array([0.0, 0.25, 0.5, 0.75, 1.0])),
            [1.0, 0.5, 0.0, 0.5, 1.0],
        )


class TestRandom:
    def test_set_seed_reproducible(self):
        set_seed(42)
        a = uniform_random(5)
        set_seed(42)
        b = uniform_random(5)
        np.testing.assert_array_equal(a, b)

    def test_int_seed_reproducible(self):
        np.testing.assert_array_equal(uniform_random(4, 7), uniform_random(4, 7))

    def test_generator_advances(self):
        rng = np.random.default_rng(0)
        a = uniform_random(3, rng)
        b = uniform_random(3, rng)
        assert not np.array_equal(a, b)

    def test_resolve_rng(self):
        assert resolve_rng(None) is None
        rng = np.random.default_rng(1)
        assert resolve_rng(rng) is rng
        assert isinstance(resolve_rng(3), np.random.Generator)
