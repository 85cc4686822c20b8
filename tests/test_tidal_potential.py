"""Tests for the conservative tidal potential."""

import numpy as np
import pytest
from tidal_sim.physics.nbody import NBodySystem
from tidal_sim.physics.tidal_potential import pair_spin_potential, spin_potential


def _system(**source_params):
    system = NBodySystem()
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.1, **source_params)
    system.add_particle(1e-3, (0.3, 0.4, 0.0), r=0.02)
    return system


def test_single_source_pair_value():
    """Source k2 with the target radius, r = 0.5."""
    system = _system(k2=0.3, sigma=1.0)
    expected = -0.5 * 1.0 * 1.0 * 1e-3 * (1.0 / 1e-3) * 0.3 * 0.02 ** 5 / 0.5 ** 6
    assert spin_potential(system, G=1.0) == pytest.approx(expected, rel=1e-12)


def test_potential_scales_with_G():
    system = _system(k2=0.3, sigma=1.0)
    assert spin_potential(system, G=2.5) == pytest.approx(2.5 * spin_potential(system, G=1.0), rel=1e-12)


def test_both_bodies_contribute_when_both_are_sources():
    system = NBodySystem()
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.1, k2=0.3, sigma=1.0)
    system.add_particle(1e-3, (0.5, 0.0, 0.0), r=0.02, k2=0.5, sigma=1.0)
    expected = (
        pair_spin_potential(1.0, 1e-3, 0.02, 0.25, 1.0, 0.3)
        + pair_spin_potential(1e-3, 1.0, 0.1, 0.25, 1.0, 0.5)
    )
    assert spin_potential(system, G=1.0) == pytest.approx(expected, rel=1e-12)
    assert expected < 0


def test_source_needs_sigma():
    assert spin_potential(_system(k2=0.3), G=1.0) == 0.0


def test_source_needs_k2():
    assert spin_potential(_system(sigma=1.0), G=1.0) == 0.0


def test_source_with_zero_radius_is_skipped():
    system = NBodySystem()
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.0, k2=0.3, sigma=1.0)
    system.add_particle(1e-3, (0.5, 0.0, 0.0), r=0.02)
    assert spin_potential(system, G=1.0) == 0.0


def test_massless_targets_are_skipped():
    system = _system(k2=0.3, sigma=1.0)
    reference = spin_potential(system, G=1.0)
    system.add_particle(0.0, (0.0, 1.0, 0.0), r=0.5)
    value = spin_potential(system, G=1.0)
    assert np.isfinite(value)
    assert value == pytest.approx(reference, rel=1e-12)
