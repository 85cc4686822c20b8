"""Tests for the spin/tidal force kernel and the pairwise accumulator."""

import numpy as np
import pytest
from tidal_sim.backends.numpy_backend import NumPyBackend
from tidal_sim.physics.nbody import NBodySystem
from tidal_sim.physics.structure import resolve_structure
from tidal_sim.physics.tidal_force import (
    BodyState,
    accumulate_tidal_accelerations,
    spin_orbit_force,
)


def _pair(separation=1.0, velocity=(0.0, 0.0, 0.0)):
    source = BodyState(mass=1.0, position=np.zeros(3), velocity=np.zeros(3), radius=0.1)
    target = BodyState(
        mass=1e-3,
        position=np.array([separation, 0.0, 0.0]),
        velocity=np.asarray(velocity, dtype=float),
    )
    return source, target


def test_zero_love_number_gives_zero_force():
    """k2 = 0 returns exactly the zero vector whatever the other inputs."""
    source, target = _pair(0.3, velocity=(0.1, -2.0, 0.5))
    force = spin_orbit_force(source, target, G=1.0, k2=0.0, sigma=12.0, spin=[1.0, 2.0, 3.0])
    assert force.shape == (3,)
    assert np.all(force == 0.0)


def test_non_spinning_conservative_force_matches_formula():
    """Without spin or dissipation only the tidal r^-8 term remains."""
    G, k2 = 1.0, 0.3
    source, target = _pair(2.0)
    force = spin_orbit_force(source, target, G=G, k2=k2, sigma=0.0, spin=[0.0, 0.0, 0.0])
    
    ms, mt, R = 1.0, 1e-3, 0.1
    mu = ms * mt / (ms + mt)
    d = np.array([-2.0, 0.0, 0.0])
    expected = (mt * k2 * R ** 5 / mu) * (-6.0 * G * mt / 2.0 ** 8) * d
    assert np.allclose(force, expected, rtol=1e-12, atol=0.0)
    # Attractive: source pulled towards the target at +x
    assert force[0] > 0


def test_tidal_term_scales_as_inverse_seventh_power():
    """Non-spinning, non-dissipative force drops by 2^7 when r doubles."""
    source, near = _pair(1.0)
    _, far = _pair(2.0)
    f_near = spin_orbit_force(source, near, G=1.0, k2=0.3, sigma=0.0, spin=np.zeros(3))
    f_far = spin_orbit_force(source, far, G=1.0, k2=0.3, sigma=0.0, spin=np.zeros(3))
    assert np.linalg.norm(f_near) / np.linalg.norm(f_far) == pytest.approx(2.0 ** 7, rel=1e-12)


def test_rotational_term_scales_as_inverse_fourth_power():
    """With G = 0 and spin perpendicular to d, only the |Omega|^2 r^-5 d term acts."""
    source, near = _pair(1.0)
    _, far = _pair(2.0)
    spin = [0.0, 0.0, 3.0]
    f_near = spin_orbit_force(source, near, G=0.0, k2=0.3, sigma=0.0, spin=spin)
    f_far = spin_orbit_force(source, far, G=0.0, k2=0.3, sigma=0.0, spin=spin)
    assert np.linalg.norm(f_near) / np.linalg.norm(f_far) == pytest.approx(2.0 ** 4, rel=1e-12)


def test_dissipative_term_flips_with_relative_velocity():
    """Reversing the relative velocity flips the lag term and leaves the rest unchanged."""
    velocity = np.array([0.3, 1.1, -0.2])
    source, forward = _pair(0.7, velocity=velocity)
    _, backward = _pair(0.7, velocity=-velocity)
    spin = np.zeros(3)
    kwargs = dict(G=1.0, k2=0.3, spin=spin)
    
    conservative_fwd = spin_orbit_force(source, forward, sigma=0.0, **kwargs)
    conservative_bwd = spin_orbit_force(source, backward, sigma=0.0, **kwargs)
    assert np.array_equal(conservative_fwd, conservative_bwd)
    
    lag_fwd = spin_orbit_force(source, forward, sigma=1e4, **kwargs) - conservative_fwd
    lag_bwd = spin_orbit_force(source, backward, sigma=1e4, **kwargs) - conservative_bwd
    assert np.linalg.norm(lag_fwd) > 0
    assert np.allclose(lag_fwd, -lag_bwd, rtol=1e-10, atol=0.0)


def test_batched_targets_match_single_evaluations():
    """A batch of targets gives the same rows as one call per target."""
    source = BodyState(1.0, np.array([0.1, 0.0, -0.1]), np.array([0.0, 0.2, 0.0]), 0.05)
    positions = np.array([[1.0, 0.2, 0.0], [-0.5, 0.8, 0.3], [0.0, 0.0, 2.0]])
    velocities = np.array([[0.0, 1.0, 0.0], [0.4, 0.0, -0.1], [1.0, 0.0, 0.0]])
    masses = np.array([1e-3, 2e-3, 0.5])
    spin = [0.5, -1.0, 4.0]
    
    batch = spin_orbit_force(
        source, BodyState(masses, positions, velocities), G=1.0, k2=0.2, sigma=3.0, spin=spin
    )
    assert batch.shape == (3, 3)
    for j in range(3):
        single = spin_orbit_force(
            source, BodyState(masses[j], positions[j], velocities[j]), G=1.0, k2=0.2, sigma=3.0, spin=spin
        )
        assert np.allclose(batch[j], single, rtol=1e-12, atol=0.0)


def test_accumulator_conserves_momentum():
    """m_s * da_s + m_t * da_t = 0 for a pair interaction."""
    system = NBodySystem(NumPyBackend())
    system.add_particle(1.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), r=0.1, k2=0.3, sigma=4.0, sx=0.2, sy=-0.3, sz=2.0)
    system.add_particle(0.01, (0.9, 0.3, -0.1), (0.1, 1.0, 0.2), r=0.02)
    accelerations = np.zeros((2, 3))
    
    accumulate_tidal_accelerations(system, resolve_structure(system), accelerations, G=1.0)
    
    momentum_change = system.masses[0] * accelerations[0] + system.masses[1] * accelerations[1]
    assert np.linalg.norm(accelerations[0]) > 0
    assert np.allclose(momentum_change, 0.0, atol=1e-12 * np.linalg.norm(accelerations[0]))


def test_accumulator_requires_k2_and_full_spin():
    """Bodies without k2 or with an incomplete spin vector are point particles."""
    system = NBodySystem(NumPyBackend())
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.1, k2=0.3, sx=0.0, sy=0.0)  # no sz
    system.add_particle(1.0, (1.0, 0.0, 0.0), r=0.1, sx=0.0, sy=0.0, sz=1.0)  # no k2
    accelerations = np.zeros((2, 3))
    accumulate_tidal_accelerations(system, resolve_structure(system), accelerations, G=1.0)
    assert np.all(accelerations == 0.0)


def test_accumulator_skips_massless_bodies():
    """Zero-mass bodies neither receive nor raise tidal forces."""
    system = NBodySystem(NumPyBackend())
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.1, k2=0.3, sx=0.0, sy=0.0, sz=1.0)
    system.add_particle(0.0, (1.0, 0.0, 0.0))
    system.add_particle(0.0, (0.0, 2.0, 0.0), r=0.1, k2=0.3, sx=0.0, sy=0.0, sz=1.0)
    accelerations = np.zeros((3, 3))
    accumulate_tidal_accelerations(system, resolve_structure(system), accelerations, G=1.0)
    assert np.all(np.isfinite(accelerations))
    assert np.all(accelerations == 0.0)


def test_accumulator_adds_into_existing_buffer():
    """Contributions are added to, not written over, the accumulator."""
    system = NBodySystem(NumPyBackend())
    system.add_particle(1.0, (0.0, 0.0, 0.0), r=0.1, k2=0.3, sx=0.0, sy=0.0, sz=1.0)
    system.add_particle(1e-3, (1.0, 0.0, 0.0))
    fresh = np.zeros((2, 3))
    accumulate_tidal_accelerations(system, resolve_structure(system), fresh, G=1.0)
    offset = np.ones((2, 3))
    accumulate_tidal_accelerations(system, resolve_structure(system), offset, G=1.0)
    assert np.allclose(offset - 1.0, fresh)
