"""Shared fixtures for tidal_sim tests."""

import pytest
from tidal_sim.physics.simulator import Simulator


def _build_star_planet_sim():
    sim = Simulator(dt=1e-4)
    sim.add_particle(
        1.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), r=0.005,
        k2=0.028, sigma=5.0, moi=1.75e-6, sx=0.0, sy=0.5, sz=20.0,
    )
    sim.add_particle(
        1e-3, (0.05, 0.001, 0.002), (0.3, 4.47, 0.1), r=5e-4,
        k2=0.3, sigma=300.0, moi=6.25e-11, sx=10.0, sy=0.0, sz=150.0,
    )
    return sim


@pytest.fixture
def star_planet_sim():
    """Star and planet, both structured and spin-tracked, with dissipation."""
    return _build_star_planet_sim()


@pytest.fixture
def make_star_planet_sim():
    """Factory for independent copies of the star-planet system."""
    return _build_star_planet_sim
