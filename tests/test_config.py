"""Tests for configuration loading and simulation building."""

import numpy as np
import pytest
import tempfile
import os
from tidal_sim.physics.integrators.euler import EulerIntegrator
from tidal_sim.io.state_io import load_state
from tidal_sim.utils.config import Config, build_simulation, load_config, run_simulation, save_config

BODIES = [
    {"m": 1.0, "r": 0.005, "k2": 0.028, "moi": 1.75e-6, "sx": 0.0, "sy": 0.0, "sz": 20.0, "tau": 1e-6},
    {"m": 1e-3, "position": [0.05, 0.0, 0.0], "velocity": [0.0, 4.4744, 0.0],
     "r": 5e-4, "k2": 0.3, "moi": 6.25e-11, "sx": 0.0, "sy": 0.0, "sz": 150.0, "Q": 1e5},
]


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_save_load_config(suffix):
    """Configs survive a save/load cycle in both formats."""
    config = Config(dt=1e-4, n_steps=50, integrator="euler", bodies=BODIES)
    
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
        temp_path = f.name
    
    try:
        save_config(config, temp_path)
        loaded = load_config(temp_path)
        assert loaded == config
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)


def test_invalid_timestep():
    with pytest.raises(ValueError):
        Config(dt=0.0)


def test_build_simulation_derives_sigma_and_creates_spin_ode():
    config = Config(dt=1e-4, integrator="euler", bodies=BODIES, move_to_com=False)
    sim, tides = build_simulation(config)
    
    assert isinstance(sim.integrator, EulerIntegrator)
    assert sim.system.n_particles == 2
    star_sigma = sim.system.params.get(0, "sigma")
    planet_sigma = sim.system.params.get(1, "sigma")
    assert star_sigma == pytest.approx(4.0 * 1e-6 / (3.0 * 0.005 ** 5 * 0.028))
    assert planet_sigma is not None and planet_sigma > 0
    assert sim.system.params.get(0, "tau") is None
    
    assert tides.ode is not None
    assert tides.ode.length == 6
    sim.run(5)
    assert sim.system.params.get(1, "sz") != 150.0


def test_build_simulation_without_spin_evolution():
    config = Config(bodies=BODIES, evolve_spin=False)
    sim, tides = build_simulation(config)
    assert tides.ode is None
    assert sim.odes == []
    # Moved to the center-of-mass frame
    com = np.sum(sim.system.masses[:, np.newaxis] * sim.system.positions, axis=0)
    assert np.allclose(com, 0.0)


def test_body_without_mass_is_rejected():
    with pytest.raises(ValueError):
        build_simulation(Config(bodies=[{"r": 1.0}]))


def test_run_simulation_runs_n_steps_and_saves_state():
    """The configured number of steps is run and the final state is written."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, "final.npz")
        config = Config(dt=1e-4, n_steps=7, bodies=BODIES, output_path=output_path)
        
        sim, tides = run_simulation(config)
        
        assert sim.step_count == 7
        assert os.path.exists(output_path)
        loaded, metadata = load_state(output_path)
        assert metadata["steps"] == 7
        assert metadata["time"] == pytest.approx(7e-4)
        assert metadata["integrator"] == "verlet"
        assert metadata["backend"] == "numpy"
        assert np.allclose(loaded.positions, sim.system.positions)
        assert loaded.params.get(1, "sz") == sim.system.params.get(1, "sz")


def test_run_simulation_without_output_path():
    config = Config(dt=1e-4, n_steps=3, bodies=BODIES)
    sim, _ = run_simulation(config)
    assert sim.step_count == 3
