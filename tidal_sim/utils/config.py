"""Configuration management."""

import json
import yaml
from typing import Dict, Any, List, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, field


@dataclass
class Config:
    """Simulation configuration.
    
    ``bodies`` is a list of dicts with keys ``m``, ``position``,
    ``velocity``, ``r`` and any structure parameters (``k2``, ``sigma``,
    ``moi``, ``sx``, ``sy``, ``sz``, or ``tau``/``Q`` to derive sigma).
    """
    # Simulation parameters
    G: float = 1.0
    dt: float = 0.001
    n_steps: int = 1000
    integrator: str = "verlet"
    backend: str = "numpy"
    epsilon: float = 0.0
    move_to_com: bool = True
    
    # Tides and spin
    evolve_spin: bool = True
    bodies: List[Dict[str, Any]] = field(default_factory=list)
    
    # Output parameters
    output_path: Optional[str] = None
    
    def __post_init__(self):
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")


def load_config(config_path: str) -> Config:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        Config object
    """
    config_path = Path(config_path)
    
    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    
    return Config(**(data or {}))


def save_config(config: Config, output_path: str):
    """Save configuration to file.
    
    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)
    
    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)


def build_simulation(config: Config):
    """Create a simulator, its bodies and the tides/spin effect from a config.
    
    A body may give ``tau`` or ``Q`` (with ``primary``, default 0) instead of
    ``sigma``; sigma is then derived once all bodies exist.
    
    Returns:
        Tuple of (simulator, tides_spin_effect)
    """
    from tidal_sim.backends.factory import get_backend
    from tidal_sim.physics.simulator import Simulator, get_integrator
    from tidal_sim.physics.tides_spin import TidesSpin
    
    sim = Simulator(
        get_backend(config.backend),
        get_integrator(config.integrator),
        dt=config.dt,
        G=config.G,
        epsilon=config.epsilon,
    )
    derived = []
    for index, body in enumerate(config.bodies):
        body = dict(body)
        if "m" not in body:
            raise ValueError(f"Body {index} has no mass 'm'")
        tau = body.pop("tau", None)
        Q = body.pop("Q", None)
        primary = body.pop("primary", 0)
        sim.add_particle(
            body.pop("m"),
            body.pop("position", (0.0, 0.0, 0.0)),
            body.pop("velocity", (0.0, 0.0, 0.0)),
            r=body.pop("r", 0.0),
            **body,
        )
        if tau is not None or Q is not None:
            derived.append((index, tau, Q, primary))
    
    if config.move_to_com:
        sim.move_to_com()
    
    tides = TidesSpin(sim)
    for index, tau, Q, primary in derived:
        if tau is not None:
            sigma = tides.sigma_from_tau(index, tau)
        else:
            sigma = tides.sigma_from_q(index, primary, Q)
        if sigma != 0.0:
            sim.system.params.set(index, "sigma", sigma)
    
    if config.evolve_spin:
        tides.initialize_spin_ode()
    return sim, tides


def run_simulation(config: Config):
    """Build a simulation from ``config`` and run it for ``config.n_steps`` steps.
    
    When ``config.output_path`` is set, the final state is saved there
    (.npz or .json) with the run metadata.
    
    Returns:
        Tuple of (simulator, tides_spin_effect)
    """
    from tidal_sim.io.state_io import save_state
    
    sim, tides = build_simulation(config)
    sim.run(config.n_steps)
    
    if config.output_path:
        save_state(sim.system, config.output_path, metadata={
            'time': sim.time,
            'steps': sim.step_count,
            'integrator': sim.integrator.name,
            'backend': sim.backend.name,
        })
        print(f"State saved to {config.output_path}")
    return sim, tides
