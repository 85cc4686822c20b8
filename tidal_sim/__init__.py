"""
Tidal Simulator - self-consistent tides and spin evolution for N-body systems.

Features:
- Constant time-lag tidal and spin-distortion forces (Eggleton et al. 1998)
- Spin-vector evolution through an auxiliary ODE with pre/post synchronization
- Conservative tidal potential for energy diagnostics
- sigma from tidal time lag or quality factor
- Verlet/Euler orbital integrators, RK4 for spins
- JSON/YAML configuration, state I/O and matplotlib diagnostics
"""

__version__ = "0.1.0"

from tidal_sim.physics.simulator import Simulator
from tidal_sim.physics.tides_spin import TidesSpin
from tidal_sim.backends.factory import get_backend, list_available_backends
from tidal_sim.exceptions import (
    TidalSimError,
    SpinStateMismatchError,
    TidalConfigurationWarning,
    SpinEvolutionWarning,
)

__all__ = [
    "Simulator",
    "TidesSpin",
    "get_backend",
    "list_available_backends",
    "TidalSimError",
    "SpinStateMismatchError",
    "TidalConfigurationWarning",
    "SpinEvolutionWarning",
]
