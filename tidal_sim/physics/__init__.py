"""Physics engine: N-body host, tidal forces and spin evolution."""

from tidal_sim.physics.nbody import NBodySystem
from tidal_sim.physics.simulator import Simulator
from tidal_sim.physics.tides_spin import TidesSpin

__all__ = ["NBodySystem", "Simulator", "TidesSpin"]
