"""Numerical integrators for orbits and auxiliary ODEs."""

from tidal_sim.physics.integrators.base import Integrator
from tidal_sim.physics.integrators.euler import EulerIntegrator
from tidal_sim.physics.integrators.verlet import VerletIntegrator
from tidal_sim.physics.integrators.rk4 import RK4Integrator

__all__ = ["Integrator", "EulerIntegrator", "VerletIntegrator", "RK4Integrator"]
