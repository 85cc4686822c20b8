"""Euler method integrator (baseline, O(h) accuracy)."""

from typing import Tuple
from tidal_sim.backends.base import Backend
from tidal_sim.physics.integrators.base import Integrator


class EulerIntegrator(Integrator):
    """Euler method - simple first-order integrator.
    
    Fast but less accurate. Good for baseline comparisons.
    """
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def step(self, positions, velocities, accelerations, dt: float, backend: Backend) -> Tuple:
        """Euler step: v_new = v + a*dt, r_new = r + v*dt."""
        new_velocities = velocities + accelerations * dt
        new_positions = positions + velocities * dt
        return new_positions, new_velocities
