"""Velocity Verlet integrator (better energy conservation, O(h²) accuracy)."""

from typing import Tuple
from tidal_sim.backends.base import Backend
from tidal_sim.physics.integrators.base import Integrator


class VerletIntegrator(Integrator):
    """Velocity Verlet integrator - second-order, symplectic for conservative forces.
    
    1. x_new = x + v*dt + 0.5*a_old*dt^2
    2. (recompute accelerations to get a_new)
    3. v_new = v + 0.5*(a_old + a_new)*dt
    
    step() returns x_new and v_half = v + 0.5*a_old*dt; complete_step()
    finishes with v_new = v_half + 0.5*a_new*dt. Velocity-dependent forces
    (tidal dissipation) are evaluated with v_half at the new positions.
    """
    
    @property
    def name(self) -> str:
        return "verlet"
    
    @property
    def order(self) -> int:
        return 2
    
    def step(self, positions, velocities, accelerations, dt: float, backend: Backend) -> Tuple:
        """First half: returns (new_positions, v_half)."""
        new_positions = positions + velocities * dt + accelerations * (0.5 * dt * dt)
        v_half = velocities + accelerations * (0.5 * dt)
        return new_positions, v_half
    
    def complete_step(self, v_half, accelerations_new, dt: float, backend: Backend):
        """Second half: v_new = v_half + 0.5*a_new*dt."""
        return v_half + accelerations_new * (0.5 * dt)
