"""Main simulator controller."""

from typing import Callable, List, Optional
import time
import numpy as np

from tidal_sim.backends.base import Backend
from tidal_sim.physics.diagnostics import Diagnostics
from tidal_sim.physics.integrators.base import Integrator
from tidal_sim.physics.integrators.euler import EulerIntegrator
from tidal_sim.physics.integrators.rk4 import RK4Integrator
from tidal_sim.physics.integrators.verlet import VerletIntegrator
from tidal_sim.physics.nbody import NBodySystem
from tidal_sim.physics.ode import ODE

INTEGRATORS = {
    "euler": EulerIntegrator,
    "verlet": VerletIntegrator,
}


def get_integrator(name: str) -> Integrator:
    """Get an orbital integrator by name."""
    integrator_class = INTEGRATORS.get(name.lower())
    if integrator_class is None:
        raise ValueError(f"Unknown integrator: {name}. Available: {list(INTEGRATORS.keys())}")
    return integrator_class()


class Simulator:
    """Main simulation controller.
    
    Orchestrates the orbital integrator, additional forces and the
    auxiliary ODEs. Each step:
    
    1. every ODE: pre_timestep, one RK4 step from t to t + dt, post_timestep
    2. orbital step with accelerations = gravity + additional forces
    """
    
    def __init__(
        self,
        backend: Optional[Backend] = None,
        integrator: Optional[Integrator] = None,
        dt: float = 0.01,
        G: float = 1.0,
        epsilon: float = 0.0,
    ):
        """Initialize simulator.
        
        Args:
            backend: Compute backend (NumPy if None)
            integrator: Orbital integrator (default: Verlet)
            dt: Time step
            G: Gravitational constant
            epsilon: Plummer softening of the point-mass gravity
        """
        self.system = NBodySystem(backend, G=G, epsilon=epsilon)
        self.backend = self.system.backend
        self.integrator = integrator or VerletIntegrator()
        self.ode_integrator = RK4Integrator()
        self.dt = dt
        self.odes: List[ODE] = []
        self.time = 0.0
        self.step_count = 0
        
        # Profiling: last step timing (ms)
        self._last_forces_ms: Optional[float] = None
        self._last_ode_ms: Optional[float] = None
        self._profile: bool = False
        
        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.debug_table: bool = False
        self.debug_table_interval: int = 100
    
    @property
    def G(self) -> float:
        return self.system.G
    
    def add_particle(self, m: float, position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0), r: float = 0.0, **params) -> int:
        """Add a particle to the system; see ``NBodySystem.add_particle``."""
        return self.system.add_particle(m, position, velocity, r=r, **params)
    
    def create_ode(self, length: int) -> ODE:
        """Create and register an auxiliary ODE of the given length."""
        ode = ODE(length, ref=self)
        self.odes.append(ode)
        return ode
    
    def set_profiling(self, enabled: bool = True):
        """Enable or disable step timing (forces ms, ODE ms)."""
        self._profile = enabled
    
    def get_timing(self) -> dict:
        """Return last step timing in ms: forces_ms, ode_ms."""
        return {
            "forces_ms": self._last_forces_ms,
            "ode_ms": self._last_ode_ms,
        }
    
    def move_to_com(self):
        """Shift positions and velocities into the center-of-mass frame."""
        masses = self.system.masses
        total_mass = np.sum(masses)
        if total_mass == 0.0:
            return
        com = np.sum(masses[:, np.newaxis] * self.system.positions, axis=0) / total_mass
        comv = np.sum(masses[:, np.newaxis] * self.system.velocities, axis=0) / total_mass
        self.system.positions = self.system.positions - com
        self.system.velocities = self.system.velocities - comv
    
    def _integrate_odes(self):
        for ode in self.odes:
            if ode.pre_timestep is not None:
                ode.pre_timestep(ode, ode.y)
            self.ode_integrator.integrate(ode, self.time, self.dt)
            if ode.post_timestep is not None:
                ode.post_timestep(ode, ode.y)
    
    def step(self):
        """Perform one simulation step."""
        if self._profile:
            t0 = time.perf_counter()
        self._integrate_odes()
        if self._profile:
            t1 = time.perf_counter()
        
        system = self.system
        acc_old = system.compute_accelerations()
        new_positions, new_velocities = self.integrator.step(
            system.positions,
            system.velocities,
            acc_old,
            self.dt,
            self.backend,
        )
        system.positions = new_positions
        system.velocities = new_velocities
        if hasattr(self.integrator, "complete_step"):
            acc_new = system.compute_accelerations()
            system.velocities = self.integrator.complete_step(
                new_velocities,
                acc_new,
                self.dt,
                self.backend,
            )
        if self._profile:
            t2 = time.perf_counter()
            self._last_ode_ms = (t1 - t0) * 1000.0
            self._last_forces_ms = (t2 - t1) * 1000.0
        
        self.time += self.dt
        self.step_count += 1
        
        if self.debug_table and (self.step_count % self.debug_table_interval == 0):
            self._log_diagnostics_table()
        
        if self.on_step_callback:
            self.on_step_callback(self)
    
    def _log_diagnostics_table(self):
        """Log K, U, E and total angular momentum."""
        diagnostics = Diagnostics(G=self.G)
        K, U, E = diagnostics.compute_energies(self.system)
        L = diagnostics.compute_total_angular_momentum(self.system)
        S = diagnostics.compute_spin_angular_momentum(self.system)
        print(
            f"[Diag] step={self.step_count} t={self.time:.4f} K={K:.6e} U={U:.6e} "
            f"E={E:.6e} |L|={np.linalg.norm(L):.6e} |S|={np.linalg.norm(S):.6e}"
        )
    
    def run(self, n_steps: int):
        """Run simulation for specified number of steps."""
        for _ in range(n_steps):
            self.step()
    
    def integrate(self, t_end: float):
        """Step until ``time`` reaches ``t_end`` (the last step may overshoot)."""
        while self.time < t_end:
            self.step()
    
    def set_timestep(self, dt: float):
        self.dt = dt
    
    def set_integrator(self, integrator: Integrator):
        self.integrator = integrator
    
    def get_state(self):
        """Get current simulation state.
        
        Returns:
            Tuple of (positions, velocities, masses, time, step_count)
        """
        pos, vel, mass = self.system.get_state()
        return pos, vel, mass, self.time, self.step_count
    
    def get_energy(self) -> float:
        """Total energy: kinetic + potential (incl. tidal) + rotational."""
        return Diagnostics(G=self.G).compute_energies(self.system)[2]
