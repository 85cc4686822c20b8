"""Self-consistent spin, tidal and dynamical equations of motion.

``TidesSpin`` connects the force law, spin ODE and potential to a
``Simulator``. Bodies with only a mass are point particles. A body has
structure when its radius, ``k2`` and spin components ``sx``, ``sy``,
``sz`` are set; its spin evolves when ``moi`` is also set, and tides
raised on it dissipate energy when ``sigma`` is set.

Typical use::

    sim = Simulator(dt=1e-3)
    sim.add_particle(m=1.0, r=0.005, k2=0.03, sx=0.0, sy=0.0, sz=10.0, moi=7e-6)
    sim.add_particle(m=1e-3, position=[1, 0, 0], velocity=[0, 1, 0])
    tides = TidesSpin(sim)
    tides.initialize_spin_ode()
    sim.run(1000)
"""

import warnings
from typing import Optional
import numpy as np

from tidal_sim.exceptions import SpinEvolutionWarning, TidalConfigurationWarning
from tidal_sim.physics.ode import ODE
from tidal_sim.physics.spin_ode import (
    spin_derivatives,
    sync_spins_to_state,
    sync_state_to_spins,
)
from tidal_sim.physics.structure import SpinLayout, resolve_structure
from tidal_sim.physics.tidal_force import accumulate_tidal_accelerations
from tidal_sim.physics.tidal_parameters import sigma_from_q, sigma_from_tau
from tidal_sim.physics.tidal_potential import spin_potential


class TidesSpin:
    """Tides and spin evolution effect attached to a simulator."""
    
    name = "tides_spin"
    
    def __init__(self, simulator, register: bool = True):
        """Attach the effect.
        
        Args:
            simulator: Simulator whose system receives the forces
            register: Add the force to the system's additional forces
        """
        self.simulator = simulator
        self.ode: Optional[ODE] = None
        self.layout: Optional[SpinLayout] = None
        if register:
            simulator.system.add_force(self.apply)
    
    @property
    def system(self):
        return self.simulator.system
    
    @property
    def G(self) -> float:
        return self.system.G
    
    def initialize_spin_ode(self) -> Optional[ODE]:
        """Create the spin ODE for all currently spin-tracked bodies.
        
        The tracked set (bodies with k2, moi and sx/sy/sz) is fixed from
        here on. Calling this again re-registers: the previous spin ODE is
        removed from the simulator and replaced. Returns None when no body
        qualifies.
        """
        if self.ode is not None:
            if self.ode in self.simulator.odes:
                self.simulator.odes.remove(self.ode)
            self.ode = None
            self.layout = None

        structure = resolve_structure(self.system)
        for i in structure.untracked_spinning:
            warnings.warn(
                f"Particle {i} has moi and spin set but no k2; its spin will not evolve",
                TidalConfigurationWarning,
                stacklevel=2,
            )
        layout = SpinLayout.from_structure(structure)
        if layout.n_tracked == 0:
            return None
        
        ode = self.simulator.create_ode(layout.length)
        ode.ref = self.simulator
        ode.derivatives = self.derivatives
        ode.pre_timestep = self.sync_pre
        ode.post_timestep = self.sync_post
        self.layout = layout
        self.ode = ode
        sync_spins_to_state(self.system, layout, ode.y)
        return ode
    
    def apply(self, system, accelerations: np.ndarray):
        """Add spin/tidal accelerations into ``accelerations`` in place."""
        if self.ode is None:
            warnings.warn(
                "Spin axes are not being evolved. Call initialize_spin_ode() to evolve them",
                SpinEvolutionWarning,
                stacklevel=2,
            )
        structure = resolve_structure(system)
        accumulate_tidal_accelerations(system, structure, accelerations, system.G, system.backend)
    
    def derivatives(self, ode: ODE, y_dot: np.ndarray, y: np.ndarray, t: float):
        """ODE callback: spin derivatives. ``t`` is unused."""
        spin_derivatives(self.system, self._layout(), y_dot, y, self.G, backend=self.system.backend)
    
    def sync_pre(self, ode: ODE, y0: np.ndarray):
        """ODE callback: copy body spins into the ODE state."""
        sync_spins_to_state(self.system, self._layout(), ode.y)
    
    def sync_post(self, ode: ODE, y0: np.ndarray):
        """ODE callback: copy the evolved ODE state back into body spins."""
        sync_state_to_spins(self.system, self._layout(), y0)
    
    def _layout(self) -> SpinLayout:
        if self.layout is None:
            raise RuntimeError("Spin ODE has not been initialized; call initialize_spin_ode() first")
        return self.layout
    
    def potential(self) -> float:
        """Conservative tidal potential energy of the current configuration."""
        return spin_potential(self.system, self.G)
    
    def sigma_from_tau(self, index: int, tau: float) -> float:
        """sigma for body ``index`` from a constant time lag (0.0 if k2/radius missing)."""
        return sigma_from_tau(self.system, index, tau, self.G)
    
    def sigma_from_q(self, index: int, primary_index: int, Q: float) -> float:
        """sigma for body ``index`` from a quality factor (0.0 if k2/radius missing)."""
        return sigma_from_q(self.system, index, primary_index, Q, self.G)
