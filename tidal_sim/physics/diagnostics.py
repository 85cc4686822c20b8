"""Energy and angular-momentum diagnostics for tidal simulations."""

import numpy as np
from typing import Tuple

from tidal_sim.physics.structure import resolve_structure
from tidal_sim.physics.tidal_potential import spin_potential


class Diagnostics:
    """Compute energy and angular momentum including spin contributions."""
    
    def __init__(self, G: float = 1.0, include_tidal_potential: bool = True):
        """Initialize diagnostics.
        
        Args:
            G: Gravitational constant (must match the force calculation)
            include_tidal_potential: Add the conservative tidal potential to U
        """
        self.G = G
        self.include_tidal_potential = include_tidal_potential
    
    def compute_rotational_energy(self, system) -> float:
        """Spin kinetic energy: 0.5 * sum(moi_i * |Omega_i|^2) over bodies with moi and spin."""
        structure = resolve_structure(system)
        mask = structure.has_moi & structure.has_spin
        omega_sq = np.sum(structure.spin[mask] ** 2, axis=1)
        return float(0.5 * np.sum(structure.moi[mask] * omega_sq))
    
    def compute_energies(self, system) -> Tuple[float, float, float]:
        """Compute kinetic, potential and total energy.
        
        U = point-mass gravity + conservative tidal potential
        E = K + U + rotational energy
        
        Args:
            system: NBodySystem
            
        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        K = system.compute_kinetic_energy()
        U = system.compute_potential_energy()
        if self.include_tidal_potential:
            U += spin_potential(system, self.G)
        E = K + U + self.compute_rotational_energy(system)
        return float(K), float(U), float(E)
    
    def compute_spin_angular_momentum(self, system) -> np.ndarray:
        """Spin angular momentum vector sum(moi_i * Omega_i)."""
        structure = resolve_structure(system)
        mask = structure.has_moi & structure.has_spin
        return np.sum(structure.moi[mask][:, np.newaxis] * structure.spin[mask], axis=0)
    
    def compute_total_angular_momentum(self, system) -> np.ndarray:
        """Orbital plus spin angular momentum vector.
        
        Tides only exchange angular momentum between orbits and spins, so
        this is conserved when every structured body is spin-tracked.
        """
        return system.compute_orbital_angular_momentum() + self.compute_spin_angular_momentum(system)
