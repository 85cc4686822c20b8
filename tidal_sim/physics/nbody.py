"""Particle storage and N-body gravity."""

import numpy as np
from typing import Callable, List, Optional, Sequence
from tidal_sim.backends.base import Backend
from tidal_sim.backends.numpy_backend import NumPyBackend
from tidal_sim.physics.force_calculator import ForceCalculator
from tidal_sim.physics.parameters import ParameterStore


class NBodySystem:
    """N-body gravitational system with optional per-body structure.
    
    Owns particle state (positions, velocities, masses, radii, the
    acceleration accumulator) and the key/value store used to tag bodies
    with physical parameters. Additional forces are callables
    ``f(system, accelerations)`` that add into the accumulator in place.
    
    The last ``n_var`` particles are variational/shadow particles; they are
    integrated but never take part in tidal interactions.
    """
    
    def __init__(
        self,
        backend: Optional[Backend] = None,
        G: float = 1.0,
        epsilon: float = 0.0,
    ):
        """Initialize an empty system.
        
        Args:
            backend: Compute backend for array operations (NumPy if None)
            G: Gravitational constant
            epsilon: Plummer softening for the point-mass gravity (0 = exact)
        """
        self.backend = backend or NumPyBackend()
        self.G = G
        self.epsilon = epsilon
        self.force_calculator = ForceCalculator(epsilon=epsilon)
        self.positions = np.zeros((0, 3))
        self.velocities = np.zeros((0, 3))
        self.accelerations = np.zeros((0, 3))
        self.masses = np.zeros(0)
        self.radii = np.zeros(0)
        self.params = ParameterStore()
        self.n_var = 0
        self.additional_forces: List[Callable] = []
    
    @property
    def n_particles(self) -> int:
        return self.masses.shape[0]
    
    @property
    def n_real(self) -> int:
        """Number of real (non-variational) particles."""
        return self.n_particles - self.n_var
    
    def add_particle(
        self,
        m: float,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        velocity: Sequence[float] = (0.0, 0.0, 0.0),
        r: float = 0.0,
        **params: float,
    ) -> int:
        """Append a particle and return its index.
        
        Args:
            m: Mass
            position: Position 3-vector
            velocity: Velocity 3-vector
            r: Physical radius
            **params: Optional structure parameters (k2, sigma, moi, sx, sy, sz)
            
        Returns:
            Index of the new particle
        """
        position = np.asarray(position, dtype=float).reshape(3)
        velocity = np.asarray(velocity, dtype=float).reshape(3)
        if self.n_var > 0:
            raise ValueError("Cannot add real particles after variational particles")
        self.positions = np.vstack([self.positions, position])
        self.velocities = np.vstack([self.velocities, velocity])
        self.accelerations = np.vstack([self.accelerations, np.zeros(3)])
        self.masses = np.append(self.masses, float(m))
        self.radii = np.append(self.radii, float(r))
        self.params.append(params)
        return self.n_particles - 1
    
    def initialize(self, positions, velocities, masses, radii=None, params=None, n_var: int = 0):
        """Initialize particle state from arrays.
        
        Args:
            positions: Array of shape (n, 3)
            velocities: Array of shape (n, 3)
            masses: Array of shape (n,)
            radii: Optional array of shape (n,) (zeros if None)
            params: Optional list of per-body parameter dicts
            n_var: Number of trailing variational particles
        """
        positions = np.asarray(self.backend.to_numpy(positions), dtype=float)
        velocities = np.asarray(self.backend.to_numpy(velocities), dtype=float)
        masses = np.asarray(self.backend.to_numpy(masses), dtype=float).flatten()
        n = masses.shape[0]
        if positions.shape != (n, 3) or velocities.shape != (n, 3):
            raise ValueError(
                f"positions and velocities must have shape ({n}, 3), "
                f"got {positions.shape} and {velocities.shape}"
            )
        self.positions = positions.copy()
        self.velocities = velocities.copy()
        self.masses = masses.copy()
        self.accelerations = np.zeros((n, 3))
        self.radii = np.zeros(n) if radii is None else np.asarray(radii, dtype=float).flatten().copy()
        if params is None:
            self.params = ParameterStore(n)
        else:
            if len(params) != n:
                raise ValueError(f"Expected {n} parameter dicts, got {len(params)}")
            self.params = ParameterStore.from_dicts(params)
        self.n_var = n_var
    
    def add_force(self, force: Callable):
        """Register an additional force ``force(system, accelerations)``."""
        self.additional_forces.append(force)
    
    def compute_accelerations(self) -> np.ndarray:
        """Compute total accelerations: point-mass gravity plus additional forces.
        
        The result is also stored in ``self.accelerations``.
        
        Returns:
            (n, 3) array of accelerations
        """
        acc = self.force_calculator.compute_accelerations(
            self.backend.array(self.positions),
            self.backend.array(self.masses),
            self.backend,
            G=self.G,
        )
        self.accelerations = np.array(self.backend.to_numpy(acc), dtype=float)
        for force in self.additional_forces:
            force(self, self.accelerations)
        return self.accelerations
    
    def compute_kinetic_energy(self) -> float:
        """Compute total kinetic energy: 0.5 * sum(m_i * v_i^2)."""
        v_sq = np.sum(self.velocities ** 2, axis=1)
        return float(0.5 * np.sum(self.masses * v_sq))
    
    def compute_potential_energy(self) -> float:
        """Compute point-mass gravitational potential energy."""
        return self.force_calculator.compute_potential_energy(
            self.backend.array(self.positions),
            self.backend.array(self.masses),
            self.backend,
            G=self.G,
        )
    
    def compute_orbital_angular_momentum(self) -> np.ndarray:
        """Total orbital angular momentum vector L = sum(m_i * r_i x v_i)."""
        return np.sum(self.masses[:, np.newaxis] * np.cross(self.positions, self.velocities), axis=0)
    
    def get_state(self):
        """Get current state (positions, velocities, masses) as copies."""
        return self.positions.copy(), self.velocities.copy(), self.masses.copy()
    
    def set_state(self, positions, velocities, masses=None):
        """Set particle positions and velocities (and optionally masses)."""
        self.positions = np.asarray(positions, dtype=float).copy()
        self.velocities = np.asarray(velocities, dtype=float).copy()
        if masses is not None:
            self.masses = np.asarray(masses, dtype=float).flatten().copy()
