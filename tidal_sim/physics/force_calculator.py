"""Vectorized Newtonian gravity on the compute backend."""

from typing import Any
from tidal_sim.backends.base import Backend


class ForceCalculator:
    """Pairwise Newtonian accelerations with optional Plummer softening."""

    def __init__(self, epsilon: float = 0.0):
        self.epsilon = epsilon

    def compute_accelerations(
        self,
        positions: Any,
        masses: Any,
        backend: Backend,
        G: float = 1.0,
    ) -> Any:
        """Compute gravitational accelerations on all particles.

        a_i = G * sum_j m_j * (x_j - x_i) / (|x_j - x_i|^2 + eps^2)^(3/2)

        Massless particles feel gravity but exert none.

        Args:
            positions: (n, 3) backend array
            masses: (n,) backend array
            backend: Compute backend
            G: Gravitational constant

        Returns:
            (n, 3) backend array of accelerations
        """
        n = positions.shape[0]
        dim = positions.shape[1]
        if n < 2:
            return backend.zeros((n, dim))
        # r_diff: (1,n,dim) - (n,1,dim) -> (n,n,dim)
        pos_i = backend.reshape(positions, (n, 1, dim))
        pos_j = backend.reshape(positions, (1, n, dim))
        r_diff = pos_j - pos_i
        r_sq = backend.sum(backend.square(r_diff), axis=2)
        r_soft_cubed = backend.power(r_sq + self.epsilon ** 2, 1.5)
        # Keep the diagonal finite before dividing; it is masked out below
        identity = backend.eye(n)
        r_soft_cubed = backend.where(identity > 0, 1.0, r_soft_cubed)
        m_j = backend.expand_dims(masses, 0)
        acc_magnitude = G * m_j / r_soft_cubed * (1.0 - identity)
        acc_vectors = backend.expand_dims(acc_magnitude, 2) * r_diff
        return backend.sum(acc_vectors, axis=1)

    def compute_potential_energy(
        self,
        positions: Any,
        masses: Any,
        backend: Backend,
        G: float = 1.0,
    ) -> float:
        """U = -G * sum_{i<j} m_i m_j / sqrt(r_ij^2 + eps^2), matching the force law."""
        n = positions.shape[0]
        if n < 2:
            return 0.0
        dim = positions.shape[1]
        pos_i = backend.reshape(positions, (n, 1, dim))
        pos_j = backend.reshape(positions, (1, n, dim))
        r_sq = backend.sum(backend.square(pos_j - pos_i), axis=2)
        identity = backend.eye(n)
        r_soft = backend.sqrt(backend.where(identity > 0, 1.0, r_sq + self.epsilon ** 2))
        m_i = backend.expand_dims(masses, 1)
        m_j = backend.expand_dims(masses, 0)
        pair_energy = -G * m_i * m_j / r_soft * (1.0 - identity)
        # Each pair counted twice
        return float(0.5 * backend.to_numpy(backend.sum(pair_energy)))
