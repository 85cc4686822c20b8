"""Abstract base class for orbital integrators."""

from abc import ABC, abstractmethod
from typing import Tuple


class Integrator(ABC):
    """Abstract interface for orbital integrators."""
    
    @abstractmethod
    def step(self, positions, velocities, accelerations, dt: float, backend) -> Tuple:
        """Perform one integration step.
        
        Args:
            positions: Current positions array (n, 3)
            velocities: Current velocities array (n, 3)
            accelerations: Accelerations at the current state (n, 3)
            dt: Time step
            backend: Compute backend
            
        Returns:
            Tuple of (new_positions, new_velocities)
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (e.g., 1 for Euler, 2 for Verlet, 4 for RK4)."""
        pass
