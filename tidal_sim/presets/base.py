"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import List, Tuple


class Preset(ABC):
    """Abstract base class for preset scenarios."""
    
    def __init__(self, G: float = 1.0):
        """Initialize preset.
        
        Args:
            G: Gravitational constant of the target simulation
        """
        self.G = G
    
    @abstractmethod
    def generate(self) -> Tuple:
        """Generate initial conditions.
        
        Returns:
            Tuple of (positions, velocities, masses, radii, params)
        """
        pass
    
    def populate(self, simulator) -> List[int]:
        """Add the generated bodies to ``simulator`` and return their indices."""
        if simulator.G != self.G:
            raise ValueError(f"Preset built for G={self.G}, simulator uses G={simulator.G}")
        positions, velocities, masses, radii, params = self.generate()
        return [
            simulator.add_particle(masses[i], positions[i], velocities[i], r=radii[i], **params[i])
            for i in range(len(masses))
        ]
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
