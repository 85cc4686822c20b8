"""Star plus one structured planet, both raising tides on each other."""

import numpy as np
from typing import List, Optional, Tuple

from tidal_sim.physics.orbit import circular_velocity
from tidal_sim.physics.tidal_parameters import sigma_from_tau
from tidal_sim.presets.base import Preset


class StarPlanetPreset(Preset):
    """A star and a planet on a Keplerian orbit in the x-y plane.
    
    The planet starts at pericenter on the +x axis. The star spins about z;
    the planet spin is tilted from z towards x by ``obliquity``. Moments of
    inertia are ``gyration * m * R^2``. When a time lag is given, sigma is
    derived from it as the bodies are added.
    """
    
    def __init__(
        self,
        G: float = 1.0,
        star_mass: float = 1.0,
        star_radius: float = 0.005,
        star_k2: float = 0.028,
        star_gyration: float = 0.07,
        star_spin: float = 0.0,
        star_tau: Optional[float] = None,
        planet_mass: float = 1e-3,
        planet_radius: float = 5e-4,
        planet_k2: float = 0.3,
        planet_gyration: float = 0.25,
        planet_spin: float = 0.0,
        planet_tau: Optional[float] = None,
        obliquity: float = 0.0,
        a: float = 0.05,
        e: float = 0.0,
    ):
        """Initialize the preset.
        
        Args:
            G: Gravitational constant
            star_mass, planet_mass: Masses
            star_radius, planet_radius: Physical radii
            star_k2, planet_k2: Love numbers of degree 2
            star_gyration, planet_gyration: moi / (m R^2)
            star_spin, planet_spin: Spin rates (angular frequency)
            star_tau, planet_tau: Constant time lags (None = no dissipation)
            obliquity: Planet spin tilt in radians
            a: Semi-major axis
            e: Eccentricity (0 <= e < 1)
        """
        super().__init__(G)
        if not 0.0 <= e < 1.0:
            raise ValueError(f"Eccentricity must be in [0, 1), got {e}")
        if a <= 0.0:
            raise ValueError(f"Semi-major axis must be positive, got {a}")
        self.star_mass = star_mass
        self.star_radius = star_radius
        self.star_k2 = star_k2
        self.star_gyration = star_gyration
        self.star_spin = star_spin
        self.star_tau = star_tau
        self.planet_mass = planet_mass
        self.planet_radius = planet_radius
        self.planet_k2 = planet_k2
        self.planet_gyration = planet_gyration
        self.planet_spin = planet_spin
        self.planet_tau = planet_tau
        self.obliquity = obliquity
        self.a = a
        self.e = e
    
    @property
    def name(self) -> str:
        return "star_planet"
    
    def generate(self) -> Tuple:
        r_peri = self.a * (1.0 - self.e)
        v_peri = circular_velocity(self.G, self.star_mass, self.planet_mass, self.a) * np.sqrt(
            (1.0 + self.e) / (1.0 - self.e)
        )
        positions = np.array([[0.0, 0.0, 0.0], [r_peri, 0.0, 0.0]])
        velocities = np.array([[0.0, 0.0, 0.0], [0.0, v_peri, 0.0]])
        masses = np.array([self.star_mass, self.planet_mass])
        radii = np.array([self.star_radius, self.planet_radius])
        
        star_params = {
            "k2": self.star_k2,
            "moi": self.star_gyration * self.star_mass * self.star_radius ** 2,
            "sx": 0.0,
            "sy": 0.0,
            "sz": self.star_spin,
        }
        planet_params = {
            "k2": self.planet_k2,
            "moi": self.planet_gyration * self.planet_mass * self.planet_radius ** 2,
            "sx": self.planet_spin * np.sin(self.obliquity),
            "sy": 0.0,
            "sz": self.planet_spin * np.cos(self.obliquity),
        }
        return positions, velocities, masses, radii, [star_params, planet_params]
    
    def populate(self, simulator) -> List[int]:
        indices = super().populate(simulator)
        for index, tau in zip(indices, (self.star_tau, self.planet_tau)):
            if tau is not None:
                sigma = sigma_from_tau(simulator.system, index, tau, self.G)
                simulator.system.params.set(index, "sigma", sigma)
        return indices
