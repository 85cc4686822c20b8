"""Preset scenario generators for tidal simulations."""

from tidal_sim.presets.base import Preset
from tidal_sim.presets.star_planet import StarPlanetPreset

__all__ = ["Preset", "StarPlanetPreset"]
