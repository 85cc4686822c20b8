"""Configuration utilities."""

from tidal_sim.utils.config import load_config, save_config, build_simulation, run_simulation, Config

__all__ = ["load_config", "save_config", "build_simulation", "run_simulation", "Config"]
