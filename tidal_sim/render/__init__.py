"""Diagnostic plotting."""

from tidal_sim.render.plots import plot_spin_evolution, plot_energy_error

__all__ = ["plot_spin_evolution", "plot_energy_error"]
