"""Diagnostic plots using matplotlib."""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Sequence


def plot_spin_evolution(times, spins, labels: Optional[Sequence[str]] = None, ax=None):
    """Plot spin components over time.
    
    Args:
        times: Array of shape (T,)
        spins: Array of shape (T, 3) for one body or (T, n, 3) for n bodies
        labels: Optional body labels
        ax: Optional matplotlib axes
        
    Returns:
        The axes the lines were drawn on
    """
    times = np.asarray(times, dtype=float)
    spins = np.asarray(spins, dtype=float)
    if spins.ndim == 2:
        spins = spins[:, np.newaxis, :]
    if spins.shape[0] != times.shape[0] or spins.shape[-1] != 3:
        raise ValueError(f"spins must have shape (T, 3) or (T, n, 3) with T={times.shape[0]}, got {spins.shape}")
    n_bodies = spins.shape[1]
    if labels is None:
        labels = [f"body {i}" for i in range(n_bodies)]
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))
    
    for i in range(n_bodies):
        for k, component in enumerate(("x", "y", "z")):
            ax.plot(times, spins[:, i, k], label=f"{labels[i]} $\\Omega_{component}$")
    ax.set_xlabel("Time")
    ax.set_ylabel("Spin")
    ax.set_title("Spin evolution")
    ax.grid(True, alpha=0.3)
    ax.legend()
    return ax


def plot_energy_error(times, energies, ax=None):
    """Plot relative energy error |E - E0| / |E0| on a log scale."""
    times = np.asarray(times, dtype=float)
    energies = np.asarray(energies, dtype=float)
    e0 = energies[0]
    scale = abs(e0) if e0 != 0.0 else 1.0
    error = np.abs(energies - e0) / scale
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))
    # log scale cannot show exact zeros
    ax.semilogy(times, np.maximum(error, 1e-17))
    ax.set_xlabel("Time")
    ax.set_ylabel("Relative energy error")
    ax.grid(True, alpha=0.3)
    return ax
