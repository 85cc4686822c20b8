"""Tests for diagnostic plots."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
import matplotlib.pyplot as plt
from tidal_sim.render import plot_energy_error, plot_spin_evolution


def test_plot_spin_evolution():
    times = np.linspace(0.0, 1.0, 20)
    spins = np.zeros((20, 2, 3))
    spins[:, 0, 2] = 1.0 + times
    ax = plot_spin_evolution(times, spins, labels=["star", "planet"])
    assert len(ax.get_lines()) == 6
    plt.close(ax.figure)


def test_plot_spin_evolution_single_body():
    times = np.linspace(0.0, 1.0, 5)
    ax = plot_spin_evolution(times, np.ones((5, 3)))
    assert len(ax.get_lines()) == 3
    plt.close(ax.figure)


def test_plot_spin_evolution_rejects_bad_shape():
    with pytest.raises(ValueError):
        plot_spin_evolution(np.arange(4), np.ones((5, 3)))


def test_plot_energy_error():
    times = np.arange(4.0)
    ax = plot_energy_error(times, [-1.0, -1.0, -1.0 + 1e-8, -1.0 - 1e-6])
    line = ax.get_lines()[0]
    assert np.allclose(line.get_ydata()[2:], [1e-8, 1e-6])
    plt.close(ax.figure)
