"""Planet spin relaxing towards pseudo-synchronous rotation."""

import numpy as np
import matplotlib.pyplot as plt

from tidal_sim import Simulator, TidesSpin
from tidal_sim.physics.diagnostics import Diagnostics
from tidal_sim.presets import StarPlanetPreset
from tidal_sim.render import plot_spin_evolution, plot_energy_error


def main():
    """Run a star-planet system with a fast, tilted planet spin."""
    preset = StarPlanetPreset(
        a=0.05,
        e=0.2,
        planet_spin=200.0,
        planet_tau=1e-3,
        obliquity=np.radians(30.0),
    )
    sim = Simulator(dt=1e-3)
    preset.populate(sim)
    sim.move_to_com()
    tides = TidesSpin(sim)
    tides.initialize_spin_ode()
    diagnostics = Diagnostics(G=sim.G)
    
    times, spins, energies = [], [], []
    for step in range(5000):
        sim.step()
        if step % 10 == 0:
            params = sim.system.params
            times.append(sim.time)
            spins.append([params.get(1, key) for key in ("sx", "sy", "sz")])
            energies.append(diagnostics.compute_energies(sim.system)[2])
    
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 8))
    plot_spin_evolution(times, spins, labels=["planet"], ax=ax1)
    plot_energy_error(times, energies, ax=ax2)
    fig.tight_layout()
    fig.savefig("pseudo_synchronization.png")
    print(f"Final planet spin: {spins[-1]}")


if __name__ == "__main__":
    main()
