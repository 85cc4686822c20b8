"""Conservative part of the tidal interaction, for energy diagnostics."""

from typing import Optional
import numpy as np

from tidal_sim.physics.structure import BodyStructure, resolve_structure


def pair_spin_potential(
    source_mass: float,
    target_mass: float,
    target_radius: float,
    separation_sq: float,
    G: float,
    k2: float,
) -> float:
    """Tidal potential of one ordered pair.
    
    -1/2 * G * m_s * m_t * (m_s / m_t) * k2 * R_t^5 / r^6
    
    ``k2`` belongs to the source while the radius is the target's.
    """
    fac = (source_mass / target_mass) * k2 * target_radius ** 5
    return -0.5 * G * source_mass * target_mass / separation_sq ** 3 * fac


def spin_potential(system, G: float, structure: Optional[BodyStructure] = None) -> float:
    """Sum the conservative tidal potential over all ordered pairs.
    
    Sources are real bodies with k2 and sigma set and nonzero radius and
    mass; targets are all other bodies with nonzero mass.
    
    Returns:
        Potential energy (no effect on the dynamics)
    """
    if structure is None:
        structure = resolve_structure(system)
    masses = structure.masses
    H = 0.0
    for i in structure.potential_sources:
        for j in range(structure.n_bodies):
            if i == j or masses[j] == 0.0:
                continue
            separation = system.positions[j] - system.positions[i]
            H += pair_spin_potential(
                masses[i],
                masses[j],
                structure.radii[j],
                float(np.dot(separation, separation)),
                G,
                structure.k2[i],
            )
    return float(H)
