"""Two-body orbit helpers."""

import numpy as np


def semi_major_axis(G: float, mass: float, position, velocity, primary_mass: float, primary_position, primary_velocity) -> float:
    """Semi-major axis of the relative orbit from the vis-viva equation.
    
    Negative for hyperbolic orbits.
    """
    mu = G * (mass + primary_mass)
    dx = np.asarray(position, dtype=float) - np.asarray(primary_position, dtype=float)
    dv = np.asarray(velocity, dtype=float) - np.asarray(primary_velocity, dtype=float)
    r = np.linalg.norm(dx)
    v_sq = float(np.dot(dv, dv))
    return 1.0 / (2.0 / r - v_sq / mu)


def mean_motion(G: float, system, index: int, primary_index: int) -> float:
    """Mean motion of body ``index`` about ``primary_index``.
    
    n = sqrt(G (M + m) / |a|^3), carrying the sign of a.
    """
    m = system.masses[index]
    M = system.masses[primary_index]
    a = semi_major_axis(
        G,
        m,
        system.positions[index],
        system.velocities[index],
        M,
        system.positions[primary_index],
        system.velocities[primary_index],
    )
    return float(np.copysign(np.sqrt(G * (M + m) / abs(a) ** 3), a))


def circular_velocity(G: float, central_mass: float, mass: float, a: float) -> float:
    """Relative speed of a circular orbit of radius ``a``."""
    return float(np.sqrt(G * (central_mass + mass) / a))
