"""Derive the tidal dissipation parameter sigma from observables."""

import warnings

from tidal_sim.exceptions import TidalConfigurationWarning
from tidal_sim.physics.orbit import mean_motion


def _love_number_and_radius(system, index: int, quantity: str):
    k2 = system.params.get(index, "k2")
    r = float(system.radii[index])
    if k2 is None or r == 0.0:
        warnings.warn(
            f"Could not calculate {quantity} because Love number and/or physical radius "
            f"was not set for particle {index}",
            TidalConfigurationWarning,
            stacklevel=3,
        )
        return None, r
    return k2, r


def sigma_from_tau(system, index: int, tau: float, G: float) -> float:
    """Dissipation parameter from a constant tidal time lag.
    
    sigma = 4 * tau * G / (3 * R^5 * k2)
    
    Args:
        system: NBodySystem holding the body
        index: Body index
        tau: Constant time lag
        G: Gravitational constant
        
    Returns:
        sigma, or 0.0 (with a TidalConfigurationWarning) if k2 or the
        radius is missing
    """
    k2, r = _love_number_and_radius(system, index, "sigma from tau")
    if k2 is None:
        return 0.0
    return 4.0 * tau * G / (3.0 * r ** 5 * k2)


def sigma_from_q(system, index: int, primary_index: int, Q: float, G: float) -> float:
    """Dissipation parameter from a tidal quality factor.
    
    sigma = 2 * G / (3 * Q * R^5 * k2 * n), with n the mean motion of the
    body's orbit about ``primary_index``.
    
    Returns:
        sigma, or 0.0 (with a TidalConfigurationWarning) if k2 or the
        radius is missing
    """
    k2, r = _love_number_and_radius(system, index, "sigma from Q")
    if k2 is None:
        return 0.0
    n = mean_motion(G, system, index, primary_index)
    return 2.0 * G / (3.0 * Q * r ** 5 * k2 * n)
