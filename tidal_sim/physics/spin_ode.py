"""Spin-vector evolution: derivative function and state synchronization.

The spin state vector holds (sx, sy, sz) of every tracked body, in the
order given by a ``SpinLayout``. The synchronizer copies between that
vector and the bodies' spin parameters around each ODE step; the
derivative function evaluates the tidal torque on each tracked spin.
"""

from typing import Optional
import numpy as np

from tidal_sim.backends.base import Backend
from tidal_sim.backends.numpy_backend import NumPyBackend
from tidal_sim.physics.parameters import SPIN_KEYS
from tidal_sim.physics.structure import BodyStructure, SpinLayout, resolve_structure
from tidal_sim.physics.tidal_force import (
    target_indices,
    source_state,
    spin_orbit_force,
    target_state,
)

_DEFAULT_BACKEND = NumPyBackend()


def spin_derivatives(
    system,
    layout: SpinLayout,
    y_dot: np.ndarray,
    y: np.ndarray,
    G: float,
    structure: Optional[BodyStructure] = None,
    backend: Optional[Backend] = None,
):
    """Write dOmega/dt of every tracked body into ``y_dot``.
    
    dOmega_i/dt = -(mu_ij / moi_i) * sum_j (x_i - x_j) x F_ij
    
    where F_ij is the spin/tidal force with i as source and spin Omega_i
    taken from ``y``.
    
    Raises:
        SpinStateMismatchError: If the tracked bodies changed since the
            layout was created.
    """
    backend = backend or _DEFAULT_BACKEND
    if structure is None:
        structure = resolve_structure(system)
    layout.validate(structure, len(y_dot))
    
    masses = structure.masses
    for i, offset in layout.slots():
        spin = y[offset:offset + 3]
        y_dot[offset:offset + 3] = 0.0
        if masses[i] == 0.0:
            continue
        targets = target_indices(masses, i)
        if targets.size == 0:
            continue
        force = backend.to_numpy(spin_orbit_force(
            source_state(system, structure, i),
            target_state(system, structure, targets),
            G,
            structure.k2[i],
            structure.sigma[i],
            spin,
            backend,
        ))
        separation = system.positions[i] - system.positions[targets]
        mu = masses[i] * masses[targets] / (masses[i] + masses[targets])
        torque = np.cross(separation, force) * (-mu / structure.moi[i])[:, np.newaxis]
        y_dot[offset:offset + 3] = np.sum(torque, axis=0)


def sync_spins_to_state(system, layout: SpinLayout, y: np.ndarray):
    """Copy each tracked body's spin parameters into its slots of ``y``.
    
    Raises:
        SpinStateMismatchError: On layout or length mismatch.
    """
    layout.validate(resolve_structure(system), len(y))
    for i, offset in layout.slots():
        for k, key in enumerate(SPIN_KEYS):
            y[offset + k] = system.params.get(i, key)


def sync_state_to_spins(system, layout: SpinLayout, y: np.ndarray):
    """Copy the evolved slots of ``y`` back into the bodies' spin parameters.
    
    Raises:
        SpinStateMismatchError: On layout or length mismatch.
    """
    layout.validate(resolve_structure(system), len(y))
    for i, offset in layout.slots():
        for k, key in enumerate(SPIN_KEYS):
            system.params.set(i, key, y[offset + k])
