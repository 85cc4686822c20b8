"""Spin/tidal force law between bodies with structure.

Constant time-lag tides in the Eggleton, Kiseleva & Hut (1998) framework.
The structured ("source") body is distorted by its own spin and by the
tide raised by the "target"; the force below is the resulting interaction
force per unit reduced mass, along the separation d = x_source - x_target.
"""

from typing import Any, NamedTuple, Optional
import numpy as np

from tidal_sim.backends.base import Backend
from tidal_sim.backends.numpy_backend import NumPyBackend
from tidal_sim.physics.structure import BodyStructure

_DEFAULT_BACKEND = NumPyBackend()


class BodyState(NamedTuple):
    """Mass, position, velocity and radius of one body or a batch of bodies.

    For a batch, ``mass`` has shape (n,) and ``position``/``velocity`` have
    shape (n, 3).
    """
    mass: Any
    position: Any
    velocity: Any
    radius: Any = 0.0


def spin_orbit_force(
    source: BodyState,
    target: BodyState,
    G: float,
    k2: float,
    sigma: float,
    spin: Any,
    backend: Optional[Backend] = None,
) -> Any:
    """Force between a structured source and a target.

    Args:
        source: Structured body raising the distortion (single body)
        target: Body raising tides on the source (single body or batch)
        G: Gravitational constant
        k2: Potential Love number of degree 2 of the source
        sigma: Tidal dissipation parameter of the source (0 disables the lag term)
        spin: Spin vector of the source, shape (3,)
        backend: Compute backend (NumPy if None)

    Returns:
        Force vector(s), shape (3,) or (n, 3). Zero when k2 == 0.

    Masses must be nonzero and the bodies must not coincide; the caller
    skips such pairs.
    """
    backend = backend or _DEFAULT_BACKEND
    ms = source.mass
    rs = source.radius
    mt = backend.array(target.mass)
    spin = backend.array(spin)

    d = backend.array(source.position) - backend.array(target.position)
    if k2 == 0.0:
        return backend.zeros_like(d)
    dv = backend.array(source.velocity) - backend.array(target.velocity)

    mu = ms * mt / (ms + mt)
    big_a = k2 * rs ** 5
    d2 = backend.sum(backend.square(d), axis=-1)
    dr = backend.sqrt(d2)

    quad_prefactor = mt * big_a / mu
    omega_dot_d = backend.sum(d * spin, axis=-1)
    omega_squared = backend.sum(backend.square(spin))

    t1 = 5.0 * backend.square(omega_dot_d) / (2.0 * backend.power(dr, 7))
    t2 = omega_squared / (2.0 * backend.power(dr, 5))
    t3 = omega_dot_d / backend.power(dr, 5)
    t4 = 6.0 * G * mt / backend.power(dr, 8)

    radial = backend.expand_dims(t1 - t2 - t4, -1) * d
    axial = backend.expand_dims(t3, -1) * spin
    force = backend.expand_dims(quad_prefactor, -1) * (radial - axial)

    if sigma != 0.0:
        d_dot_vel = backend.sum(d * dv, axis=-1)
        vec1 = 3.0 * backend.expand_dims(d_dot_vel, -1) * d
        h = backend.cross(d, dv)
        vec2 = backend.cross(h - backend.expand_dims(d2, -1) * spin, d)
        prefactor = (-9.0 * sigma * backend.square(mt) * big_a ** 2) / (2.0 * mu * backend.power(d2, 5))
        force = force + backend.expand_dims(prefactor, -1) * (vec1 + vec2)

    return force


def target_indices(masses: np.ndarray, source: int) -> np.ndarray:
    """Bodies other than ``source`` with nonzero mass."""
    mask = masses != 0.0
    mask[source] = False
    return np.flatnonzero(mask)


def source_state(system, structure: BodyStructure, i: int) -> BodyState:
    return BodyState(
        mass=float(structure.masses[i]),
        position=system.positions[i],
        velocity=system.velocities[i],
        radius=float(structure.radii[i]),
    )


def target_state(system, structure: BodyStructure, indices: np.ndarray) -> BodyState:
    return BodyState(
        mass=structure.masses[indices],
        position=system.positions[indices],
        velocity=system.velocities[indices],
        radius=structure.radii[indices],
    )


def accumulate_tidal_accelerations(
    system,
    structure: BodyStructure,
    accelerations: np.ndarray,
    G: float,
    backend: Optional[Backend] = None,
):
    """Add spin/tidal accelerations of all source-target pairs into a buffer.

    Each pair force F is split by mass ratio so that momentum is conserved:
    the target gets -(m_s/M) F, the source +(m_t/M) F.

    Args:
        system: NBodySystem providing positions and velocities
        structure: Resolved structure of the real bodies
        accelerations: (n, 3) buffer, modified in place
        G: Gravitational constant
        backend: Compute backend
    """
    backend = backend or _DEFAULT_BACKEND
    masses = structure.masses
    for i in structure.force_sources:
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
            structure.spin[i],
            backend,
        ))
        m_total = masses[i] + masses[targets]
        target_share = (masses[i] / m_total)[:, np.newaxis]
        source_share = (masses[targets] / m_total)[:, np.newaxis]
        accelerations[targets] -= target_share * force
        accelerations[i] += np.sum(source_share * force, axis=0)
