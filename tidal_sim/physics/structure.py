"""Per-body structure resolved from the parameter store.

Bodies carry optional parameters in a string-keyed store. The tidal code
resolves them once per evaluation into dense arrays with presence masks, so
the pairwise loops never look up keys.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from tidal_sim.exceptions import SpinStateMismatchError
from tidal_sim.physics.parameters import SPIN_KEYS


@dataclass
class BodyStructure:
    """Structure parameters of the real bodies of a system.
    
    Absent values are stored as 0.0 and flagged in the ``has_*`` masks.
    """
    masses: np.ndarray
    radii: np.ndarray
    k2: np.ndarray
    has_k2: np.ndarray
    sigma: np.ndarray
    has_sigma: np.ndarray
    moi: np.ndarray
    has_moi: np.ndarray
    spin: np.ndarray
    has_spin: np.ndarray
    
    @property
    def n_bodies(self) -> int:
        return self.masses.shape[0]
    
    @property
    def force_sources(self) -> np.ndarray:
        """Indices of bodies that raise spin/tidal forces (k2 and full spin)."""
        return np.flatnonzero(self.has_k2 & self.has_spin)
    
    @property
    def spin_tracked(self) -> np.ndarray:
        """Indices of bodies whose spin evolves (k2, moi and full spin)."""
        return np.flatnonzero(self.has_k2 & self.has_moi & self.has_spin)
    
    @property
    def potential_sources(self) -> np.ndarray:
        """Indices of bodies contributing to the conservative tidal potential."""
        mask = self.has_k2 & self.has_sigma & (self.radii != 0.0) & (self.masses != 0.0)
        return np.flatnonzero(mask)
    
    @property
    def untracked_spinning(self) -> np.ndarray:
        """Bodies with moi and spin but no k2; their spin cannot evolve."""
        return np.flatnonzero(self.has_moi & self.has_spin & ~self.has_k2)


def resolve_structure(system) -> BodyStructure:
    """Read the structure parameters of the system's real bodies."""
    n = system.n_real
    store = system.params
    k2 = np.zeros(n)
    has_k2 = np.zeros(n, dtype=bool)
    sigma = np.zeros(n)
    has_sigma = np.zeros(n, dtype=bool)
    moi = np.zeros(n)
    has_moi = np.zeros(n, dtype=bool)
    spin = np.zeros((n, 3))
    has_spin = np.zeros(n, dtype=bool)
    
    for i in range(n):
        value = store.get(i, "k2")
        if value is not None:
            k2[i] = value
            has_k2[i] = True
        value = store.get(i, "sigma")
        if value is not None:
            sigma[i] = value
            has_sigma[i] = True
        value = store.get(i, "moi")
        if value is not None:
            moi[i] = value
            has_moi[i] = True
        if store.has_all(i, SPIN_KEYS):
            spin[i] = [store.get(i, key) for key in SPIN_KEYS]
            has_spin[i] = True
    
    return BodyStructure(
        masses=np.asarray(system.masses[:n], dtype=float),
        radii=np.asarray(system.radii[:n], dtype=float),
        k2=k2,
        has_k2=has_k2,
        sigma=sigma,
        has_sigma=has_sigma,
        moi=moi,
        has_moi=has_moi,
        spin=spin,
        has_spin=has_spin,
    )


@dataclass(frozen=True)
class SpinLayout:
    """Slot assignment of tracked bodies in the flat spin state vector.
    
    Body ``body_indices[k]`` owns slots ``3*k .. 3*k+2``. The layout is
    computed once when the spin ODE is created and shared by the
    synchronizer and the derivative function.
    """
    body_indices: Tuple[int, ...]
    
    @classmethod
    def from_structure(cls, structure: BodyStructure) -> "SpinLayout":
        return cls(tuple(int(i) for i in structure.spin_tracked))
    
    @property
    def n_tracked(self) -> int:
        return len(self.body_indices)
    
    @property
    def length(self) -> int:
        """Required length of the spin state vector."""
        return 3 * self.n_tracked
    
    def slots(self):
        """Iterate over (body_index, offset) pairs in state-vector order."""
        for k, index in enumerate(self.body_indices):
            yield index, 3 * k
    
    def validate(self, structure: BodyStructure, ode_length: int):
        """Check that the layout still describes the system.
        
        Raises:
            SpinStateMismatchError: If the ODE length or the set of tracked
                bodies changed after the layout was created.
        """
        current = tuple(int(i) for i in structure.spin_tracked)
        if ode_length != 3 * len(current) or current != self.body_indices:
            raise SpinStateMismatchError(
                f"Spin ODE is not of the expected length: ODE has {ode_length} entries, "
                f"{len(current)} spin-tracked bodies {list(current)} need {3 * len(current)} "
                f"(layout was created for bodies {list(self.body_indices)})"
            )
