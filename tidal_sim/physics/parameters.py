"""Per-body key/value parameter store."""

from typing import Dict, Iterable, List, Optional

# Parameter names read by the tides/spin effect. The radius is host-owned.
TIDAL_PARAMETERS = ("k2", "sigma", "moi", "sx", "sy", "sz")
SPIN_KEYS = ("sx", "sy", "sz")


class ParameterStore:
    """Optional named scalar parameters attached to each body.
    
    Presence of a key is meaningful on its own: a body with no ``k2`` is a
    point mass, a body with ``k2`` but no ``sigma`` has no dissipation.
    """
    
    def __init__(self, n_bodies: int = 0):
        self._params: List[Dict[str, float]] = [{} for _ in range(n_bodies)]
    
    def __len__(self) -> int:
        return len(self._params)
    
    def append(self, params: Optional[Dict[str, float]] = None):
        """Add a slot for a new body, optionally pre-filled."""
        self._params.append({})
        if params:
            for key, value in params.items():
                self.set(len(self._params) - 1, key, value)
    
    def get(self, index: int, key: str) -> Optional[float]:
        """Return the parameter value, or None when it is not set."""
        return self._params[index].get(key)
    
    def has(self, index: int, key: str) -> bool:
        return key in self._params[index]
    
    def has_all(self, index: int, keys: Iterable[str]) -> bool:
        params = self._params[index]
        return all(key in params for key in keys)
    
    def set(self, index: int, key: str, value: float):
        """Create or update a parameter."""
        self._params[index][key] = float(value)
    
    def remove(self, index: int, key: str):
        """Remove a parameter if present."""
        self._params[index].pop(key, None)
    
    def as_dicts(self) -> List[Dict[str, float]]:
        """Return a copy of all parameters, one dict per body."""
        return [dict(p) for p in self._params]
    
    @classmethod
    def from_dicts(cls, dicts: Iterable[Dict[str, float]]) -> "ParameterStore":
        store = cls()
        for params in dicts:
            store.append(params)
        return store
