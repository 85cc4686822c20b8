"""NumPy backend implementation."""

from typing import Any, Tuple, Union
import numpy as np
from tidal_sim.backends.base import Backend


class NumPyBackend(Backend):
    """NumPy-based backend (baseline, always available)."""
    
    @property
    def name(self) -> str:
        return "numpy"
    
    def array(self, data: Any, dtype=None) -> np.ndarray:
        return np.array(data, dtype=dtype or np.float64)
    
    def zeros(self, shape: Tuple[int, ...], dtype=None) -> np.ndarray:
        return np.zeros(shape, dtype=dtype or np.float64)
    
    def zeros_like(self, array: Any) -> np.ndarray:
        return np.zeros_like(array, dtype=np.float64)
    
    def sum(self, array: Any, axis: Union[int, Tuple[int, ...]] = None, keepdims: bool = False) -> np.ndarray:
        return np.sum(array, axis=axis, keepdims=keepdims)
    
    def sqrt(self, array: Any) -> np.ndarray:
        return np.sqrt(array)
    
    def square(self, array: Any) -> np.ndarray:
        return np.square(array)
    
    def power(self, base: Any, exponent: Any) -> np.ndarray:
        return np.power(base, exponent)
    
    def cross(self, a: Any, b: Any) -> np.ndarray:
        return np.cross(a, b)
    
    def where(self, condition: Any, x: Any, y: Any) -> np.ndarray:
        return np.where(condition, x, y)

    def reshape(self, array: Any, newshape: Tuple[int, ...]) -> np.ndarray:
        return np.reshape(array, newshape)

    def expand_dims(self, array: Any, axis: int) -> np.ndarray:
        return np.expand_dims(array, axis=axis)

    def eye(self, n: int, dtype=None) -> np.ndarray:
        return np.eye(n, dtype=dtype or np.float64)

    def to_numpy(self, array: Any) -> np.ndarray:
        return np.asarray(array)
