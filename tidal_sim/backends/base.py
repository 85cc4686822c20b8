"""Abstract base class for compute backends."""

from abc import ABC, abstractmethod
from typing import Any, Tuple, Union
import numpy as np


class Backend(ABC):
    """Abstract interface for array computation backends.
    
    The force, derivative and potential code only talks to arrays through
    this interface, so the same physics runs on any backend that
    implements it.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of this backend, recorded with saved runs."""
        pass
    
    @abstractmethod
    def array(self, data: Any, dtype=None) -> Any:
        """Create an array from data.
        
        Args:
            data: Input data (list, numpy array, etc.)
            dtype: Optional data type
            
        Returns:
            Backend array object
        """
        pass
    
    @abstractmethod
    def zeros(self, shape: Tuple[int, ...], dtype=None) -> Any:
        """Create an array of zeros.
        
        Args:
            shape: Array shape
            dtype: Optional data type
            
        Returns:
            Zero-filled array
        """
        pass
    
    @abstractmethod
    def zeros_like(self, array: Any) -> Any:
        """Create an array of zeros with same shape as input."""
        pass
    
    @abstractmethod
    def sum(self, array: Any, axis: Union[int, Tuple[int, ...]] = None, keepdims: bool = False) -> Any:
        """Sum array elements along axis."""
        pass
    
    @abstractmethod
    def sqrt(self, array: Any) -> Any:
        """Compute square root."""
        pass
    
    @abstractmethod
    def square(self, array: Any) -> Any:
        """Compute square."""
        pass
    
    @abstractmethod
    def power(self, base: Any, exponent: Any) -> Any:
        """Element-wise power."""
        pass
    
    @abstractmethod
    def cross(self, a: Any, b: Any) -> Any:
        """Cross product of 3-vectors along the last axis."""
        pass
    
    @abstractmethod
    def where(self, condition: Any, x: Any, y: Any) -> Any:
        """Conditional selection."""
        pass

    @abstractmethod
    def reshape(self, array: Any, newshape: Tuple[int, ...]) -> Any:
        """Reshape array to newshape (for broadcasting, etc.)."""
        pass

    @abstractmethod
    def expand_dims(self, array: Any, axis: int) -> Any:
        """Expand the shape by inserting a new axis at axis (e.g. (n,) -> (n, 1))."""
        pass

    @abstractmethod
    def eye(self, n: int, dtype=None) -> Any:
        """Identity matrix (n, n), for masking diagonal."""
        pass

    @abstractmethod
    def to_numpy(self, array: Any) -> np.ndarray:
        """Convert backend array to NumPy array.
        
        Needed at the I/O and plotting boundaries and wherever the host
        writes into its own NumPy-owned buffers.
        """
        pass
