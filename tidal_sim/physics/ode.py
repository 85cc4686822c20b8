"""Auxiliary ODEs integrated alongside the orbits."""

from typing import Any, Callable, Optional
import numpy as np


class ODE:
    """A flat state vector with the callbacks an ODE integrator invokes.
    
    Callback signatures:
        derivatives(ode, y_dot, y, t): write dy/dt into ``y_dot``
        pre_timestep(ode, y0): called before each integration step
        post_timestep(ode, y0): called after each integration step
    
    ``ref`` is an opaque back-reference for the callbacks.
    """
    
    def __init__(
        self,
        length: int,
        derivatives: Optional[Callable] = None,
        pre_timestep: Optional[Callable] = None,
        post_timestep: Optional[Callable] = None,
        ref: Any = None,
    ):
        if length < 0:
            raise ValueError(f"ODE length must be non-negative, got {length}")
        self.length = length
        self.y = np.zeros(length)
        self.derivatives = derivatives
        self.pre_timestep = pre_timestep
        self.post_timestep = post_timestep
        self.ref = ref
    
    def evaluate(self, y: np.ndarray, t: float) -> np.ndarray:
        """Return dy/dt at (y, t) in a fresh array."""
        y_dot = np.zeros(self.length)
        if self.derivatives is not None:
            self.derivatives(self, y_dot, y, t)
        return y_dot
