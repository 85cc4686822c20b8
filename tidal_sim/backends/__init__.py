"""Compute backend abstractions for tidal simulations."""

from tidal_sim.backends.base import Backend
from tidal_sim.backends.factory import get_backend, list_available_backends

__all__ = ["Backend", "get_backend", "list_available_backends"]
