"""Exception and warning types raised by tidal_sim."""


class TidalSimError(Exception):
    """Base class for errors raised by tidal_sim."""


class SpinStateMismatchError(TidalSimError, RuntimeError):
    """The set of spin-tracked bodies no longer matches the spin ODE.
    
    The tracked bodies are fixed when the spin ODE is created. Adding or
    removing k2/moi/spin parameters afterwards leaves the ODE state vector
    with the wrong layout, and the run cannot continue.
    """


class TidalConfigurationWarning(UserWarning):
    """A body is missing a parameter needed for a derived quantity."""


class SpinEvolutionWarning(UserWarning):
    """Tidal forces are applied but spins are not being evolved."""
