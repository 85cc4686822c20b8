"""Runge-Kutta 4th order integrator for auxiliary ODEs (O(h⁴))."""

import numpy as np
from tidal_sim.physics.ode import ODE


class RK4Integrator:
    """Classic 4-stage Runge-Kutta for an ``ODE`` state vector.
    
    k1 = f(t, y)
    k2 = f(t + dt/2, y + k1*dt/2)
    k3 = f(t + dt/2, y + k2*dt/2)
    k4 = f(t + dt, y + k3*dt)
    y_new = y + (k1 + 2*k2 + 2*k3 + k4)*dt/6
    
    The derivative callback sees the host particles frozen at time t.
    """
    
    @property
    def name(self) -> str:
        return "rk4"
    
    @property
    def order(self) -> int:
        return 4
    
    def integrate(self, ode: ODE, t: float, dt: float) -> np.ndarray:
        """Advance ``ode.y`` by one step of size ``dt`` in place.
        
        Returns:
            The updated state vector
        """
        y = np.array(ode.y, dtype=float)
        k1 = ode.evaluate(y, t)
        k2 = ode.evaluate(y + k1 * (dt / 2), t + dt / 2)
        k3 = ode.evaluate(y + k2 * (dt / 2), t + dt / 2)
        k4 = ode.evaluate(y + k3 * dt, t + dt)
        ode.y[:] = y + (k1 + 2 * k2 + 2 * k3 + k4) * (dt / 6)
        return ode.y
