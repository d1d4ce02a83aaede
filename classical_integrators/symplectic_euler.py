import numpy as np
from .base_integrator import BaseIntegrator
from typing import Tuple


class SymplecticEuler(BaseIntegrator):
    """
    Semi-implicit (symplectic) Euler integrator.

    The velocity is kicked with the current acceleration first and the
    position then drifts with the *new* velocity. Unlike explicit Euler this
    keeps the energy error of bound orbits bounded instead of growing every
    orbit. One force evaluation per step.
    """

    name = "symplectic_euler"

    def step(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray,
        dt: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perform one kick-drift step.

        Args:
            positions: (n_bodies, 3) array of positions
            velocities: (n_bodies, 3) array of velocities
            masses: (n_bodies,) array of masses
            dt: Time step
        Returns:
            Updated (positions, velocities)
        """
        accelerations = self.compute_acceleration(positions, masses)
        # Kick
        new_velocities = velocities + accelerations * dt
        # Drift
        new_positions = positions + new_velocities * dt
        return new_positions, new_velocities
