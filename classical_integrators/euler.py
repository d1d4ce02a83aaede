import numpy as np
from .base_integrator import BaseIntegrator
from typing import Tuple


class Euler(BaseIntegrator):
    """
    Explicit (forward) Euler integrator.

    Positions advance with the velocity from the *start* of the step. Bound
    orbits gain energy every period, so this is only used as a reference when
    measuring the energy drift of SymplecticEuler.
    """

    name = "euler"

    def step(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray,
        dt: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perform one Euler integration step.

        Args:
            positions: (n_bodies, 3) array of positions
            velocities: (n_bodies, 3) array of velocities
            masses: (n_bodies,) array of masses
            dt: Time step
        Returns:
            Updated (positions, velocities)
        """
        accelerations = self.compute_acceleration(positions, masses)
        new_positions = positions + velocities * dt
        new_velocities = velocities + accelerations * dt
        return new_positions, new_velocities
