import numpy as np
from .base_metric import BaseMetric


class MomentumConservation(BaseMetric):
    """Largest change in total linear momentum over a trajectory."""

    def __init__(self):
        super().__init__("Momentum Conservation")

    def compute(self, trajectory):
        """
        Args:
            trajectory (dict): Dictionary containing trajectory data
                - velocities (np.ndarray): Shape (n_steps, n_bodies, 3)
                - masses (np.ndarray): Shape (n_bodies,)

        Returns:
            float: max_t |P(t) - P(0)|
        """
        velocities = np.asarray(trajectory['velocities'], dtype=float)
        masses = np.asarray(trajectory['masses'], dtype=float)
        momentum = np.sum(velocities * masses[np.newaxis, :, np.newaxis], axis=1)
        return float(np.max(np.linalg.norm(momentum - momentum[0], axis=1)))
