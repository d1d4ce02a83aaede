import numpy as np
from .base_metric import BaseMetric


class EnergyConservation(BaseMetric):
    """Metric to measure energy conservation throughout the integration."""

    def __init__(self):
        super().__init__("Energy Conservation")

    @staticmethod
    def relative_error(trajectory):
        """
        Signed energy error relative to the initial energy at each step.

        Args:
            trajectory (dict): Must contain 'energies'

        Returns:
            np.ndarray: Shape (n_steps,) array of relative errors
        """
        energies = np.asarray(trajectory['energies'], dtype=float)
        initial_energy = energies[0]
        if initial_energy == 0.0:
            return energies - initial_energy
        return (energies - initial_energy) / np.abs(initial_energy)

    def compute(self, trajectory):
        """
        Compute relative energy error throughout the trajectory.

        Args:
            trajectory (dict): Dictionary containing trajectory data
                - energies (np.ndarray): Shape (n_steps,) array of energy values

        Returns:
            float: Root mean square of relative energy error
        """
        relative_error = self.relative_error(trajectory)
        return float(np.sqrt(np.mean(relative_error**2)))

    def compute_max(self, trajectory):
        """Largest absolute relative energy error along the trajectory."""
        return float(np.max(np.abs(self.relative_error(trajectory))))

    def compute_drift(self, trajectory):
        """
        Compute energy drift (secular trend) in the trajectory.

        Args:
            trajectory (dict): Dictionary containing trajectory data
                - energies (np.ndarray): Shape (n_steps,) array of energy values
                - times (np.ndarray): Shape (n_steps,) array of time values

        Returns:
            float: Energy drift rate (per unit time)
        """
        times = np.asarray(trajectory['times'], dtype=float)
        relative_error = self.relative_error(trajectory)

        # Fit linear trend to get drift rate
        coeffs = np.polyfit(times, relative_error, 1)
        return float(coeffs[0])  # Return slope
