import numpy as np
from abc import ABC, abstractmethod
from typing import Tuple

from simulation import constants
from simulation.config import ConfigurationError


class BaseIntegrator(ABC):
    """
    Base class for the fixed-step N-body integrators.

    Forces are summed directly over every pair of bodies (O(N^2) per step)
    with Plummer softening, so two coincident bodies exert no force on each
    other and no acceleration is ever infinite.
    """

    name = "base"

    def __init__(self, G: float = constants.G, softening: float = constants.SOFTENING):
        """
        Initialize the integrator.

        Args:
            G: Gravitational constant (default: simulation units, see simulation.constants)
            softening: Softening length added in quadrature to every separation
        """
        if not G > 0.0:
            raise ConfigurationError(f"G must be positive, got {G!r}")
        if not softening > 0.0:
            raise ConfigurationError(f"softening must be positive, got {softening!r}")
        self.G = G
        self.softening = softening

    @abstractmethod
    def step(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray,
        dt: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perform one integration step (to be implemented by subclasses).

        Implementations return new arrays and leave the inputs untouched.

        Args:
            positions: (n_bodies, 3) array of positions
            velocities: (n_bodies, 3) array of velocities
            masses: (n_bodies,) array of masses
            dt: Time step
        Returns:
            Updated (positions, velocities)
        """
        pass

    def compute_acceleration(
        self,
        positions: np.ndarray,
        masses: np.ndarray
    ) -> np.ndarray:
        """
        Compute gravitational accelerations for all bodies, with softening.

        a_i = sum_j G m_j (r_j - r_i) / (|r_j - r_i|^2 + eps^2)^(3/2)

        The i == j terms vanish because their separation vector is zero.

        Args:
            positions: (n_bodies, 3) array of positions
            masses: (n_bodies,) array of masses
        Returns:
            (n_bodies, 3) array of accelerations
        """
        # separations[i, j] = r_j - r_i
        separations = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        dist_sq = np.sum(separations ** 2, axis=2) + self.softening ** 2
        inv_r_cubed = dist_sq ** -1.5
        weights = self.G * masses[np.newaxis, :] * inv_r_cubed
        return np.einsum("ij,ijk->ik", weights, separations)

    def compute_potential_energy(self, positions: np.ndarray, masses: np.ndarray) -> float:
        """Softened pairwise potential energy, consistent with compute_acceleration."""
        n_bodies = positions.shape[0]
        if n_bodies < 2:
            return 0.0
        separations = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r_softened = np.sqrt(np.sum(separations ** 2, axis=2) + self.softening ** 2)
        i, j = np.triu_indices(n_bodies, k=1)
        return float(-np.sum(self.G * masses[i] * masses[j] / r_softened[i, j]))

    def compute_energy(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray
    ) -> float:
        """
        Compute total energy (kinetic + potential) of the system, with softening.

        Args:
            positions: (n_bodies, 3) array of positions
            velocities: (n_bodies, 3) array of velocities
            masses: (n_bodies,) array of masses
        Returns:
            Total energy of the system
        """
        kinetic = 0.5 * np.sum(masses[:, np.newaxis] * velocities ** 2)
        return float(kinetic) + self.compute_potential_energy(positions, masses)

    def compute_momentum(self, velocities: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Total linear momentum, (3,) array."""
        return np.sum(masses[:, np.newaxis] * velocities, axis=0)

    def compute_angular_momentum(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray
    ) -> np.ndarray:
        """
        Compute total angular momentum of the system.

        Args:
            positions: (n_bodies, 3) array of positions
            velocities: (n_bodies, 3) array of velocities
            masses: (n_bodies,) array of masses
        Returns:
            (3,) array of angular momentum vector
        """
        return np.sum(masses[:, np.newaxis] * np.cross(positions, velocities), axis=0)
