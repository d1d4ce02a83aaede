import logging
import numbers
from typing import Optional, Tuple

import numpy as np

from simulation import constants
from simulation.bodies import BodyStore
from simulation.config import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 50

CENTRAL_DISPLAY_RADIUS = 1.0


def _display_radius(masses: np.ndarray, central_mass: float) -> np.ndarray:
    # Constant density: radius grows with the cube root of mass
    return CENTRAL_DISPLAY_RADIUS * np.cbrt(masses / central_mass)


def generate_random_cloud(
    count: int = DEFAULT_COUNT,
    seed: Optional[int] = None,
    central_mass: float = 1.0,
    mass_range: Tuple[float, float] = (1e-7, 1e-5),
    inner_radius: float = 5.0,
    outer_radius: float = 40.0,
    thickness: float = 0.5,
    G: float = constants.G
) -> BodyStore:
    """
    Generate a heavy central body surrounded by a disc of light bodies.

    The central body sits at the origin at rest. Every other body is placed
    uniformly (by area) in the annulus inner_radius <= r <= outer_radius of
    the x-y plane, offset by up to thickness / 2 along z, and launched on the
    circular-orbit speed sqrt(G * M / r) perpendicular to its radius vector.

    Args:
        count: Number of orbiting bodies (0 gives just the central body)
        seed: Seed for a private random generator; None for fresh entropy
        central_mass: Mass of the central body
        mass_range: (low, high) bounds of the uniform mass distribution
        inner_radius: Inner edge of the annulus
        outer_radius: Outer edge of the annulus
        thickness: Full vertical extent of the disc
        G: Gravitational constant the run will use
    Returns:
        BodyStore with count + 1 bodies, central body first
    """
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise ConfigurationError(f"random body count must be an integer, got {count!r}")
    if count < 0:
        raise ConfigurationError(f"random body count must not be negative, got {count}")
    low, high = mass_range
    if not 0.0 < low <= high:
        raise ConfigurationError(f"invalid mass range {mass_range!r}")
    if not 0.0 < inner_radius <= outer_radius:
        raise ConfigurationError(
            f"invalid annulus: inner_radius={inner_radius!r}, outer_radius={outer_radius!r}"
        )
    if not central_mass > 0.0 or thickness < 0.0:
        raise ConfigurationError("central_mass must be positive and thickness non-negative")

    rng = np.random.RandomState(seed)

    masses = rng.uniform(low, high, count)

    # Uniform by area: sample r^2 uniformly between the two edges
    r = np.sqrt(rng.uniform(inner_radius ** 2, outer_radius ** 2, count))
    theta = rng.uniform(0.0, 2 * np.pi, count)
    z = rng.uniform(-0.5 * thickness, 0.5 * thickness, count)
    positions = np.column_stack([r * np.cos(theta), r * np.sin(theta), z])

    # Circular orbit speed around the central mass, tangent in the x-y plane
    distance = np.linalg.norm(positions, axis=1)
    speed = np.sqrt(G * central_mass / distance)
    tangent = np.column_stack([-np.sin(theta), np.cos(theta), np.zeros(count)])
    velocities = speed[:, np.newaxis] * tangent

    all_masses = np.concatenate([[central_mass], masses])
    all_positions = np.vstack([np.zeros((1, 3)), positions])
    all_velocities = np.vstack([np.zeros((1, 3)), velocities])
    radii = _display_radius(all_masses, central_mass)

    logger.debug("Built random cloud with %d orbiting bodies (seed=%s)", count, seed)
    return BodyStore.from_arrays(all_masses, all_positions, all_velocities, radii)
