import logging
from typing import Optional

import numpy as np

from simulation import constants
from simulation.bodies import BodyStore

logger = logging.getLogger(__name__)

# Period of the orbit in units where G * m = 1
FIGURE8_PERIOD = 6.32591398

FIGURE8_DISPLAY_RADIUS = 0.1


def generate_figure_eight(mass: Optional[float] = None, G: float = constants.G) -> BodyStore:
    """
    Generate initial conditions for the figure-eight solution to the
    three-body problem, discovered by Moore in 1993 and proven to exist by
    Chenciner and Montgomery in 2000.

    Three equal masses chase each other around a single figure-eight curve.
    The published constants hold for G * m = 1, so by default every body
    gets mass 1 / G and the orbit closes after FIGURE8_PERIOD time units.

    Args:
        mass: Mass of each body; 1 / G when omitted
        G: Gravitational constant the run will use
    Returns:
        BodyStore with three bodies
    """
    if mass is None:
        mass = 1.0 / G
    masses = np.full(3, float(mass))

    # x1 = -x2 = (0.97000436, -0.24308753), x3 = 0
    positions = np.array([
        [0.97000436, -0.24308753, 0.0],
        [-0.97000436, 0.24308753, 0.0],
        [0.0, 0.0, 0.0]
    ])

    # v3 = -2 v1 = -2 v2 = (-0.93240737, -0.86473146)
    velocities = np.array([
        [0.466203685, 0.43236573, 0.0],
        [0.466203685, 0.43236573, 0.0],
        [-0.93240737, -0.86473146, 0.0]
    ])

    # The constants assume G * m = 1; rescale velocities for any other mass
    velocities *= np.sqrt(G * mass)

    radii = np.full(3, FIGURE8_DISPLAY_RADIUS)
    logger.debug("Built figure-eight configuration with body mass %g", mass)
    return BodyStore.from_arrays(masses, positions, velocities, radii)
