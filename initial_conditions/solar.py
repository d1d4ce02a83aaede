import logging

import numpy as np

from simulation import constants
from simulation.bodies import BodyStore

logger = logging.getLogger(__name__)

# Heliocentric ecliptic state vectors at J2000 (2000-01-01 12:00 TDB),
# JPL Horizons. Columns: mass (M_sun), radius (km), position (AU),
# velocity (AU/day). The Sun is pinned to the origin; its velocity is
# derived so that the total momentum vanishes.
SOLAR_SYSTEM_TABLE = {
    "Sun": (
        1.0, 695700.0,
        (0.0, 0.0, 0.0),
        (0.0, 0.0, 0.0),
    ),
    "Mercury": (
        1.6601e-7, 2439.7,
        (-0.1300934, -0.4472876, -0.0245983),
        (0.0213663, -0.0064534, -0.0025018),
    ),
    "Venus": (
        2.4478e-6, 6051.8,
        (-0.7183022, -0.0326434, 0.0410207),
        (0.0007636, -0.0203179, -0.0003233),
    ),
    "Earth": (
        3.0035e-6, 6371.0,
        (-0.1771355, 0.9672465, -0.0000039),
        (-0.0172076, -0.0031545, 0.0000000),
    ),
    "Mars": (
        3.2272e-7, 3389.5,
        (1.3907159, -0.0134193, -0.0344652),
        (0.0007484, 0.0151828, 0.0003000),
    ),
    "Jupiter": (
        9.5479e-4, 69911.0,
        (4.0011734, 2.9385810, -0.1017846),
        (-0.0045634, 0.0064440, 0.0000752),
    ),
    "Saturn": (
        2.8589e-4, 58232.0,
        (6.4064061, 6.5699933, -0.3690675),
        (-0.0042930, 0.0038904, 0.0001036),
    ),
    "Uranus": (
        4.3662e-5, 25362.0,
        (14.4318986, -13.7343580, -0.2381849),
        (0.0026787, 0.0026668, -0.0000250),
    ),
    "Neptune": (
        5.1514e-5, 24622.0,
        (16.8121162, -24.9916616, 0.1272189),
        (0.0025793, 0.0017768, -0.0000960),
    ),
    "Pluto": (
        6.55e-9, 1188.3,
        (-9.8753278, -27.9789909, 5.8504045),
        (0.0030338, -0.0015377, -0.0007209),
    ),
}

BODY_NAMES = tuple(SOLAR_SYSTEM_TABLE)


def generate_solar_system() -> BodyStore:
    """
    Generate initial conditions for the Sun, the eight planets and Pluto.

    Table values are converted to simulation units: positions and velocities
    are scaled from AU to tenths of an AU and radii from km to display units.
    The Sun keeps a fixed display radius instead of its true one.

    Returns:
        BodyStore with bodies in BODY_NAMES order
    """
    masses = np.array([SOLAR_SYSTEM_TABLE[name][0] for name in BODY_NAMES])
    radii = np.array([SOLAR_SYSTEM_TABLE[name][1] for name in BODY_NAMES]) * constants.RADIUS_SCALE
    positions = np.array([SOLAR_SYSTEM_TABLE[name][2] for name in BODY_NAMES]) * constants.DISTANCE_UNITS_PER_AU
    velocities = np.array([SOLAR_SYSTEM_TABLE[name][3] for name in BODY_NAMES]) * constants.DISTANCE_UNITS_PER_AU

    radii[0] = constants.SUN_DISPLAY_RADIUS

    # Adjust Sun's velocity to conserve linear momentum
    # p_total = sum(m_i * v_i) = 0
    velocities[0] = -np.sum(masses[1:, np.newaxis] * velocities[1:], axis=0) / masses[0]

    logger.debug("Built solar system with %d bodies", len(masses))
    return BodyStore.from_arrays(masses, positions, velocities, radii, names=BODY_NAMES)
