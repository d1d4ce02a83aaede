import numpy as np
import pytest

from simulation.bodies import BodyStore


@pytest.fixture
def two_body_store():
    """Circular orbit of a light body around a unit mass, G = 1, r = 1."""
    M, m, r = 1.0, 1e-3, 1.0
    relative_speed = np.sqrt((M + m) / r)
    v_light = relative_speed * M / (M + m)
    v_heavy = -m * v_light / M
    return BodyStore.from_arrays(
        masses=[M, m],
        positions=[[0.0, 0.0, 0.0], [r, 0.0, 0.0]],
        velocities=[[0.0, v_heavy, 0.0], [0.0, v_light, 0.0]],
    )
