import numpy as np
import pytest

from simulation.bodies import BodyStore
from simulation.config import ConfigurationError


def make_store():
    return BodyStore.from_arrays(
        masses=[2.0, 1.0],
        positions=[[0.0, 0.0, 0.0], [3.0, 0.0, 0.0]],
        velocities=[[0.0, -0.5, 0.0], [0.0, 1.0, 0.0]],
        radii=[0.2, 0.1],
        names=["A", "B"],
    )


def test_from_arrays_builds_expected_shapes():
    store = make_store()
    assert len(store) == 2
    assert store.positions.shape == (2, 3)
    assert store.velocities.shape == (2, 3)
    assert store.masses.shape == (2,)


def test_body_view_is_a_copy():
    store = make_store()
    body = store.body(1)
    assert body.name == "B"
    assert body.mass == 1.0
    body.position[0] = 99.0
    assert store.positions[1, 0] == 3.0


def test_iteration_and_lookup_by_name():
    store = make_store()
    assert [b.name for b in store] == ["A", "B"]
    assert store.index_of("B") == 1
    with pytest.raises(KeyError):
        store.index_of("C")


@pytest.mark.parametrize("masses", [[1.0, 0.0], [1.0, -2.0], [1.0, np.nan]])
def test_rejects_non_positive_masses(masses):
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays(masses, np.zeros((2, 3)), np.zeros((2, 3)))


def test_rejects_mismatched_shapes():
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0, 1.0], np.zeros((3, 3)), np.zeros((2, 3)))
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0, 1.0], np.zeros((2, 3)), np.zeros((2, 3)), radii=[1.0])
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0], np.zeros((1, 3)), np.zeros((1, 3)), names=["a", "b"])


def test_rejects_non_finite_state():
    positions = np.zeros((1, 3))
    positions[0, 1] = np.inf
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0], positions, np.zeros((1, 3)))


def test_snapshot_is_read_only_and_detached():
    store = make_store()
    snap = store.snapshot()
    with pytest.raises(ValueError):
        snap.positions[0, 0] = 1.0
    store.replace_state(store.positions + 1.0, store.velocities.copy())
    assert snap.positions[0, 0] == 0.0


def test_replace_state_checks_shape():
    store = make_store()
    with pytest.raises(ValueError):
        store.replace_state(np.zeros((3, 3)), np.zeros((3, 3)))


def test_center_of_mass_and_momentum():
    store = make_store()
    np.testing.assert_allclose(store.center_of_mass(), [1.0, 0.0, 0.0])
    np.testing.assert_allclose(store.momentum(), [0.0, 0.0, 0.0], atol=1e-15)
    assert store.total_mass() == 3.0


def test_rejects_wrong_layout_with_matching_element_count():
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0, 1.0], [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]], np.zeros((2, 3)))
    with pytest.raises(ConfigurationError):
        BodyStore.from_arrays([1.0, 1.0], np.zeros((2, 3)), np.zeros((3, 2)))


def test_accepts_flat_vectors():
    store = BodyStore.from_arrays([1.0, 1.0], [1.0, 2.0, 3.0, 4.0, 5.0, 6.0], np.zeros(6))
    np.testing.assert_array_equal(store.positions, [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    assert store.velocities.shape == (2, 3)


def test_empty_store():
    store = BodyStore.from_arrays([], [], [])
    assert len(store) == 0
    assert store.positions.shape == (0, 3)
