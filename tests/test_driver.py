import logging

import numpy as np
import pytest

from classical_integrators import Euler, SymplecticEuler
from initial_conditions import generate_figure_eight, generate_random_cloud
from simulation.bodies import BodyStore
from simulation.config import ConfigurationError, SimulationParameters
from simulation.driver import DIAGNOSTICS_HISTORY, SimulationDriver, TickDiagnostics, create_simulation


def test_tick_advances_time_by_effective_dt():
    parameters = SimulationParameters(speed=3.0, base_tick=0.01, max_tick=0.05)
    driver = SimulationDriver(generate_figure_eight(), parameters)
    driver.tick()
    assert driver.tick_count == 1
    assert driver.time == pytest.approx(0.03)
    driver.tick(0.02)
    assert driver.time == pytest.approx(0.09)


def test_long_host_ticks_are_clamped():
    parameters = SimulationParameters(speed=2.0, base_tick=0.01, max_tick=0.05)
    driver = SimulationDriver(generate_figure_eight(), parameters)
    driver.tick(1.0)
    assert driver.time == pytest.approx(0.1)


def test_masses_never_change():
    store = generate_random_cloud(count=15, seed=11)
    masses = store.masses.copy()
    driver = SimulationDriver(store, SimulationParameters(speed=4.0))
    driver.run(200)
    np.testing.assert_array_equal(store.masses, masses)


def test_snapshot_is_not_affected_by_later_ticks():
    driver = SimulationDriver(generate_figure_eight(), SimulationParameters())
    before = driver.state()
    old_positions = driver.bodies.positions
    driver.tick()
    # The step publishes new arrays; the previous ones are left intact
    assert driver.bodies.positions is not old_positions
    np.testing.assert_array_equal(before.positions, old_positions)
    assert not np.array_equal(before.positions, driver.bodies.positions)


def test_speed_scaling_matches_smaller_steps():
    base_tick = 1e-3
    slow = SimulationDriver(generate_figure_eight(), SimulationParameters(base_tick=base_tick, speed=1.0))
    fast = SimulationDriver(generate_figure_eight(), SimulationParameters(base_tick=base_tick, speed=2.0))
    slow.run(2000)
    fast.run(1000)
    assert fast.time == pytest.approx(slow.time)
    np.testing.assert_allclose(fast.bodies.positions, slow.bodies.positions, atol=2e-2)
    np.testing.assert_allclose(fast.bodies.velocities, slow.bodies.velocities, atol=2e-2)


def test_coincident_bodies_survive_a_tick():
    store = BodyStore.from_arrays(
        masses=[1.0, 1.0, 1.0],
        positions=[[1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]],
        velocities=np.zeros((3, 3)),
    )
    driver = SimulationDriver(store, SimulationParameters(speed=50.0))
    driver.tick()
    assert np.all(np.isfinite(store.positions))
    assert np.all(np.isfinite(store.velocities))


def test_advance_runs_whole_ticks_and_carries_remainder():
    parameters = SimulationParameters(base_tick=0.01, max_tick=0.01)
    driver = SimulationDriver(generate_figure_eight(), parameters)
    assert driver.advance(0.025) == 2
    assert driver.advance(0.006) == 1
    assert driver.advance(0.0) == 0
    assert driver.tick_count == 3
    with pytest.raises(ValueError):
        driver.advance(-1.0)


def test_run_records_trajectory():
    driver = SimulationDriver(generate_figure_eight(), SimulationParameters())
    results = driver.run(5, record=True)
    assert results['positions'].shape == (6, 3, 3)
    assert results['velocities'].shape == (6, 3, 3)
    assert results['energies'].shape == (6,)
    np.testing.assert_allclose(np.diff(results['times']), SimulationParameters().base_tick)
    assert driver.run(3) is None
    assert driver.tick_count == 8


def test_diagnostics_disabled_by_default():
    driver = SimulationDriver(generate_figure_eight(), SimulationParameters())
    driver.tick()
    assert driver.diagnostics is None
    assert len(driver.diagnostics_history) == 0


def test_diagnostics_are_published_and_logged(caplog):
    parameters = SimulationParameters(diagnostics=True, log_interval=2)
    driver = SimulationDriver(generate_figure_eight(), parameters)
    with caplog.at_level(logging.INFO, logger="simulation.driver"):
        driver.run(4)
    diagnostics = driver.diagnostics
    assert isinstance(diagnostics, TickDiagnostics)
    assert diagnostics.tick == 4
    assert diagnostics.body_count == 3
    assert diagnostics.step_seconds >= 0.0
    assert diagnostics.relative_energy_error < 1e-2
    assert len(driver.diagnostics_history) == 4
    assert sum("tick" in record.message for record in caplog.records) == 2


def test_create_simulation_defaults_to_solar():
    driver = create_simulation()
    assert len(driver.bodies) == 10
    assert driver.parameters.speed == 1.0
    assert driver.parameters.diagnostics is False


def test_create_simulation_random_with_count():
    driver = create_simulation("random", count=0, seed=5)
    assert len(driver.bodies) == 1
    driver.run(3)


@pytest.mark.parametrize("kwargs", [
    {"speed": 0.0},
    {"speed": -1.0},
    {"speed": float("nan")},
    {"startup": "andromeda"},
    {"startup": "random", "count": -3},
    {"startup": "solar", "count": 5},
])
def test_create_simulation_rejects_bad_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        create_simulation(**kwargs)


def test_diagnostics_history_is_capped():
    driver = SimulationDriver(generate_figure_eight(), SimulationParameters(diagnostics=True, log_interval=10000))
    driver.run(DIAGNOSTICS_HISTORY + 50)
    assert len(driver.diagnostics_history) == DIAGNOSTICS_HISTORY
    assert driver.diagnostics_history[-1] is driver.diagnostics
    assert driver.diagnostics_history[0].tick == 51


def test_create_simulation_selects_integrator():
    assert isinstance(create_simulation("figure8").integrator, SymplecticEuler)
    driver = create_simulation("figure8", integrator="euler", softening=1e-2)
    assert isinstance(driver.integrator, Euler)
    assert driver.integrator.softening == 1e-2
    with pytest.raises(ConfigurationError):
        create_simulation("figure8", integrator="verlet")
