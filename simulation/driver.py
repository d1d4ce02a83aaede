"""
Simulation driver: owns the body store for one run and advances it once
per host tick.
"""
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Optional

import numpy as np

from classical_integrators import BaseIntegrator, SymplecticEuler, get_integrator
from initial_conditions import StartupKind, build_bodies

from .bodies import BodyStore
from .config import ConfigurationError, SimulationParameters

logger = logging.getLogger(__name__)

# Diagnostics kept for the most recent ticks only (ten seconds at 60 Hz)
DIAGNOSTICS_HISTORY = 600


@dataclass(frozen=True)
class TickDiagnostics:
    """Per-tick metrics published when diagnostics are enabled."""
    tick: int
    time: float
    dt: float
    step_seconds: float
    body_count: int
    energy: float
    relative_energy_error: float


class SimulationDriver:
    """
    Runs the integrator over a BodyStore.

    Every tick computes the complete new state from the current one and
    publishes it with a single BodyStore.replace_state() call, so readers
    between ticks never see a half-updated store.
    """

    def __init__(
        self,
        bodies: BodyStore,
        parameters: Optional[SimulationParameters] = None,
        integrator: Optional[BaseIntegrator] = None
    ):
        self.parameters = parameters if parameters is not None else SimulationParameters()
        self.parameters.validate()
        if integrator is None:
            integrator = SymplecticEuler(
                G=self.parameters.gravitational_constant,
                softening=self.parameters.softening,
            )
        self.integrator = integrator
        self.bodies = bodies
        self.time = 0.0
        self.tick_count = 0
        self.diagnostics: Optional[TickDiagnostics] = None
        self.diagnostics_history: Deque[TickDiagnostics] = deque(maxlen=DIAGNOSTICS_HISTORY)
        self._accumulator = 0.0
        self._initial_energy = self.energy() if self.parameters.diagnostics else None

    def energy(self) -> float:
        return self.integrator.compute_energy(*self.bodies.state())

    def state(self) -> BodyStore:
        """Read-only snapshot of the current state."""
        return self.bodies.snapshot()

    def tick(self, host_tick: Optional[float] = None) -> BodyStore:
        """
        Advance the simulation by exactly one integration step.

        Args:
            host_tick: Duration of the host tick; parameters.base_tick when omitted
        Returns:
            The (live) body store after the step
        """
        dt = self.parameters.effective_dt(host_tick)
        start = time.perf_counter()
        positions, velocities = self.integrator.step(
            self.bodies.positions, self.bodies.velocities, self.bodies.masses, dt
        )
        self.bodies.replace_state(positions, velocities)
        step_seconds = time.perf_counter() - start

        self.time += dt
        self.tick_count += 1
        if self.parameters.diagnostics:
            self._record_diagnostics(dt, step_seconds)
        return self.bodies

    def advance(self, elapsed: float) -> int:
        """
        Consume host wall time in fixed base_tick slices.

        Any remainder shorter than one slice is carried over to the next
        call. Each slice runs exactly one tick.

        Args:
            elapsed: Host time that has passed since the last call
        Returns:
            Number of ticks run
        """
        if not np.isfinite(elapsed) or elapsed < 0.0:
            raise ValueError(f"elapsed time must be non-negative and finite, got {elapsed!r}")
        self._accumulator += elapsed
        base_tick = self.parameters.base_tick
        n_ticks = 0
        while self._accumulator >= base_tick:
            self._accumulator -= base_tick
            self.tick(base_tick)
            n_ticks += 1
        return n_ticks

    def run(self, n_ticks: int, record: bool = False) -> Optional[Dict[str, Any]]:
        """
        Run a fixed number of ticks at the base tick duration.

        Args:
            n_ticks: Number of ticks
            record: Whether to collect and return the trajectory
        Returns:
            Dict with positions (n_ticks + 1, n_bodies, 3), velocities,
            energies and times when record is set, otherwise None
        """
        if not record:
            for _ in range(n_ticks):
                self.tick()
            return None

        positions = [self.bodies.positions.copy()]
        velocities = [self.bodies.velocities.copy()]
        energies = [self.energy()]
        times = [self.time]
        start_time = time.time()
        for _ in range(n_ticks):
            self.tick()
            positions.append(self.bodies.positions.copy())
            velocities.append(self.bodies.velocities.copy())
            energies.append(self.energy())
            times.append(self.time)
        computation_time = time.time() - start_time

        return {
            'positions': np.array(positions),
            'velocities': np.array(velocities),
            'energies': np.array(energies),
            'times': np.array(times),
            'masses': self.bodies.masses.copy(),
            'computation_time': computation_time
        }

    def _record_diagnostics(self, dt: float, step_seconds: float) -> None:
        energy = self.energy()
        if self._initial_energy:
            relative_error = abs((energy - self._initial_energy) / self._initial_energy)
        else:
            relative_error = 0.0
        self.diagnostics = TickDiagnostics(
            tick=self.tick_count,
            time=self.time,
            dt=dt,
            step_seconds=step_seconds,
            body_count=len(self.bodies),
            energy=energy,
            relative_energy_error=relative_error,
        )
        self.diagnostics_history.append(self.diagnostics)
        if self.tick_count % self.parameters.log_interval == 0:
            logger.info(
                "tick %d t=%.4f dt=%.5f step=%.3f ms bodies=%d energy=%.6e drift=%.2e",
                self.tick_count, self.time, dt, step_seconds * 1e3,
                len(self.bodies), energy, relative_error,
            )


def create_simulation(
    startup="solar",
    speed: float = 1.0,
    diagnostics: bool = False,
    seed: Optional[int] = None,
    count: Optional[int] = None,
    integrator: str = SymplecticEuler.name,
    **parameter_overrides
) -> SimulationDriver:
    """
    Validate the startup settings and build a ready-to-run driver.

    Args:
        startup: Startup kind name ('solar', 'figure8' or 'random')
        speed: Speed multiplier, must be positive
        diagnostics: Collect per-tick diagnostics
        seed: Seed for the random builder
        count: Number of orbiting bodies for the random builder
        integrator: Integrator name, see classical_integrators.INTEGRATORS
        **parameter_overrides: Further SimulationParameters fields
    Returns:
        SimulationDriver
    """
    kind = StartupKind.parse(startup)
    parameters = SimulationParameters(speed=speed, diagnostics=diagnostics, **parameter_overrides)
    G = parameters.gravitational_constant
    stepper = get_integrator(integrator, G=G, softening=parameters.softening)
    if count is not None and kind is not StartupKind.RANDOM:
        raise ConfigurationError(f"a body count only applies to the random startup, not {kind.value!r}")

    if kind is StartupKind.RANDOM:
        options = {'seed': seed, 'G': G}
        if count is not None:
            options['count'] = count
        bodies = build_bodies(kind, **options)
    elif kind is StartupKind.FIGURE8:
        bodies = build_bodies(kind, G=G)
    else:
        bodies = build_bodies(kind)

    logger.info(
        "Starting %s simulation: %d bodies, %s integrator, speed %.3g, diagnostics %s",
        kind.value, len(bodies), stepper.name, parameters.speed,
        "on" if parameters.diagnostics else "off",
    )
    return SimulationDriver(bodies, parameters, integrator=stepper)
