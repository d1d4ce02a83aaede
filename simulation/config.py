"""
Run configuration for the simulation driver.
"""
import math
from dataclasses import dataclass, replace as dataclass_replace
from typing import Optional

from . import constants


class ConfigurationError(ValueError):
    """Raised when a simulation cannot be started from the given settings."""


def _require_positive(name: str, value) -> None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class SimulationParameters:
    """
    Parameters fixed for the lifetime of one run.

    Attributes:
        speed: Multiplier applied to every host tick
        base_tick: Host tick duration used when the host does not supply one
        max_tick: Upper bound on a single host tick before scaling
        softening: Plummer softening length (distance units)
        gravitational_constant: G in simulation units
        diagnostics: Whether the driver collects per-tick metrics
        log_interval: Ticks between diagnostic log lines
    """
    speed: float = 1.0
    base_tick: float = constants.BASE_TICK
    max_tick: float = constants.MAX_TICK
    softening: float = constants.SOFTENING
    gravitational_constant: float = constants.G
    diagnostics: bool = False
    log_interval: int = 60

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError if any parameter is out of range."""
        _require_positive("speed", self.speed)
        _require_positive("base_tick", self.base_tick)
        _require_positive("max_tick", self.max_tick)
        _require_positive("softening", self.softening)
        _require_positive("gravitational_constant", self.gravitational_constant)
        if self.max_tick < self.base_tick:
            raise ConfigurationError(
                f"max_tick ({self.max_tick}) must not be smaller than base_tick ({self.base_tick})"
            )
        if isinstance(self.log_interval, bool) or not isinstance(self.log_interval, int) or self.log_interval < 1:
            raise ConfigurationError(f"log_interval must be a positive integer, got {self.log_interval!r}")

    def effective_dt(self, host_tick: Optional[float] = None) -> float:
        """
        Time increment for one integration step.

        Args:
            host_tick: Duration of the host tick; base_tick when omitted
        Returns:
            min(host_tick, max_tick) * speed
        """
        tick = self.base_tick if host_tick is None else float(host_tick)
        if not math.isfinite(tick) or tick < 0.0:
            raise ConfigurationError(f"host tick must be a non-negative finite number, got {host_tick!r}")
        return min(tick, self.max_tick) * self.speed

    def replace(self, **changes) -> "SimulationParameters":
        return dataclass_replace(self, **changes)
