"""
Initial-condition builders.

Each startup kind maps to exactly one pure builder function returning a
freshly populated BodyStore.
"""
from enum import Enum

from simulation.config import ConfigurationError

from .figure8 import FIGURE8_PERIOD, generate_figure_eight
from .random_cloud import generate_random_cloud
from .solar import BODY_NAMES, SOLAR_SYSTEM_TABLE, generate_solar_system


class StartupKind(Enum):
    SOLAR = "solar"
    FIGURE8 = "figure8"
    RANDOM = "random"

    @classmethod
    def parse(cls, name) -> "StartupKind":
        """Look up a startup kind by its command-line name."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(f"Unknown startup configuration {name!r} (choose from {choices})")


DEFAULT_STARTUP = StartupKind.SOLAR


def build_bodies(kind=DEFAULT_STARTUP, **options):
    """
    Build the BodyStore for a startup kind.

    Args:
        kind: StartupKind or its name
        **options: Passed to the builder (e.g. count and seed for RANDOM)
    Returns:
        BodyStore
    """
    kind = StartupKind.parse(kind)
    if kind is StartupKind.SOLAR:
        return generate_solar_system(**options)
    if kind is StartupKind.FIGURE8:
        return generate_figure_eight(**options)
    return generate_random_cloud(**options)


__all__ = [
    'StartupKind',
    'DEFAULT_STARTUP',
    'build_bodies',
    'generate_solar_system',
    'generate_figure_eight',
    'generate_random_cloud',
    'FIGURE8_PERIOD',
    'BODY_NAMES',
    'SOLAR_SYSTEM_TABLE',
]
