"""
N-body gravity simulation core.

The body store, constants and run configuration live here; the driver
(simulation.driver) builds on the integrator and initial-condition packages.
"""

from . import constants
from .config import ConfigurationError, SimulationParameters
from .bodies import Body, BodyStore

__all__ = [
    'constants',
    'ConfigurationError',
    'SimulationParameters',
    'Body',
    'BodyStore',
]
