"""
Classical integrators package.
"""

from simulation import constants
from simulation.config import ConfigurationError

from .base_integrator import BaseIntegrator
from .euler import Euler
from .symplectic_euler import SymplecticEuler

INTEGRATORS = {
    SymplecticEuler.name: SymplecticEuler,
    Euler.name: Euler,
}


def get_integrator(
    integrator_name: str = SymplecticEuler.name,
    G: float = constants.G,
    softening: float = constants.SOFTENING
) -> BaseIntegrator:
    """
    Initialise and return the named integrator.

    Args:
        integrator_name: One of INTEGRATORS
        G: Gravitational constant
        softening: Softening length
    Returns:
        Initialised integrator instance
    """
    try:
        integrator_cls = INTEGRATORS[integrator_name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown integrator: {integrator_name!r} (choose from {', '.join(INTEGRATORS)})"
        )
    return integrator_cls(G=G, softening=softening)


__all__ = ['BaseIntegrator', 'Euler', 'SymplecticEuler', 'INTEGRATORS', 'get_integrator']
