from .base_metric import BaseMetric
from .energy_conservation import EnergyConservation
from .momentum_conservation import MomentumConservation

__all__ = ['BaseMetric', 'EnergyConservation', 'MomentumConservation']
