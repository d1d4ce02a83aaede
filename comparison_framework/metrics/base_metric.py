import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseMetric(ABC):
    """Base class for all trajectory metrics."""

    def __init__(self, name):
        """
        Initialize the metric.

        Args:
            name (str): Name of the metric
        """
        self.name = name
        self.results = {}

    @abstractmethod
    def compute(self, trajectory):
        """
        Compute the metric over a recorded trajectory.

        Args:
            trajectory (dict): Trajectory as returned by SimulationDriver.run(record=True)

        Returns:
            float: Computed metric value
        """
        pass

    def reset(self):
        """Reset the metric results."""
        self.results = {}

    def add_result(self, run_name, value):
        """
        Add a result for a run.

        Args:
            run_name (str): Label of the run (startup kind, integrator, ...)
            value (float): Computed metric value
        """
        self.results[run_name] = value

    def get_results(self):
        """
        Get all stored results.

        Returns:
            dict: Dictionary of results by run
        """
        return self.results

    def log_results(self):
        """Log the results in a formatted table."""
        logger.info("%s results:", self.name)
        for run_name, value in self.results.items():
            logger.info("  %-20s: %12.6e", run_name, value)
