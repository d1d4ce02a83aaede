#!/usr/bin/env python3
"""
Run an N-body simulation without a renderer.

Chooses one startup configuration (solar system, figure-eight or random
cloud), advances it a fixed number of host ticks at the requested speed and
reports energy and momentum conservation. With --plot the trajectories and
the energy error are saved as PNG files.
"""
import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from classical_integrators import INTEGRATORS, SymplecticEuler
from comparison_framework.metrics import EnergyConservation, MomentumConservation
from initial_conditions import StartupKind
from simulation.config import ConfigurationError
from simulation.driver import create_simulation

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the script."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Run an N-body gravity simulation")

    parser.add_argument("--startup", type=str, default=StartupKind.SOLAR.value,
                        help="Initial configuration: solar (default), figure8 or random")

    parser.add_argument("--speed", type=float, default=1.0,
                        help="Speed multiplier applied to every tick (default: 1.0)")

    parser.add_argument("--integrator", type=str, default=SymplecticEuler.name,
                        help=f"Integrator: {', '.join(INTEGRATORS)} (default: {SymplecticEuler.name})")

    parser.add_argument("--diagnostics", action="store_true",
                        help="Collect and log per-tick diagnostics")

    parser.add_argument("--steps", type=int, default=600,
                        help="Number of host ticks to run (default: 600)")

    parser.add_argument("--count", type=int, default=None,
                        help="Number of orbiting bodies for the random startup")

    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the random startup")

    parser.add_argument("--plot", action="store_true",
                        help="Save trajectory and energy plots")

    parser.add_argument("--output-dir", type=str, default="results",
                        help="Directory for plots (default: results)")

    parser.add_argument("--log-level", type=str, default="INFO",
                        help="Logging level (default: INFO)")

    return parser.parse_args(argv)


def plot_results(results, startup, output_dir='results', names=None):
    """
    Plot the results of a run.

    Args:
        results (dict): Trajectory returned by SimulationDriver.run(record=True)
        startup (str): Startup kind, used in titles and file names
        output_dir (str): Directory to save plots
        names (sequence): Optional body labels for the legend
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True, parents=True)

    # Plot trajectory
    positions = results['positions']
    n_bodies = positions.shape[1]
    plt.figure(figsize=(10, 10))
    for i in range(n_bodies):
        label = names[i] if names is not None else None
        plt.plot(positions[:, i, 0], positions[:, i, 1], '-', alpha=0.6, label=label)
        plt.plot(positions[-1, i, 0], positions[-1, i, 1], '.')
    plt.axis('equal')
    plt.grid(True)
    plt.xlabel('x (0.1 AU)')
    plt.ylabel('y (0.1 AU)')
    plt.title(f'Trajectories - {startup}')
    if names is not None:
        plt.legend()
    plt.savefig(output_path / f'trajectory_{startup}.png')
    plt.close()

    # Plot energy conservation
    plt.figure(figsize=(10, 6))
    relative_energy_error = np.abs(EnergyConservation.relative_error(results))
    plt.plot(results['times'], relative_energy_error)
    plt.grid(True)
    plt.xlabel('Time (days)')
    plt.ylabel('|Relative Energy Error|')
    plt.title(f'Energy Conservation - {startup}')
    if np.any(relative_energy_error > 0):
        plt.yscale('log')
    plt.savefig(output_path / f'energy_{startup}.png')
    plt.close()
    logger.info("Saved plots to %s", output_path)


def main(argv=None):
    """Run the selected simulation; returns the process exit status."""
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    if args.steps < 0:
        logger.error("--steps must not be negative, got %d", args.steps)
        return 2

    try:
        driver = create_simulation(
            startup=args.startup,
            speed=args.speed,
            diagnostics=args.diagnostics,
            seed=args.seed,
            count=args.count,
            integrator=args.integrator,
        )
    except ConfigurationError as e:
        logger.error("Cannot start simulation: %s", e)
        return 2

    startup = StartupKind.parse(args.startup).value
    results = driver.run(args.steps, record=True)

    energy_metric = EnergyConservation()
    momentum_metric = MomentumConservation()
    energy_metric.add_result(startup, energy_metric.compute(results))
    momentum_metric.add_result(startup, momentum_metric.compute(results))
    energy_metric.log_results()
    momentum_metric.log_results()
    logger.info(
        "Ran %d ticks (%.3f time units) in %.2f seconds",
        driver.tick_count, driver.time, results['computation_time'],
    )

    if args.plot:
        plot_results(results, startup, args.output_dir, names=driver.bodies.names)
    return 0


if __name__ == "__main__":
    sys.exit(main())
