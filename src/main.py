#!/usr/bin/env python3
"""
===============================================================================
ACCELERATION MODEL - COMMAND LINE ENTRY POINT
===============================================================================
Simulates straight-line acceleration of a ground vehicle and reports how far
it gets, how fast it is going and how long it needs to cover a distance.

USAGE:
    python main.py --speed 10 --horizon 3 --boost 33
    python main.py --speed 0 --boost 0 --target-distance 40 --angle 0.5
    python main.py --speed 5 --sweep 0 25 50 100 --target-distance 60
    python main.py --speed 0 --boost 50 --csv out/plot.csv --plot out/plot.png

OUTPUTS:
    --csv   - Samples of the simulated plot (distance, time, elapsed, speed)
    --plot  - Distance/speed figure, or the sweep figure with --sweep

DEPENDENCIES:
    numpy, pandas, matplotlib, pyyaml
===============================================================================
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

# ---------------------------------------------------------------------------
# Path setup: ensure all project modules are importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import load_config
from guidance.travel_planner import travel_seconds
from simulation.budget_sweep import BudgetSweep
from simulation.trajectory_sim import count_flips, simulate_acceleration

logger = logging.getLogger('ACCEL_MAIN')

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Command line options."""
    parser = argparse.ArgumentParser(
        description='Ground vehicle acceleration model and travel-time predictor',
    )
    parser.add_argument('--speed', type=float, default=0.0,
                        help='Initial speed (uu/s)')
    parser.add_argument('--start-time', type=float, default=0.0,
                        help='Game time of the first sample (s)')
    parser.add_argument('--horizon', type=float, default=3.0,
                        help='Seconds to simulate')
    parser.add_argument('--boost', type=float, default=0.0,
                        help='Boost budget')
    parser.add_argument('--flip-cutoff', type=float, default=math.inf,
                        help='Do not flip past this distance (default: no limit)')
    parser.add_argument('--target-distance', type=float, default=None,
                        help='Report the travel time to this distance (uu)')
    parser.add_argument('--angle', type=float, default=0.0,
                        help='Steering correction angle to the target (rad)')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML file with an acceleration_model section')
    parser.add_argument('--sweep', type=float, nargs='+', default=None,
                        metavar='BUDGET', help='Compare several boost budgets')
    parser.add_argument('--workers', type=positive_int, default=1,
                        help='Worker processes for --sweep')
    parser.add_argument('--csv', type=str, default=None,
                        help='Write samples (or sweep rows) to this CSV file')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a figure to this path')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write the log to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')
    return parser


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging for a command line run."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='w'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def run_single(args: argparse.Namespace, config) -> None:
    """Simulate one budget and report the plot."""
    plot = simulate_acceleration(
        args.speed, args.start_time, args.horizon, args.boost,
        flip_cutoff_distance=args.flip_cutoff, config=config,
    )
    logger.info(
        "Plot: %d samples, %d flips, %.1f uu in %.2f s, final speed %.1f uu/s",
        len(plot), count_flips(plot, config), plot.end.distance,
        plot.duration, plot.end.speed,
    )

    if args.target_distance is not None:
        travel = travel_seconds(plot, args.target_distance, args.angle, args.speed, config)
        if travel.reached:
            logger.info("Travel time to %.1f uu: %.3f s", args.target_distance, travel.seconds)
        else:
            logger.info("Target at %.1f uu not reachable within %.2f s",
                        args.target_distance, args.horizon)

    if args.csv:
        Path(args.csv).parent.mkdir(parents=True, exist_ok=True)
        plot.to_dataframe().to_csv(args.csv, index=False)
        logger.info("Samples written to %s", args.csv)

    if args.plot:
        from visualization.trajectory_plots import plot_trajectory
        plot_trajectory(plot, args.plot, config=config)
        logger.info("Figure saved to %s", args.plot)


def run_sweep(args: argparse.Namespace, config) -> None:
    """Simulate several budgets and report the comparison."""
    sweep = BudgetSweep(
        args.speed, args.start_time, args.horizon,
        flip_cutoff_distance=args.flip_cutoff, config=config,
        num_workers=args.workers,
    )
    frame = sweep.run(args.sweep, target_distance=args.target_distance)
    for row in frame.itertuples(index=False):
        logger.info(
            "Budget %6.1f: %.1f uu, final speed %.1f uu/s, %d flips, travel %s",
            row.boost_budget, row.final_distance, row.final_speed, row.flips,
            'n/a' if math.isnan(row.travel_seconds) else f"{row.travel_seconds:.3f} s",
        )
    if args.target_distance is not None:
        best = sweep.best_budget()
        if best is None:
            logger.info("No budget reaches %.1f uu within %.2f s", args.target_distance, args.horizon)
        else:
            logger.info("Best budget for %.1f uu: %.1f", args.target_distance, best)

    if args.csv:
        Path(args.csv).parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.csv, index=False)
        logger.info("Sweep written to %s", args.csv)

    if args.plot:
        from visualization.trajectory_plots import plot_budget_sweep
        plot_budget_sweep(frame, args.plot)
        logger.info("Figure saved to %s", args.plot)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the requested simulation and return an exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    config = load_config(args.config)

    if args.sweep:
        run_sweep(args, config)
    else:
        run_single(args, config)
    return 0


if __name__ == '__main__':
    sys.exit(main())
