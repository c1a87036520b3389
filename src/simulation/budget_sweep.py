"""
===============================================================================
ACCELERATION MODEL - Boost Budget Sweep
===============================================================================
Runs one independent trajectory simulation per candidate boost budget and
collects the outcomes in a pandas DataFrame so a planner can ask "how much
boost do I need to get there soonest?".

Each simulation is a pure function of its scalar inputs, which makes the sweep
embarrassingly parallel: with more than one worker the budgets are distributed
over a multiprocessing Pool, otherwise they run in-process.
===============================================================================
"""

import logging
import math
import os
from multiprocessing import Pool
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import DEFAULT_CONFIG, AccelerationModelConfig
from simulation.trajectory_sim import count_flips, simulate_acceleration

logger = logging.getLogger(__name__)

SWEEP_COLUMNS = [
    'boost_budget',
    'num_samples',
    'flips',
    'final_distance',
    'final_speed',
    'final_time',
    'supersonic',
    'travel_seconds',
]


def _simulate_budget(args: Tuple[Dict[str, Any], float, Optional[float]]) -> Dict[str, Any]:
    """
    Module-level wrapper for one sweep entry.

    Required because multiprocessing Pool.map cannot pickle bound methods.

    Parameters
    ----------
    args : tuple of (simulation kwargs, boost_budget, target_distance)

    Returns
    -------
    dict
        One row of the sweep table.
    """
    sim_kwargs, boost_budget, target_distance = args
    config = sim_kwargs['config']
    plot = simulate_acceleration(boost_budget=boost_budget, **sim_kwargs)

    travel_seconds = np.nan
    if target_distance is not None:
        travel = plot.travel_time(target_distance)
        if travel.reached:
            travel_seconds = travel.seconds

    return {
        'boost_budget': boost_budget,
        'num_samples': len(plot),
        'flips': count_flips(plot, config),
        'final_distance': plot.end.distance,
        'final_speed': plot.end.speed,
        'final_time': plot.end.time,
        'supersonic': plot.end.speed >= config.supersonic_speed,
        'travel_seconds': travel_seconds,
    }


class BudgetSweep:
    """
    Compare trajectories across several boost budgets.

    Parameters
    ----------
    initial_speed : float
        Speed at the start of every run (uu/s).
    start_time : float
        Game time of the first sample (s).
    horizon : float
        Seconds simulated per run.
    flip_cutoff_distance : float
        Forwarded to every simulation.
    config : AccelerationModelConfig
        Model tuning shared by all runs.
    num_workers : int or None
        Worker processes.  ``1`` runs in-process; ``None`` uses
        ``os.cpu_count()``.

    Attributes
    ----------
    results : pd.DataFrame or None
        Populated by :meth:`run`.
    """

    def __init__(
        self,
        initial_speed: float,
        start_time: float,
        horizon: float,
        flip_cutoff_distance: float = math.inf,
        config: AccelerationModelConfig = DEFAULT_CONFIG,
        num_workers: Optional[int] = None,
    ) -> None:
        if num_workers is not None and num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {num_workers}")

        self.initial_speed = initial_speed
        self.start_time = start_time
        self.horizon = horizon
        self.flip_cutoff_distance = flip_cutoff_distance
        self.config = config
        self.num_workers = num_workers or os.cpu_count() or 1

        self.results: Optional[pd.DataFrame] = None

    def run(self, budgets: Sequence[float], target_distance: Optional[float] = None) -> pd.DataFrame:
        """
        Simulate every budget and tabulate the outcomes.

        Parameters
        ----------
        budgets : sequence of float
            Boost budgets to compare.  Rows keep this order.
        target_distance : float or None
            When given, the ``travel_seconds`` column holds the time to cover
            this distance (NaN when not reached within the horizon).

        Returns
        -------
        pd.DataFrame
            One row per budget with the columns in ``SWEEP_COLUMNS``.
        """
        sim_kwargs = {
            'initial_speed': self.initial_speed,
            'start_time': self.start_time,
            'horizon': self.horizon,
            'flip_cutoff_distance': self.flip_cutoff_distance,
            'config': self.config,
        }
        tasks = [(sim_kwargs, float(budget), target_distance) for budget in budgets]

        workers = min(self.num_workers, len(tasks))
        if workers > 1:
            logger.info("Sweeping %d boost budgets on %d workers", len(tasks), workers)
            with Pool(processes=workers) as pool:
                rows: List[Dict[str, Any]] = pool.map(_simulate_budget, tasks)
        else:
            rows = [_simulate_budget(task) for task in tasks]

        self.results = pd.DataFrame(rows, columns=SWEEP_COLUMNS)
        return self.results

    def best_budget(self) -> Optional[float]:
        """
        Smallest budget reaching the target soonest.

        Returns ``None`` when no run reached the target or :meth:`run` was
        called without a target distance.

        Raises
        ------
        RuntimeError
            If :meth:`run` has not been called yet.
        """
        if self.results is None:
            raise RuntimeError("Call run() before best_budget()")

        reached = self.results.dropna(subset=['travel_seconds'])
        if reached.empty:
            return None
        fastest = reached['travel_seconds'].min()
        candidates = reached[np.isclose(reached['travel_seconds'], fastest)]
        return float(candidates['boost_budget'].min())
