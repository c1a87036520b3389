"""
===============================================================================
ACCELERATION MODEL - Boost Budget Sweep Test Suite
===============================================================================
Tests for the boost budget sweep: row order and columns, agreement with
individual simulations, travel-time column, best budget selection and the
multiprocessing path.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from simulation.budget_sweep import SWEEP_COLUMNS, BudgetSweep
from simulation.trajectory_sim import simulate_acceleration


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sweep():
    """Sequential sweep from 5 uu/s over a 2 s horizon."""
    return BudgetSweep(initial_speed=5.0, start_time=0.0, horizon=2.0, num_workers=1)


# =============================================================================
# Test: sweep table
# =============================================================================

class TestSweepTable:

    def test_columns_and_order(self, sweep):
        budgets = [50.0, 0.0, 10.0]
        frame = sweep.run(budgets)
        assert list(frame.columns) == SWEEP_COLUMNS
        assert list(frame['boost_budget']) == budgets
        assert sweep.results is frame

    def test_matches_direct_simulation(self, sweep):
        frame = sweep.run([0.0, 25.0])
        for row in frame.itertuples(index=False):
            plot = simulate_acceleration(5.0, 0.0, 2.0, row.boost_budget)
            assert row.num_samples == len(plot)
            assert row.final_distance == pytest.approx(plot.end.distance)
            assert row.final_speed == pytest.approx(plot.end.speed)

    def test_flip_counts(self, sweep):
        frame = sweep.run([0.0, 100.0])
        assert frame['flips'].tolist() == [2, 0]

    def test_travel_seconds_nan_without_target(self, sweep):
        frame = sweep.run([0.0, 100.0])
        assert frame['travel_seconds'].isna().all()

    def test_travel_seconds_with_target(self, sweep):
        frame = sweep.run([0.0, 100.0], target_distance=30.0)
        for row in frame.itertuples(index=False):
            expected = simulate_acceleration(5.0, 0.0, 2.0, row.boost_budget).travel_time(30.0)
            assert row.travel_seconds == pytest.approx(expected.seconds)

    def test_unreachable_target_is_nan(self, sweep):
        frame = sweep.run([0.0], target_distance=10_000.0)
        assert np.isnan(frame['travel_seconds'].iloc[0])

    def test_supersonic_flag(self):
        sweep = BudgetSweep(40.0, 0.0, 3.0, flip_cutoff_distance=0.0, num_workers=1)
        frame = sweep.run([0.0, 100.0])
        assert frame['supersonic'].tolist() == [False, True]

    def test_empty_budgets(self, sweep):
        frame = sweep.run([])
        assert frame.empty
        assert list(frame.columns) == SWEEP_COLUMNS


# =============================================================================
# Test: best budget
# =============================================================================

class TestBestBudget:

    def test_requires_run(self, sweep):
        with pytest.raises(RuntimeError):
            sweep.best_budget()

    def test_more_boost_is_faster(self, sweep):
        sweep.run([0.0, 10.0, 60.0, 200.0], target_distance=40.0)
        # 60 and 200 both outlast the horizon, so the smaller one wins.
        assert sweep.best_budget() == 60.0

    def test_none_when_unreachable(self, sweep):
        sweep.run([0.0, 10.0], target_distance=10_000.0)
        assert sweep.best_budget() is None

    def test_none_without_target(self, sweep):
        sweep.run([0.0, 10.0])
        assert sweep.best_budget() is None


# =============================================================================
# Test: parallel execution
# =============================================================================

class TestParallelSweep:

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            BudgetSweep(0.0, 0.0, 1.0, num_workers=0)

    def test_pool_matches_sequential(self):
        budgets = [0.0, 5.0, 20.0, 80.0]
        sequential = BudgetSweep(3.0, 1.0, 2.5, num_workers=1).run(budgets, target_distance=25.0)
        parallel = BudgetSweep(3.0, 1.0, 2.5, num_workers=2).run(budgets, target_distance=25.0)
        assert parallel.equals(sequential)
