"""
===============================================================================
ACCELERATION MODEL - Travel Planner Test Suite
===============================================================================
Tests for the steering penalty, travel seconds to a target point, deadline
reachability and target ranking.  The steering capability is an external
collaborator, so tests inject simple correction-angle functions.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from core.config import AccelerationModelConfig
from core.data_structures import NOT_REACHED, DistanceTimeSpeed, TrajectoryPlot, VehicleState
from guidance.travel_planner import (
    can_reach_by,
    rank_targets,
    soonest_target,
    steer_penalty_seconds,
    travel_seconds,
    travel_seconds_to,
)
from simulation.trajectory_sim import simulate_from_state


def facing(vehicle, target):
    """Correction angle for a vehicle already facing every target."""
    return 0.0


def quarter_turn(vehicle, target):
    return -np.pi / 2


def heading_error(vehicle, target):
    """Angle between the velocity and the direction to the target, in the ground plane."""
    to_target = np.asarray(target)[:2] - vehicle.position[:2]
    heading = vehicle.velocity[:2]
    return float(np.arctan2(heading[0] * to_target[1] - heading[1] * to_target[0],
                            heading.dot(to_target)))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def vehicle():
    """Vehicle at the origin moving along +x at 10 uu/s."""
    return VehicleState(position=[0.0, 0.0, 0.0], velocity=[10.0, 0.0, 0.0], time=50.0)


@pytest.fixture
def linear_plot():
    """Constant 10 uu/s for 4 seconds starting at t = 50."""
    return TrajectoryPlot([
        DistanceTimeSpeed(10.0 * k, 50.0 + k, 10.0) for k in range(5)
    ])


# =============================================================================
# Test: steering penalty
# =============================================================================

class TestSteerPenalty:

    def test_formula(self):
        assert steer_penalty_seconds(0.5, 20.0) == pytest.approx(0.5 * 20.0 * 0.02)

    def test_sign_ignored(self):
        assert steer_penalty_seconds(-1.0, 10.0) == steer_penalty_seconds(1.0, 10.0)

    def test_stationary_vehicle_has_no_penalty(self):
        assert steer_penalty_seconds(np.pi, 0.0) == 0.0

    def test_facing_target_has_no_penalty(self):
        assert steer_penalty_seconds(0.0, 40.0) == 0.0

    def test_custom_coefficient(self):
        config = AccelerationModelConfig(steer_penalty_coefficient=0.1)
        assert steer_penalty_seconds(1.0, 10.0, config) == pytest.approx(1.0)


# =============================================================================
# Test: travel seconds
# =============================================================================

class TestTravelSeconds:

    def test_adds_penalty(self, linear_plot):
        result = travel_seconds(linear_plot, 25.0, np.pi / 2, 10.0)
        assert result.seconds == pytest.approx(2.5 + np.pi / 2 * 10.0 * 0.02)

    def test_unreachable_stays_unreachable(self, linear_plot):
        assert travel_seconds(linear_plot, 100.0, 1.0, 10.0) is NOT_REACHED

    def test_to_target_uses_straight_line(self, vehicle, linear_plot):
        result = travel_seconds_to(vehicle, linear_plot, [18.0, 24.0, 0.0], facing)
        assert result.seconds == pytest.approx(3.0)

    def test_to_target_includes_height(self, vehicle, linear_plot):
        result = travel_seconds_to(vehicle, linear_plot, [0.0, 0.0, 20.0], facing)
        assert result.seconds == pytest.approx(2.0)

    def test_to_target_with_turn(self, vehicle, linear_plot):
        result = travel_seconds_to(vehicle, linear_plot, [0.0, 20.0, 0.0], heading_error)
        assert result.seconds == pytest.approx(2.0 + np.pi / 2 * 10.0 * 0.02)

    def test_correction_angle_receives_target(self, vehicle, linear_plot):
        seen = []

        def recording(v, target):
            seen.append((v, target))
            return 0.0

        travel_seconds_to(vehicle, linear_plot, (5.0, 0.0, 0.0), recording)
        assert seen[0][0] is vehicle
        np.testing.assert_allclose(seen[0][1], [5.0, 0.0, 0.0])


# =============================================================================
# Test: deadline reachability
# =============================================================================

class TestCanReachBy:

    def test_reachable_before_deadline(self, vehicle, linear_plot):
        assert can_reach_by(vehicle, linear_plot, [20.0, 0.0, 0.0], 52.5, facing)

    def test_exactly_at_deadline(self, vehicle, linear_plot):
        assert can_reach_by(vehicle, linear_plot, [20.0, 0.0, 0.0], 52.0, facing)

    def test_penalty_misses_deadline(self, vehicle, linear_plot):
        assert not can_reach_by(vehicle, linear_plot, [20.0, 0.0, 0.0], 52.0, quarter_turn)

    def test_unreachable(self, vehicle, linear_plot):
        assert not can_reach_by(vehicle, linear_plot, [500.0, 0.0, 0.0], 1e9, facing)


# =============================================================================
# Test: ranking
# =============================================================================

class TestRankTargets:

    def test_soonest_first(self, vehicle, linear_plot):
        targets = [[30.0, 0.0, 0.0], [10.0, 0.0, 0.0], [20.0, 0.0, 0.0]]
        ranking = rank_targets(vehicle, linear_plot, targets, facing)
        assert [e.index for e in ranking] == [1, 2, 0]
        assert ranking[0].travel.seconds == pytest.approx(1.0)

    def test_unreachable_last_in_input_order(self, vehicle, linear_plot):
        targets = [[900.0, 0.0, 0.0], [10.0, 0.0, 0.0], [0.0, 800.0, 0.0]]
        ranking = rank_targets(vehicle, linear_plot, targets, facing)
        assert [e.index for e in ranking] == [1, 0, 2]
        assert ranking[0].reachable
        assert not ranking[1].reachable
        assert not ranking[2].reachable

    def test_ties_keep_input_order(self, vehicle, linear_plot):
        targets = [[0.0, 10.0, 0.0], [10.0, 0.0, 0.0]]
        ranking = rank_targets(vehicle, linear_plot, targets, facing)
        assert [e.index for e in ranking] == [0, 1]

    def test_penalty_changes_order(self, vehicle, linear_plot):
        """A target behind the vehicle can lose to a farther one ahead."""
        targets = [[-10.0, 0.0, 0.0], [11.0, 0.0, 0.0]]
        ranking = rank_targets(vehicle, linear_plot, targets, heading_error)
        assert [e.index for e in ranking] == [1, 0]

    def test_empty(self, vehicle, linear_plot):
        assert rank_targets(vehicle, linear_plot, [], facing) == []


class TestSoonestTarget:

    def test_picks_soonest(self, vehicle, linear_plot):
        best = soonest_target(vehicle, linear_plot, [[30.0, 0.0, 0.0], [15.0, 0.0, 0.0]], facing)
        assert best.index == 1
        np.testing.assert_allclose(best.target, [15.0, 0.0, 0.0])

    def test_none_reachable(self, vehicle, linear_plot):
        assert soonest_target(vehicle, linear_plot, [[900.0, 0.0, 0.0]], facing) is None

    def test_no_targets(self, vehicle, linear_plot):
        assert soonest_target(vehicle, linear_plot, [], facing) is None

    def test_with_simulated_plot(self, vehicle):
        """End to end: simulate from the vehicle and rank targets on the result."""
        plot = simulate_from_state(vehicle, 3.0, 100.0)
        best = soonest_target(vehicle, plot, [[60.0, 0.0, 0.0], [40.0, 0.0, 0.0]], heading_error)
        assert best.index == 1
        assert 0.0 < best.travel.seconds < 3.0
