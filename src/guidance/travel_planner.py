"""
===============================================================================
ACCELERATION MODEL - Travel Planner
===============================================================================
Turns a simulated TrajectoryPlot into answers a behaviour planner can act on:

    - How long until the vehicle reaches a target point?
    - Can it get there before a deadline?
    - Which of several candidate targets is reachable soonest?

Travel estimate for a target at straight-line distance d:

    travel_seconds = plot.travel_time(d) + steer_penalty
    steer_penalty  = |correction_angle| * speed * steer_penalty_coefficient

The correction angle is the signed heading change needed to face the target.
It comes from the caller's steering capability, passed in as a callable
``correction_angle(vehicle, target) -> radians``.

Sign conventions and units:
    - Distances in uu, speeds in uu/s, times in seconds
    - Angles in radians
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from core.config import DEFAULT_CONFIG, AccelerationModelConfig
from core.data_structures import TrajectoryPlot, TravelTime, VehicleState

logger = logging.getLogger(__name__)

CorrectionAngleFn = Callable[[VehicleState, np.ndarray], float]


@dataclass(frozen=True, eq=False)
class TargetEstimate:
    """
    Travel estimate for one candidate target.

    Attributes:
        index: Position of the target in the caller's sequence
        target: Target point (uu), shape (3,)
        travel: Estimated travel time including the steering penalty
    """
    index: int
    target: np.ndarray
    travel: TravelTime

    @property
    def reachable(self) -> bool:
        return self.travel.reached


def steer_penalty_seconds(
    correction_angle_rad: float,
    current_speed: float,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> float:
    """
    Extra seconds attributed to not yet facing the target.

    Args:
        correction_angle_rad: Signed heading change needed to face the target.
        current_speed: Current speed (uu/s).
        config: Model tuning.

    Returns:
        Non-negative penalty in seconds.
    """
    return abs(correction_angle_rad) * current_speed * config.steer_penalty_coefficient


def travel_seconds(
    plot: TrajectoryPlot,
    distance: float,
    correction_angle_rad: float,
    current_speed: float,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> TravelTime:
    """Plot travel time to ``distance`` plus the steering penalty."""
    penalty = steer_penalty_seconds(correction_angle_rad, current_speed, config)
    return plot.travel_time(distance).plus(penalty)


def travel_seconds_to(
    vehicle: VehicleState,
    plot: TrajectoryPlot,
    target,
    correction_angle: CorrectionAngleFn,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> TravelTime:
    """
    Estimated seconds for ``vehicle`` to reach ``target``.

    Args:
        vehicle: Current vehicle state.
        plot: Acceleration plot simulated from ``vehicle``.
        target: Target point (uu), shape (3,).
        correction_angle: Steering capability returning the signed angle
            (rad) needed to face ``target``.
        config: Model tuning.

    Returns:
        TravelTime, ``NOT_REACHED`` when the target lies beyond the plot.
    """
    target = np.asarray(target, dtype=np.float64)
    distance = vehicle.distance_to(target)
    angle = correction_angle(vehicle, target)
    travel = travel_seconds(plot, distance, angle, vehicle.speed, config)
    logger.debug(
        "Travel to target at %.1f uu (correction %.3f rad): %r",
        distance, angle, travel,
    )
    return travel


def can_reach_by(
    vehicle: VehicleState,
    plot: TrajectoryPlot,
    target,
    deadline: float,
    correction_angle: CorrectionAngleFn,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> bool:
    """True if ``target`` is reached no later than game time ``deadline``."""
    travel = travel_seconds_to(vehicle, plot, target, correction_angle, config)
    arrival = travel.arrival_time(vehicle.time)
    return arrival is not None and arrival <= deadline


def rank_targets(
    vehicle: VehicleState,
    plot: TrajectoryPlot,
    targets: Sequence,
    correction_angle: CorrectionAngleFn,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> List[TargetEstimate]:
    """
    Order candidate targets by estimated travel time.

    Reachable targets come first, soonest first; ties keep input order.
    Unreachable targets follow in input order.
    """
    estimates = [
        TargetEstimate(
            index=i,
            target=np.asarray(target, dtype=np.float64),
            travel=travel_seconds_to(vehicle, plot, target, correction_angle, config),
        )
        for i, target in enumerate(targets)
    ]
    reachable = sorted(
        (e for e in estimates if e.reachable),
        key=lambda e: (e.travel.seconds, e.index),
    )
    unreachable = [e for e in estimates if not e.reachable]
    return reachable + unreachable


def soonest_target(
    vehicle: VehicleState,
    plot: TrajectoryPlot,
    targets: Sequence,
    correction_angle: CorrectionAngleFn,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> Optional[TargetEstimate]:
    """The candidate reached soonest, or ``None`` if none is reachable."""
    ranking = rank_targets(vehicle, plot, targets, correction_angle, config)
    if not ranking or not ranking[0].reachable:
        return None
    return ranking[0]
