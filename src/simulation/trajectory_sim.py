"""
===============================================================================
ACCELERATION MODEL - Trajectory Simulator
===============================================================================
Fixed-step forward simulation of straight-line ground travel.  Produces a
TrajectoryPlot of (distance, time, speed) samples from the current instant to
the end of a time horizon.

Every iteration chooses one of two tactics:

    1. FLIP       -- boost is exhausted and a front flip would not carry the
                     vehicle past the flip cutoff distance.  Advances time by
                     the flip duration and jumps distance and speed.
    2. ACCELERATE -- one time step of throttle (plus boost while any remains),
                     speed clamped at the supersonic ceiling.

Once an accelerate step reaches supersonic speed the rest of the horizon is
constant-speed travel, so a single closing sample is appended at the horizon
end and stepping stops.
===============================================================================
"""

import logging
import math
from typing import List

import numpy as np

from core.config import DEFAULT_CONFIG, AccelerationModelConfig
from core.data_structures import DistanceTimeSpeed, TrajectoryPlot, VehicleState
from dynamics.acceleration_model import StepKind, acceleration, choose_step

logger = logging.getLogger(__name__)

# Seconds within this margin of the horizon count as having reached it.
HORIZON_TOLERANCE = 1e-9


def simulate_acceleration(
    initial_speed: float,
    start_time: float,
    horizon: float,
    boost_budget: float,
    flip_cutoff_distance: float = math.inf,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> TrajectoryPlot:
    """
    Simulate straight-line acceleration from ``initial_speed``.

    Args:
        initial_speed: Speed at ``start_time`` (uu/s).
        start_time: Absolute game time of the first sample (s).
        horizon: Seconds to simulate.  Non-positive horizons yield a plot
            holding only the initial sample.
        boost_budget: Boost available for the run.  Zero or negative means
            boost is exhausted from the first step.
        flip_cutoff_distance: Flips that would end at or beyond this distance
            are not taken.  Pass 0 to forbid flips entirely.
        config: Model tuning.

    Returns:
        TrajectoryPlot whose first sample is (0, start_time, initial_speed).
    """
    dt = config.time_step
    supersonic = config.supersonic_speed

    distance_so_far = 0.0
    seconds_so_far = 0.0
    speed = initial_speed
    boost_remaining = boost_budget
    flips = 0

    samples: List[DistanceTimeSpeed] = [DistanceTimeSpeed(0.0, start_time, speed)]

    while seconds_so_far < horizon - HORIZON_TOLERANCE:
        kind, flip = choose_step(distance_so_far, speed, boost_remaining, flip_cutoff_distance, config)

        if kind is StepKind.FLIP:
            seconds_so_far += flip.seconds
            distance_so_far += flip.distance
            speed = min(speed + flip.speed_gain, supersonic)
            flips += 1
            samples.append(DistanceTimeSpeed(distance_so_far, start_time + seconds_so_far, speed))
            continue

        speed += acceleration(speed, boost_remaining > 0, config) * dt
        if speed > supersonic:
            speed = supersonic
        distance_so_far += speed * dt
        seconds_so_far += dt
        boost_remaining -= config.boost_consumed_per_second * dt
        samples.append(DistanceTimeSpeed(distance_so_far, start_time + seconds_so_far, speed))

        if speed >= supersonic:
            # Constant speed from here on; close the plot at the horizon end.
            seconds_remaining = max(0.0, horizon - seconds_so_far)
            samples.append(DistanceTimeSpeed(
                distance_so_far + supersonic * seconds_remaining,
                start_time + max(horizon, seconds_so_far),
                supersonic,
            ))
            break

    plot = TrajectoryPlot(samples)
    logger.debug(
        "Simulated %.2f s from %.1f uu/s with boost %.1f: %d samples, %d flips, "
        "distance=%.1f uu, final speed=%.1f uu/s",
        horizon, initial_speed, boost_budget, len(plot), flips,
        plot.end.distance, plot.end.speed,
    )
    return plot


def simulate_from_state(
    vehicle: VehicleState,
    horizon: float,
    boost_budget: float,
    flip_cutoff_distance: float = math.inf,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> TrajectoryPlot:
    """Simulate from the vehicle's current speed and game time."""
    return simulate_acceleration(
        vehicle.speed, vehicle.time, horizon, boost_budget,
        flip_cutoff_distance=flip_cutoff_distance, config=config,
    )


def flip_step_indices(plot: TrajectoryPlot, config: AccelerationModelConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Indices i such that the step from sample i to sample i + 1 is a flip.

    A flip is recognised by its signature: a time jump of the flip duration
    covering exactly the flip distance for the speed it started from.
    """
    speeds = plot.speeds
    boost = config.front_flip_speed_boost
    flip_distances = ((speeds[:-1] * 2 + boost) / 2) * config.front_flip_seconds
    flip_speeds = np.minimum(speeds[:-1] + boost, config.supersonic_speed)
    is_flip = (
        np.isclose(np.diff(plot.times), config.front_flip_seconds)
        & np.isclose(np.diff(plot.distances), flip_distances)
        & np.isclose(speeds[1:], flip_speeds)
    )
    return np.flatnonzero(is_flip)


def count_flips(plot: TrajectoryPlot, config: AccelerationModelConfig = DEFAULT_CONFIG) -> int:
    """Number of flip steps in a plot."""
    return int(len(flip_step_indices(plot, config)))
