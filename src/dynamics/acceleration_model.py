"""
===============================================================================
ACCELERATION MODEL - Ground Vehicle Acceleration and Front Flip
===============================================================================
Piecewise acceleration curve of a ground vehicle and the distance/speed gain
of a single front flip.

Acceleration regimes (speed v, boost available b):

    v >= supersonic                -> 0
    v >= medium and not b          -> 0
    v <  medium                    -> sub_medium (+ incremental_boost if b)
    medium <= v < supersonic and b -> incremental_boost

Front flip, from speed v:

    distance = ((2 v + flip_speed_boost) / 2) * flip_seconds
    seconds  = flip_seconds
    speed    = v + flip_speed_boost   (capped at supersonic by the simulator)

The flip distance is an empirical fit, not constant-acceleration kinematics.

All functions are pure: every parameter comes from the arguments and the
frozen configuration.
===============================================================================
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from core.config import DEFAULT_CONFIG, AccelerationModelConfig


class StepKind(Enum):
    """Tactic chosen for one simulation step."""
    FLIP = auto()        # Fixed-duration front flip
    ACCELERATE = auto()  # One time step of throttle (and boost if available)


@dataclass(frozen=True)
class FlipOutcome:
    """
    Effect of one front flip.

    Attributes:
        distance: Distance covered during the flip (uu)
        seconds: Duration of the flip (s)
        speed_gain: Speed added by the flip (uu/s)
    """
    distance: float
    seconds: float
    speed_gain: float


def acceleration(
    speed: float,
    has_boost: bool,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> float:
    """
    Forward acceleration at ``speed`` (uu/s^2).

    Args:
        speed: Current speed (uu/s).
        has_boost: Whether boost is available for this step.
        config: Model tuning.

    Returns:
        Non-negative acceleration.
    """
    if speed >= config.supersonic_speed or (not has_boost and speed >= config.medium_speed):
        return 0.0

    accel = 0.0
    if speed < config.medium_speed:
        accel += config.sub_medium_acceleration
    if has_boost:
        accel += config.incremental_boost_acceleration
    return accel


def front_flip(speed: float, config: AccelerationModelConfig = DEFAULT_CONFIG) -> FlipOutcome:
    """Distance, time and speed delta of one front flip started at ``speed``."""
    boost = config.front_flip_speed_boost
    seconds = config.front_flip_seconds
    return FlipOutcome(
        distance=((speed * 2 + boost) / 2) * seconds,
        seconds=seconds,
        speed_gain=boost,
    )


def choose_step(
    distance_so_far: float,
    speed: float,
    boost_remaining: float,
    flip_cutoff_distance: float,
    config: AccelerationModelConfig = DEFAULT_CONFIG,
) -> Tuple[StepKind, FlipOutcome]:
    """
    Pick the tactic for the next step.

    A flip is chosen only once boost is exhausted and the flip would finish
    short of ``flip_cutoff_distance``; otherwise the vehicle keeps
    accelerating continuously.

    Returns:
        (kind, flip): the chosen step kind and the hypothetical flip outcome
        (which the caller applies only for ``StepKind.FLIP``).
    """
    flip = front_flip(speed, config)
    if boost_remaining <= 0 and distance_so_far + flip.distance < flip_cutoff_distance:
        return StepKind.FLIP, flip
    return StepKind.ACCELERATE, flip
