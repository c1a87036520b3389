"""Value types shared by the acceleration model, simulator and planner.

Contents
--------
DistanceTimeSpeed
    One sample of a forward simulation: cumulative distance, absolute game
    time and instantaneous speed.
TrajectoryPlot
    Immutable, ordered collection of samples with interpolating queries.
TravelTime
    Explicit result of a travel-time query: elapsed seconds, or the
    ``NOT_REACHED`` marker when the target lies beyond the simulated horizon.
VehicleState
    Minimal kinematic snapshot of the vehicle as read from game state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


class TargetNotReachedError(LookupError):
    """Raised by :meth:`TravelTime.require` when the target was not reached."""


# =============================================================================
# Samples
# =============================================================================

@dataclass(frozen=True)
class DistanceTimeSpeed:
    """
    A single point of a simulated trajectory.

    Attributes:
        distance: Distance travelled since the simulation start (uu)
        time: Absolute game time of the sample (s)
        speed: Instantaneous speed at ``time`` (uu/s)
    """
    distance: float
    time: float
    speed: float


# =============================================================================
# Travel time result
# =============================================================================

@dataclass(frozen=True)
class TravelTime:
    """Elapsed seconds to a distance, or the not-reached marker (``seconds is None``)."""
    seconds: Optional[float] = None

    @property
    def reached(self) -> bool:
        return self.seconds is not None

    def plus(self, extra_seconds: float) -> TravelTime:
        """Add a delay to a reached result; the not-reached marker passes through."""
        if self.seconds is None:
            return self
        return TravelTime(self.seconds + extra_seconds)

    def arrival_time(self, start_time: float) -> Optional[float]:
        """Absolute arrival time for a simulation started at ``start_time``."""
        if self.seconds is None:
            return None
        return start_time + self.seconds

    def require(self) -> float:
        """
        Return the elapsed seconds.

        Raises:
            TargetNotReachedError: If the target is not reachable within the
                simulated horizon.
        """
        if self.seconds is None:
            raise TargetNotReachedError("Target is not reachable within the simulated horizon")
        return self.seconds

    def __repr__(self) -> str:
        if self.seconds is None:
            return "TravelTime(NOT_REACHED)"
        return f"TravelTime({self.seconds:.6g} s)"


NOT_REACHED = TravelTime()


# =============================================================================
# Trajectory plot
# =============================================================================

class TrajectoryPlot:
    """Ordered distance/time/speed samples produced by one forward simulation.

    The plot is built once from the complete sample sequence and never
    mutated. Samples are mirrored into read-only float64 arrays so the
    queries are binary searches rather than linear scans.

    Invariants
    ----------
    * At least one sample.
    * Distances and times are non-decreasing across consecutive samples.

    Parameters
    ----------
    samples : sequence of DistanceTimeSpeed
        Chronological samples; the first one is the simulation start.

    Raises
    ------
    ValueError
        If ``samples`` is empty.
    """

    def __init__(self, samples: Sequence[DistanceTimeSpeed]) -> None:
        if len(samples) == 0:
            raise ValueError("TrajectoryPlot requires at least one sample")

        self._samples: Tuple[DistanceTimeSpeed, ...] = tuple(samples)
        self._distances = self._frozen_array([s.distance for s in self._samples])
        self._times = self._frozen_array([s.time for s in self._samples])
        self._speeds = self._frozen_array([s.speed for s in self._samples])

    @staticmethod
    def _frozen_array(values) -> np.ndarray:
        array = np.asarray(values, dtype=np.float64)
        array.flags.writeable = False
        return array

    # -- container protocol ------------------------------------------------

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[DistanceTimeSpeed]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> DistanceTimeSpeed:
        return self._samples[index]

    def __repr__(self) -> str:
        return (
            f"TrajectoryPlot({len(self)} samples, "
            f"{self.end.distance:.1f} uu in {self.duration:.2f} s)"
        )

    # -- accessors ---------------------------------------------------------

    @property
    def samples(self) -> Tuple[DistanceTimeSpeed, ...]:
        return self._samples

    @property
    def start(self) -> DistanceTimeSpeed:
        return self._samples[0]

    @property
    def end(self) -> DistanceTimeSpeed:
        return self._samples[-1]

    @property
    def duration(self) -> float:
        """Seconds covered by the plot."""
        return self.end.time - self.start.time

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def speeds(self) -> np.ndarray:
        return self._speeds

    # -- queries -----------------------------------------------------------

    def travel_time(self, distance: float) -> TravelTime:
        """Seconds elapsed from the start until ``distance`` is covered.

        Linearly interpolates time between the two samples whose distances
        bracket ``distance``.

        Parameters
        ----------
        distance : float
            Distance from the start position (uu).

        Returns
        -------
        TravelTime
            Zero elapsed for ``distance <= 0``; ``NOT_REACHED`` when
            ``distance`` exceeds the last sample's distance.
        """
        if distance <= 0.0:
            return TravelTime(0.0)
        if distance > self._distances[-1]:
            return NOT_REACHED

        idx = int(np.searchsorted(self._distances, distance, side='left'))
        if idx == 0:
            return TravelTime(0.0)

        # distances[idx - 1] < distance <= distances[idx], so the span is positive.
        lower = self._samples[idx - 1]
        upper = self._samples[idx]

        fraction = (distance - lower.distance) / (upper.distance - lower.distance)
        time = lower.time + fraction * (upper.time - lower.time)
        return TravelTime(time - self.start.time)

    def motion_after_duration(self, seconds: float) -> Optional[DistanceTimeSpeed]:
        """Interpolated sample ``seconds`` after the start.

        Returns the start sample for ``seconds <= 0`` and ``None`` when the
        requested instant lies past the end of the plot.
        """
        if seconds <= 0.0:
            return self.start

        target_time = self.start.time + seconds
        if target_time > self._times[-1]:
            return None

        idx = int(np.searchsorted(self._times, target_time, side='left'))
        lower = self._samples[idx - 1]
        upper = self._samples[idx]

        fraction = (target_time - lower.time) / (upper.time - lower.time)
        return DistanceTimeSpeed(
            distance=lower.distance + fraction * (upper.distance - lower.distance),
            time=target_time,
            speed=lower.speed + fraction * (upper.speed - lower.speed),
        )

    # -- export ------------------------------------------------------------

    def to_dataframe(self) -> pd.DataFrame:
        """Samples as a DataFrame with distance, time, elapsed and speed columns."""
        return pd.DataFrame({
            'distance': self._distances,
            'time': self._times,
            'elapsed': self._times - self._times[0],
            'speed': self._speeds,
        })


# =============================================================================
# Vehicle state
# =============================================================================

@dataclass(frozen=True, eq=False)
class VehicleState:
    """
    Kinematic snapshot of the vehicle for one game tick.

    Attributes:
        position: World position (uu), shape (3,)
        velocity: World velocity (uu/s), shape (3,)
        time: Game time of the snapshot (s)
    """
    position: np.ndarray
    velocity: np.ndarray
    time: float = 0.0
    speed: float = field(init=False)

    def __post_init__(self) -> None:
        position = np.array(self.position, dtype=np.float64)
        velocity = np.array(self.velocity, dtype=np.float64)
        if position.shape != (3,) or velocity.shape != (3,):
            raise ValueError(
                f"position and velocity must have shape (3,), got "
                f"{position.shape} and {velocity.shape}"
            )
        position.flags.writeable = False
        velocity.flags.writeable = False
        object.__setattr__(self, 'position', position)
        object.__setattr__(self, 'velocity', velocity)
        object.__setattr__(self, 'speed', float(np.linalg.norm(velocity)))

    def distance_to(self, point) -> float:
        """Straight-line distance from the vehicle to ``point``."""
        return float(np.linalg.norm(np.asarray(point, dtype=np.float64) - self.position))
