"""
===============================================================================
ACCELERATION MODEL - Configuration
===============================================================================
Immutable tuning parameters for the acceleration model, loadable from the
``acceleration_model`` section of a YAML file.

The defaults are the constants in :mod:`core.constants`. A configuration is a
frozen dataclass so it can be shared freely between threads and pickled into
worker processes.
===============================================================================
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from core.constants import (
    BOOST_CONSUMED_PER_SECOND,
    FRONT_FLIP_SECONDS,
    FRONT_FLIP_SPEED_BOOST,
    INCREMENTAL_BOOST_ACCELERATION,
    MEDIUM_SPEED,
    STEER_PENALTY_COEFFICIENT,
    SUB_MEDIUM_ACCELERATION,
    SUPERSONIC_SPEED,
    TIME_STEP,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / 'config' / 'acceleration_model.yaml'
CONFIG_SECTION = 'acceleration_model'


@dataclass(frozen=True)
class AccelerationModelConfig:
    """
    Tuning parameters of the ground vehicle acceleration model.

    Attributes:
        time_step: Fixed simulation step (s)
        supersonic_speed: Hard speed ceiling (uu/s)
        medium_speed: Speed above which throttle alone no longer accelerates (uu/s)
        sub_medium_acceleration: Throttle acceleration below medium speed (uu/s^2)
        incremental_boost_acceleration: Extra acceleration while boosting (uu/s^2)
        boost_consumed_per_second: Boost drained per second of boosting
        front_flip_seconds: Duration of a front flip (s)
        front_flip_speed_boost: Speed gained by a front flip (uu/s)
        steer_penalty_coefficient: Seconds of delay per radian of heading
            error per unit of speed
    """
    time_step: float = TIME_STEP
    supersonic_speed: float = SUPERSONIC_SPEED
    medium_speed: float = MEDIUM_SPEED
    sub_medium_acceleration: float = SUB_MEDIUM_ACCELERATION
    incremental_boost_acceleration: float = INCREMENTAL_BOOST_ACCELERATION
    boost_consumed_per_second: float = BOOST_CONSUMED_PER_SECOND
    front_flip_seconds: float = FRONT_FLIP_SECONDS
    front_flip_speed_boost: float = FRONT_FLIP_SPEED_BOOST
    steer_penalty_coefficient: float = STEER_PENALTY_COEFFICIENT

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not value > 0.0:
                raise ValueError(f"{f.name} must be positive, got {value}")
        if self.medium_speed > self.supersonic_speed:
            raise ValueError(
                f"medium_speed ({self.medium_speed}) must not exceed "
                f"supersonic_speed ({self.supersonic_speed})"
            )

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'AccelerationModelConfig':
        """
        Build a config from a mapping, overriding only the keys present.

        Raises:
            ValueError: If the mapping contains an unknown key or a value
                that is not a positive number.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown acceleration model settings: {', '.join(unknown)}")
        converted = {}
        for key, value in values.items():
            try:
                converted[key] = float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{key} must be a number, got {value!r}") from exc
        return cls(**converted)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_CONFIG = AccelerationModelConfig()


def load_config(config_path: Optional[Union[str, Path]] = None) -> AccelerationModelConfig:
    """
    Load the acceleration model configuration from YAML.

    Args:
        config_path: Path to a YAML file with an ``acceleration_model``
            section. Defaults to config/acceleration_model.yaml at the
            project root; if that default file is absent the built-in
            defaults are returned.

    Returns:
        AccelerationModelConfig built from the file's section.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        ValueError: If the document is not a mapping, or the section holds
            unknown keys or invalid values.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.warning("No configuration at %s, using built-in defaults", DEFAULT_CONFIG_PATH)
            return DEFAULT_CONFIG
        config_path = DEFAULT_CONFIG_PATH

    logger.info("Loading configuration from: %s", config_path)
    with open(config_path, 'r') as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise ValueError(f"{config_path} must hold a mapping, got {type(document).__name__}")
    section = document.get(CONFIG_SECTION, {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' section must be a mapping, got {type(section).__name__}")
    return AccelerationModelConfig.from_dict(section)
