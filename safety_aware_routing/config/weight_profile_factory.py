"""
Factory for the time-of-day weight profiles used by safety-weighted routing.

A query time resolves to a day or night regime and each regime selects a
``WeightProfile``. The profile is computed once per query and handed to the
cost function, so the shortest-path search never looks at the clock.

Day/night uses a fixed hour window (07:00-18:59 by default, see
``RoutingConfig.day_start_hour`` / ``day_end_hour``) rather than a solar
calculation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .routing_config import RoutingConfig

logger = logging.getLogger(__name__)

TimeOfDay = Union[int, float, str, datetime, None]


class Regime(Enum):
    """Lighting regime a query time falls into."""
    DAY = "day"
    NIGHT = "night"


class CostMode(Enum):
    """How distance and safety score combine into an edge cost."""
    EXPONENTIAL = "exponential"
    BONUS = "bonus"


@dataclass(frozen=True)
class WeightProfile:
    """Weights that vary with the time of day."""
    regime: Regime
    light_weight: float
    crime_multiplier: float
    cost_mode: CostMode

    @property
    def is_night(self) -> bool:
        return self.regime is Regime.NIGHT


def resolve_hour(time: TimeOfDay, config: Optional[RoutingConfig] = None) -> int:
    """
    Resolve a query time to an hour of day (0-23).

    Accepts an hour as int/float/str, an ISO 8601 timestamp string or a
    ``datetime``. Missing or unparseable values fall back to
    ``config.default_hour``; out-of-range hours wrap modulo 24.
    """
    config = config or RoutingConfig()

    if time is None:
        return config.default_hour
    if isinstance(time, datetime):
        return time.hour

    try:
        return int(float(time)) % 24
    except (TypeError, ValueError, OverflowError):
        pass

    if isinstance(time, str):
        try:
            return datetime.fromisoformat(time.strip()).hour
        except ValueError:
            pass

    logger.debug(f"Unparseable time {time!r}, using default hour {config.default_hour}")
    return config.default_hour


def is_daytime(hour: int, config: Optional[RoutingConfig] = None) -> bool:
    """Whether an hour falls inside the configured daytime window."""
    config = config or RoutingConfig()
    return config.day_start_hour <= hour <= config.day_end_hour


def weight_profile_for_time(time: TimeOfDay,
                            config: Optional[RoutingConfig] = None) -> WeightProfile:
    """
    Build the weight profile for a query time.

    Night keeps the full lighting weight and amplifies the crime penalty;
    day drops lighting to a token weight and keeps the baseline crime weight.
    """
    config = config or RoutingConfig()
    hour = resolve_hour(time, config)
    cost_mode = CostMode(config.cost_mode)

    if is_daytime(hour, config):
        return WeightProfile(
            regime=Regime.DAY,
            light_weight=config.day_light_weight,
            crime_multiplier=1.0,
            cost_mode=cost_mode
        )

    return WeightProfile(
        regime=Regime.NIGHT,
        light_weight=config.light_weight,
        crime_multiplier=config.night_crime_multiplier,
        cost_mode=cost_mode
    )
