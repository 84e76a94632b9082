"""
Edge cost strategies for the shortest-path search.

Every strategy is a callable ``(segment, distance_km) -> cost``. The
safety-weighted strategy is built from a ``WeightProfile`` so the time of day
is resolved once per query, outside the search.

Safety-weighted cost
--------------------
The safety score is the linear combination::

    2.5*infra + light_w*light + 1.5*amenity + crime_w*crime - 2.0*disruption

with ``crime_w = -3.0 * crime_multiplier``. In the default ``exponential``
mode the score scales the distance::

    cost = min_edge_cost + distance * exp(-score / safety_scale)

which is strictly positive and strictly decreasing in every positive score
(strictly increasing in crime and disruption) for any edge with non-zero
length. The ``bonus`` mode keeps the older ``max(min_edge_cost,
distance - bonus_factor * score)`` form.
"""

import math
from typing import Callable, Optional

from ...config.routing_config import RoutingConfig
from ...config.weight_profile_factory import CostMode, WeightProfile
from ...data.models import SegmentScores, StreetSegment

EdgeCost = Callable[[StreetSegment, float], float]

# keeps math.exp finite for absurd score inputs
_MAX_EXPONENT = 700.0


def distance_cost(segment: StreetSegment, distance: float) -> float:
    """Edge cost for the fastest route: the physical distance."""
    return distance


def safety_score(scores: SegmentScores, profile: WeightProfile,
                 config: Optional[RoutingConfig] = None) -> float:
    """Weighted safety score of a segment under a time-of-day profile."""
    config = config or RoutingConfig()
    crime_weight = config.crime_weight * profile.crime_multiplier

    return (config.infra_weight * scores.infra +
            profile.light_weight * scores.light +
            config.amenity_weight * scores.amenity +
            crime_weight * scores.crime +
            config.disruption_weight * scores.disruption)


def safety_cost(distance: float, score: float, profile: WeightProfile,
                config: Optional[RoutingConfig] = None) -> float:
    """Combine distance and safety score into a strictly positive edge cost."""
    config = config or RoutingConfig()

    if profile.cost_mode is CostMode.BONUS:
        return max(config.min_edge_cost, distance - score * config.safety_bonus_factor)

    exponent = max(-_MAX_EXPONENT, min(_MAX_EXPONENT, -score / config.safety_scale))
    return config.min_edge_cost + max(distance, 0.0) * math.exp(exponent)


def make_safety_cost(profile: WeightProfile,
                     config: Optional[RoutingConfig] = None) -> EdgeCost:
    """Build the safety-weighted edge cost strategy for one query."""
    config = config or RoutingConfig()

    def _cost(segment: StreetSegment, distance: float) -> float:
        score = safety_score(segment.scores, profile, config)
        return safety_cost(distance, score, profile, config)

    return _cost
