"""
Configuration management for safety-aware routing.
"""

from .routing_config import RoutingConfig
from .weight_profile_factory import (
    CostMode,
    Regime,
    WeightProfile,
    is_daytime,
    resolve_hour,
    weight_profile_for_time
)

__all__ = [
    'RoutingConfig',
    'CostMode',
    'Regime',
    'WeightProfile',
    'is_daytime',
    'resolve_hour',
    'weight_profile_for_time'
]
