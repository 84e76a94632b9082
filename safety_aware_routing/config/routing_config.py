"""
Configuration management for safety-aware routing parameters.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class RoutingConfig:
    """Configuration parameters for graph building, enrichment and routing."""

    # Graph Building
    node_precision: int = 6  # decimals used to merge segment endpoints into nodes (~0.1m)
    segment_length_in_meters: bool = True  # source 'Segment length' column unit
    default_speed_limit: int = 30

    # Default Segment Scores
    bikeway_infra_scores: Dict[str, float] = field(default_factory=lambda: {
        'Protected Bike Lanes': 9.0,
        'Painted Lanes': 6.0,
    })
    default_infra_score: float = 4.0
    aaa_amenity_score: float = 8.0     # all-ages-and-abilities network
    default_amenity_score: float = 4.0
    default_light_score: float = 5.0
    default_crime_score: float = 3.0   # no crime dataset is joined yet
    default_disruption_score: float = 0.0

    # Spatial Enrichment
    condition_grid_precision: int = 4  # ~10m buckets for sidewalk condition joins
    lighting_grid_precision: int = 3   # ~100m buckets for lighting pole lookup
    lighting_radius_km: float = 0.05   # poles counted within 50m of a segment start
    max_light_score: float = 10.0

    # Safety Score Weights
    infra_weight: float = 2.5
    light_weight: float = 2.0
    amenity_weight: float = 1.5
    crime_weight: float = -3.0
    disruption_weight: float = -2.0

    # Day/Night Regime
    day_start_hour: int = 7   # first daytime hour (inclusive)
    day_end_hour: int = 18    # last daytime hour (inclusive)
    default_hour: int = 12
    day_light_weight: float = 0.1
    night_crime_multiplier: float = 1.5

    # Edge Cost
    cost_mode: str = 'exponential'  # 'exponential' or 'bonus'
    safety_scale: float = 20.0      # safety points per e-fold change in cost
    safety_bonus_factor: float = 0.1  # km subtracted per safety point in 'bonus' mode
    min_edge_cost: float = 0.001    # km, keeps every edge cost strictly positive

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.node_precision < 0:
            raise ValueError("node_precision must be non-negative")
        if self.condition_grid_precision < 0 or self.lighting_grid_precision < 0:
            raise ValueError("grid precisions must be non-negative")
        if self.lighting_radius_km <= 0:
            raise ValueError("lighting_radius_km must be positive")
        if not 0 <= self.day_start_hour <= self.day_end_hour <= 23:
            raise ValueError("day hours must satisfy 0 <= day_start_hour <= day_end_hour <= 23")
        if not 0 <= self.default_hour <= 23:
            raise ValueError("default_hour must be between 0 and 23")
        if self.crime_weight > 0:
            raise ValueError("crime_weight must be negative or zero")
        if self.disruption_weight > 0:
            raise ValueError("disruption_weight must be negative or zero")
        if self.night_crime_multiplier < 1.0:
            raise ValueError("night_crime_multiplier must be >= 1.0")
        if self.cost_mode not in ('exponential', 'bonus'):
            raise ValueError(f"Unknown cost_mode: {self.cost_mode}")
        if self.safety_scale <= 0:
            raise ValueError("safety_scale must be positive")
        if self.min_edge_cost <= 0:
            raise ValueError("min_edge_cost must be strictly positive")

    @classmethod
    def create_default_config(cls) -> 'RoutingConfig':
        """Create the default configuration."""
        return cls()

    @classmethod
    def create_legacy_config(cls) -> 'RoutingConfig':
        """
        Create configuration reproducing the 'distance minus safety bonus' cost.

        Edge cost is ``max(0.1, distance - 0.1 * safety)``. Safe short edges all
        collapse onto the 0.1 floor, so the cost is no longer strictly monotone
        in the safety score there.
        """
        return cls(
            cost_mode='bonus',
            safety_bonus_factor=0.1,
            min_edge_cost=0.1
        )

    @classmethod
    def create_night_cautious_config(cls) -> 'RoutingConfig':
        """Create configuration that leans harder on lighting and crime after dark."""
        return cls(
            night_crime_multiplier=2.0,
            safety_scale=12.0,      # stronger preference for safe edges
            lighting_radius_km=0.075
        )
