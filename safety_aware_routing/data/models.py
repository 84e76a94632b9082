"""
Street segment data model shared by the loader, enrichment and graph builder.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple

Coordinate = Tuple[float, float]  # (lat, lon) in decimal degrees


@dataclass(frozen=True)
class SegmentScores:
    """Per-segment safety attributes on a roughly 0-10 scale."""

    infra: float = 4.0
    light: float = 5.0
    crime: float = 3.0
    amenity: float = 4.0
    disruption: float = 0.0  # penalty magnitude

    def raised(self, **scores: float) -> 'SegmentScores':
        """
        Return a copy where each given score is raised to at least the new value.

        Scores are never lowered, which keeps enrichment passes monotone.
        """
        updates = {name: max(getattr(self, name), value) for name, value in scores.items()}
        return replace(self, **updates)


@dataclass(frozen=True)
class StreetSegment:
    """
    A polyline of street or path geometry with its routing metadata.

    ``coordinates`` holds at least two (lat, lon) points; ``length`` is in
    kilometres. Instances are immutable: enrichment produces new segments.
    """

    id: str
    coordinates: Tuple[Coordinate, ...]
    length: float
    street_name: str = ''
    bikeway_type: str = ''
    speed_limit: int = 30
    scores: SegmentScores = field(default_factory=SegmentScores)

    def __post_init__(self):
        if len(self.coordinates) < 2:
            raise ValueError(f"Segment {self.id} needs at least 2 coordinates")

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]

    def with_scores(self, scores: SegmentScores) -> 'StreetSegment':
        return replace(self, scores=scores)
