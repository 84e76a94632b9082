"""
Spatial enrichment of street segments from auxiliary open datasets.

Two passes, both joined through rounded-coordinate grids:

- sidewalk condition ratings raise a segment's ``infra`` score
- street lighting poles near a segment's start set its ``light`` score

Both passes only ever raise scores and silently skip malformed records.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import coordinate_distance
from ...data.geometry_parser import parse_line_geometry, parse_point_geometry
from ...data.models import StreetSegment
from .spatial_grid import SpatialGridIndex

logger = logging.getLogger(__name__)

GEOMETRY_FIELD = 'Geom'
CONDITION_FIELD = 'Sidewalk Condition Index Rating'

CONDITION_SCORES = {
    'Very Good': 9.0,
    'Good': 7.0,
    'Fair': 5.0,
    'Poor': 3.0,
}
DEFAULT_CONDITION_SCORE = 1.0


def condition_score(condition: Optional[str]) -> float:
    """Map a sidewalk condition rating to the ordinal 0-10 scale."""
    if not isinstance(condition, str):
        return DEFAULT_CONDITION_SCORE
    return CONDITION_SCORES.get(condition.strip(), DEFAULT_CONDITION_SCORE)


def build_condition_index(records: Iterable[Mapping[str, Any]],
                          precision: int) -> SpatialGridIndex[float]:
    """Bucket condition scores under both endpoints of each rated line."""
    index: SpatialGridIndex[float] = SpatialGridIndex(precision)
    skipped = 0

    for record in records:
        try:
            coords = parse_line_geometry(record.get(GEOMETRY_FIELD))
            score = condition_score(record.get(CONDITION_FIELD))
        except AttributeError:
            coords = []
        if len(coords) < 2:
            skipped += 1
            continue

        start, end = coords[0], coords[-1]
        index.insert(start, score)
        if index.key(end) != index.key(start):
            index.insert(end, score)

    logger.debug(f"Condition index built: {index.stats()}, {skipped} records skipped")
    return index


def enrich_with_conditions(segments: Iterable[StreetSegment],
                           records: Iterable[Mapping[str, Any]],
                           config: Optional[RoutingConfig] = None) -> List[StreetSegment]:
    """
    Raise each segment's ``infra`` score to the best matching condition rating.

    A rating matches when one of its line's endpoints falls in the same
    grid bucket as the segment's start or end.

    Args:
        segments: Segments to enrich
        records: Parsed condition rows with ``Geom`` and rating fields
        config: Routing configuration (grid precision)

    Returns:
        New list of segments; unmatched segments are returned unchanged
    """
    config = config or RoutingConfig()
    index = build_condition_index(records, config.condition_grid_precision)

    enriched = []
    matched = 0
    for segment in segments:
        scores = index.query(segment.start) + index.query(segment.end)
        if scores:
            matched += 1
            segment = segment.with_scores(segment.scores.raised(infra=max(scores)))
        enriched.append(segment)

    logger.info(f"Condition enrichment matched {matched}/{len(enriched)} segments")
    return enriched


def build_lighting_index(records: Iterable[Mapping[str, Any]],
                         precision: int) -> SpatialGridIndex[None]:
    """Bucket lighting pole locations on a coarse grid."""
    index: SpatialGridIndex[None] = SpatialGridIndex(precision)
    skipped = 0

    for record in records:
        try:
            point = parse_point_geometry(record.get(GEOMETRY_FIELD))
        except AttributeError:
            point = None
        if point is None:
            skipped += 1
            continue
        index.insert(point, None)

    logger.debug(f"Lighting index built: {index.stats()}, {skipped} records skipped")
    return index


def count_nearby_lights(index: SpatialGridIndex, coord, radius_km: float) -> int:
    """Count indexed points within ``radius_km`` of ``coord``."""
    return sum(
        1 for point, _ in index.candidates(coord, radius_km)
        if coordinate_distance(coord, point) < radius_km
    )


def enrich_with_lighting(segments: Iterable[StreetSegment],
                         records: Iterable[Mapping[str, Any]],
                         config: Optional[RoutingConfig] = None) -> List[StreetSegment]:
    """
    Set each segment's ``light`` score from the poles around its start.

    ``light = min(max_light_score, default_light_score + pole_count)``,
    never lowering an existing score.
    """
    config = config or RoutingConfig()
    index = build_lighting_index(records, config.lighting_grid_precision)

    enriched = []
    lit = 0
    for segment in segments:
        count = count_nearby_lights(index, segment.start, config.lighting_radius_km)
        if count:
            lit += 1
        light = min(config.max_light_score, config.default_light_score + count)
        enriched.append(segment.with_scores(segment.scores.raised(light=light)))

    logger.info(f"Lighting enrichment: {lit}/{len(enriched)} segments near {len(index)} poles")
    return enriched
