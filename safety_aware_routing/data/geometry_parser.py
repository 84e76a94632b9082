"""
Parsing of GeoJSON geometry strings embedded in delimited-text records.

Open data exports quote the geometry column and double every inner quote,
e.g. ``"{""type"": ""LineString"", ""coordinates"": [[-123.1, 49.2], ...]}"``.
The parsers here undo that quoting, read the geometry with shapely and return
coordinates in (lat, lon) order. Any failure yields an empty result so the
caller can skip the record.
"""

import json
import logging
from typing import List, Optional

from shapely.errors import ShapelyError
from shapely.geometry import LineString, MultiLineString, Point, shape

from .models import Coordinate

logger = logging.getLogger(__name__)

_PARSE_ERRORS = (ValueError, TypeError, KeyError, AttributeError, IndexError, ShapelyError)


def _clean_geometry_string(geom_string: str) -> str:
    """Strip outer quoting artifacts and unescape doubled quotes."""
    cleaned = geom_string.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in ('"', "'"):
        cleaned = cleaned[1:-1]
    return cleaned.replace('""', '"')


def _load_geometry(geom_string):
    if not geom_string or not isinstance(geom_string, str):
        return None
    return shape(json.loads(_clean_geometry_string(geom_string)))


def _swap_axes(coords) -> List[Coordinate]:
    # GeoJSON positions are (lon, lat[, elevation])
    return [(float(c[1]), float(c[0])) for c in coords]


def parse_line_geometry(geom_string: Optional[str]) -> List[Coordinate]:
    """
    Parse a LineString or MultiLineString into an ordered (lat, lon) list.

    MultiLineString parts are concatenated in order. Unsupported geometry
    types and malformed input return an empty list.
    """
    try:
        geom = _load_geometry(geom_string)
        if isinstance(geom, LineString):
            return _swap_axes(geom.coords)
        if isinstance(geom, MultiLineString):
            coords = []
            for part in geom.geoms:
                coords.extend(_swap_axes(part.coords))
            return coords
        if geom is not None:
            logger.debug(f"Unsupported line geometry type: {geom.geom_type}")
        return []
    except _PARSE_ERRORS as e:
        logger.debug(f"Failed to parse geometry: {e} {str(geom_string)[:50]!r}")
        return []


def parse_point_geometry(geom_string: Optional[str]) -> Optional[Coordinate]:
    """Parse a Point geometry into (lat, lon), or None if it is not a valid point."""
    try:
        geom = _load_geometry(geom_string)
        if isinstance(geom, Point) and not geom.is_empty:
            return (float(geom.y), float(geom.x))
        return None
    except _PARSE_ERRORS as e:
        logger.debug(f"Failed to parse point geometry: {e}")
        return None
