"""
Distance calculation utilities optimized for performance.
"""

import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .models import Coordinate, StreetSegment

EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in kilometres
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def coordinate_distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres between two (lat, lon) pairs."""
    return haversine_distance(a[0], a[1], b[0], b[1])


def haversine_distance_array(lat: float, lon: float,
                             lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """
    Vectorised haversine distance from one point to many.

    Args:
        lat, lon: Query point in degrees
        lats, lons: Arrays of target coordinates in degrees

    Returns:
        Array of distances in kilometres, aligned with the inputs
    """
    lat_rad = np.radians(lat)
    lats_rad = np.radians(lats)
    delta_lat = lats_rad - lat_rad
    delta_lon = np.radians(lons) - np.radians(lon)

    a = (np.sin(delta_lat / 2) ** 2 +
         np.cos(lat_rad) * np.cos(lats_rad) * np.sin(delta_lon / 2) ** 2)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def closest_point_on_segment(point: Coordinate, segment_start: Coordinate,
                             segment_end: Coordinate) -> Coordinate:
    """
    Project a point onto a straight piece of a polyline.

    Works in planar degree space, which is adequate over street-scale
    distances. A zero-length piece returns its own point.
    """
    px, py = point
    sx, sy = segment_start
    ex, ey = segment_end

    dx = ex - sx
    dy = ey - sy
    length_squared = dx * dx + dy * dy

    if length_squared == 0:
        return segment_start

    t = max(0.0, min(1.0, ((px - sx) * dx + (py - sy) * dy) / length_squared))
    return (sx + t * dx, sy + t * dy)


def find_closest_segment_point(target: Coordinate,
                               segments: Iterable[StreetSegment]
                               ) -> Tuple[Optional[Coordinate], Optional[StreetSegment], float]:
    """
    Find the nearest point on any segment to a target coordinate.

    Returns:
        (point, segment, distance_km); point and segment are None when no
        segments were given and the distance is then infinite.
    """
    min_distance = math.inf
    closest_point = None
    closest_segment = None

    for segment in segments:
        coords = segment.coordinates
        for i in range(len(coords) - 1):
            point = closest_point_on_segment(target, coords[i], coords[i + 1])
            dist = coordinate_distance(target, point)
            if dist < min_distance:
                min_distance = dist
                closest_point = point
                closest_segment = segment

    return closest_point, closest_segment, min_distance


def calculate_route_distance(edges: Iterable) -> float:
    """
    Calculate the total physical distance of a route.

    Args:
        edges: Traversed edges, each carrying a ``distance`` in kilometres

    Returns:
        Total distance in kilometres
    """
    return sum(edge.distance for edge in edges)


def get_bounds(coordinates: List[Coordinate]) -> dict:
    """Get the lat/lon bounding box of a list of coordinates."""
    lats = [c[0] for c in coordinates]
    lons = [c[1] for c in coordinates]

    return {
        'lat_min': min(lats),
        'lat_max': max(lats),
        'lon_min': min(lons),
        'lon_max': max(lons)
    }
