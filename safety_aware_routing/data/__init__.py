"""
Data processing and utilities for safety-aware routing.

This module contains:
- The street segment data model
- Geometry parsing and CSV loading
- Distance calculations
"""

from .models import Coordinate, SegmentScores, StreetSegment
from .geometry_parser import parse_line_geometry, parse_point_geometry
from .data_loader import load_street_data, segments_from_records
from .distance_utils import (
    haversine_distance,
    closest_point_on_segment,
    find_closest_segment_point
)

__all__ = [
    'Coordinate',
    'SegmentScores',
    'StreetSegment',
    'parse_line_geometry',
    'parse_point_geometry',
    'load_street_data',
    'segments_from_records',
    'haversine_distance',
    'closest_point_on_segment',
    'find_closest_segment_point'
]
