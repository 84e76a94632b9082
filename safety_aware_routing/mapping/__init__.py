"""
Mapping functionality for safety-aware routing.

This module contains:
- Spatial enrichment of segments from lighting and sidewalk data
- Street graph construction
- Nearest node lookup
"""

from .enrichment import SpatialGridIndex, enrich_with_conditions, enrich_with_lighting
from .network import Edge, NodeLocator, build_graph, find_closest_node, neighbors

__all__ = [
    'SpatialGridIndex',
    'enrich_with_conditions',
    'enrich_with_lighting',
    'Edge',
    'NodeLocator',
    'build_graph',
    'find_closest_node',
    'neighbors'
]
