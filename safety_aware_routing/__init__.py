"""
Safety-Aware Routing

Street-network routing that offers two routes between any pair of points:
the shortest one, and one weighted by how safe each street feels at the
requested time of day (infrastructure, lighting, amenities, crime and
disruptions).

## Quick Start

```python
from safety_aware_routing import RoutingConfig, RoutingContext, RouteOptimizer, load_street_data

config = RoutingConfig.create_default_config()
segments = load_street_data("data/", config)
context = RoutingContext.from_segments(segments, config)

result = RouteOptimizer(context).find_routes(
    start_coords=(49.2827, -123.1207),  # Gastown
    end_coords=(49.2740, -123.1200),    # Library Square
    time_of_day=22
)
```

## Architecture

- `data/`: Segment model, geometry parsing, CSV loading, distance utilities
- `mapping/`: Spatial enrichment, graph building, nearest node lookup
- `algorithms/`: Dijkstra search, cost strategies, path reconstruction, route optimization
- `config/`: Configuration and time-of-day weight profiles
"""

from .config import RoutingConfig, WeightProfile, weight_profile_for_time
from .data import StreetSegment, SegmentScores, load_street_data, parse_line_geometry
from .mapping import build_graph, find_closest_node, enrich_with_conditions, enrich_with_lighting
from .algorithms import (
    RoutePath,
    RouteOptimizer,
    RoutingContext,
    ContextLoader,
    find_fastest_path,
    find_safest_path,
    path_to_coordinates
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    'RoutingConfig',
    'RoutingContext',
    'ContextLoader',
    'RouteOptimizer',

    # Data
    'StreetSegment',
    'SegmentScores',
    'load_street_data',
    'parse_line_geometry',

    # Core operations
    'enrich_with_conditions',
    'enrich_with_lighting',
    'build_graph',
    'find_closest_node',
    'find_fastest_path',
    'find_safest_path',
    'path_to_coordinates',
    'RoutePath',
    'WeightProfile',
    'weight_profile_for_time',

    '__version__'
]
