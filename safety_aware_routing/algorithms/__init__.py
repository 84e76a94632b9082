"""
Routing algorithms and optimization functionality.

This module contains:
- Generic Dijkstra search with distance and safety cost strategies
- Path reconstruction into coordinate polylines
- Routing context and route optimization
"""

from .routing.dijkstra import RoutePath, find_fastest_path, find_safest_path, shortest_path
from .routing.cost_functions import distance_cost, make_safety_cost, safety_cost, safety_score
from .routing.path_reconstruction import path_to_coordinates
from .optimization.routing_context import ContextLoader, RoutingContext
from .optimization.route_optimizer import NoNearbyNodesError, RouteDetails, RouteOptimizer

__all__ = [
    'RoutePath',
    'find_fastest_path',
    'find_safest_path',
    'shortest_path',
    'distance_cost',
    'make_safety_cost',
    'safety_cost',
    'safety_score',
    'path_to_coordinates',
    'ContextLoader',
    'RoutingContext',
    'NoNearbyNodesError',
    'RouteDetails',
    'RouteOptimizer'
]
