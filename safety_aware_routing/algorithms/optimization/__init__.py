"""
Routing context management and route optimization.
"""

from .routing_context import ContextLoader, RoutingContext
from .route_optimizer import NoNearbyNodesError, RouteDetails, RouteOptimizer, anchor_coordinates

__all__ = [
    'ContextLoader',
    'RoutingContext',
    'NoNearbyNodesError',
    'RouteDetails',
    'RouteOptimizer',
    'anchor_coordinates'
]
