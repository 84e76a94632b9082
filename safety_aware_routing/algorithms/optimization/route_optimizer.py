"""
Route optimizer answering fastest/safest route queries against a routing context.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ...config.weight_profile_factory import TimeOfDay, WeightProfile, resolve_hour, weight_profile_for_time
from ...data.distance_utils import find_closest_segment_point
from ...data.models import Coordinate
from ..routing.cost_functions import safety_score
from ..routing.dijkstra import RoutePath, find_fastest_path, find_safest_path
from ..routing.path_reconstruction import path_to_coordinates
from .routing_context import RoutingContext

logger = logging.getLogger(__name__)


class NoNearbyNodesError(RuntimeError):
    """Raised when a query point cannot be snapped to any graph node."""


class RouteDetails:
    """Container for detailed route information."""

    def __init__(self, path: RoutePath, coordinates: List[Coordinate],
                 profile: WeightProfile, context: RoutingContext):
        """
        Initialize route details.

        Args:
            path: Route found by the search
            coordinates: Polyline with the query points as its ends
            profile: Weight profile used to score the traversed segments
            context: Routing context the path was computed on
        """
        self.nodes = list(path.nodes)
        self.algorithm = path.algorithm
        self.coordinates = coordinates
        self.cost = path.cost
        self.total_distance = path.total_distance  # km
        self.segment_ids = [segment.id for segment in path.segments]
        self.safety_scores = [safety_score(segment.scores, profile, context.config)
                              for segment in path.segments]
        self.calculation_time: Optional[float] = None

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the route."""
        return {
            'algorithm': self.algorithm,
            'node_count': len(self.nodes),
            'segment_count': len(self.segment_ids),
            'total_distance_km': round(self.total_distance, 3),
            'total_cost': round(self.cost, 4),
            'average_safety_score': round(float(np.mean(self.safety_scores)), 2) if self.safety_scores else None,
            'min_safety_score': round(float(np.min(self.safety_scores)), 2) if self.safety_scores else None,
            'calculation_time_ms': round(self.calculation_time * 1000, 1) if self.calculation_time else None
        }


def anchor_coordinates(coordinates: List[Coordinate], start: Coordinate,
                       end: Coordinate) -> List[Coordinate]:
    """
    Pin a reconstructed polyline to the caller's query points.

    The first and last points are replaced so the route starts and ends at
    the requested coordinates rather than the snapped nodes.
    """
    if not coordinates:
        return []
    if len(coordinates) == 1:
        return [start, end]
    anchored = list(coordinates)
    anchored[0] = start
    anchored[-1] = end
    return anchored


class RouteOptimizer:
    """
    Main interface for route calculation.

    Holds a reference to a built ``RoutingContext``; every query is read-only
    so one optimizer can serve concurrent requests.
    """

    def __init__(self, context: RoutingContext):
        self.context = context

    def snap(self, coord: Coordinate) -> Tuple[str, float]:
        """
        Snap a query coordinate to its nearest graph node.

        Raises:
            NoNearbyNodesError: If the graph has no nodes
        """
        node, distance = self.context.locator.nearest_with_distance(coord)
        if node is None:
            raise NoNearbyNodesError(f"Could not find nearby street nodes for {coord}")
        return node, distance

    def nearest_street(self, coord: Coordinate) -> Dict[str, Any]:
        """Closest point on any street and the street's name."""
        point, segment, distance = find_closest_segment_point(coord, self.context.segments)
        if segment is None:
            return {'point': None, 'street_name': None, 'distance_km': None}
        return {
            'point': point,
            'street_name': segment.street_name,
            'distance_km': round(distance, 4)
        }

    def _details(self, path: RoutePath, start: Coordinate, end: Coordinate,
                 profile: WeightProfile, calc_start: float) -> RouteDetails:
        coordinates = anchor_coordinates(path_to_coordinates(path, self.context.graph), start, end)
        details = RouteDetails(path, coordinates, profile, self.context)
        details.calculation_time = time.time() - calc_start
        return details

    def find_routes(self, start_coords: Coordinate, end_coords: Coordinate,
                    time_of_day: TimeOfDay = None) -> Dict[str, Any]:
        """
        Find the fastest and the safest route between two points.

        Args:
            start_coords: (lat, lon) of route start
            end_coords: (lat, lon) of route end
            time_of_day: Hour of day or datetime for the safety profile

        Returns:
            Dictionary with 'routes' (only variants that found a path, keyed
            'fastest' / 'safest') and 'metadata' (snapped nodes, nearest
            street to each query point, hour and regime)

        Raises:
            NoNearbyNodesError: If either point cannot be snapped
        """
        config = self.context.config
        graph = self.context.graph

        start_node, start_snap = self.snap(start_coords)
        end_node, end_snap = self.snap(end_coords)
        profile = weight_profile_for_time(time_of_day, config)

        logger.info(f"Finding routes from {start_coords} ({start_node}) to "
                    f"{end_coords} ({end_node}), {profile.regime.value} profile")

        routes: Dict[str, RouteDetails] = {}

        calc_start = time.time()
        fastest = find_fastest_path(graph, start_node, end_node)
        if fastest:
            routes['fastest'] = self._details(fastest, start_coords, end_coords, profile, calc_start)

        calc_start = time.time()
        safest = find_safest_path(graph, start_node, end_node, time_of_day, config)
        if safest:
            routes['safest'] = self._details(safest, start_coords, end_coords, profile, calc_start)

        if not routes:
            logger.warning(f"No route found between {start_node} and {end_node}")

        return {
            'routes': routes,
            'metadata': {
                'start_coords': start_coords,
                'end_coords': end_coords,
                'start_node': start_node,
                'end_node': end_node,
                'start_snap_km': round(start_snap, 4),
                'end_snap_km': round(end_snap, 4),
                'start_street': self.nearest_street(start_coords),
                'end_street': self.nearest_street(end_coords),
                'hour': resolve_hour(time_of_day, config),
                'regime': profile.regime.value,
                'graph_stats': {
                    'nodes': graph.number_of_nodes(),
                    'edges': graph.number_of_edges()
                }
            }
        }
