"""
Service layer for the safety-aware routing API.
"""

import logging
import math
import os
from typing import Any, Callable, Dict, List, Optional

import geojson

from safety_aware_routing.algorithms.optimization.route_optimizer import RouteDetails, RouteOptimizer
from safety_aware_routing.algorithms.optimization.routing_context import ContextLoader, RoutingContext
from safety_aware_routing.config.routing_config import RoutingConfig
from safety_aware_routing.data.data_loader import load_street_data
from safety_aware_routing.data.models import Coordinate
from api.schemas.routing import HealthResponse, LandmarkNode, LatLng, NearestStreet, RouteResponse, RouteStats

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', '..', 'data')

# Vancouver landmarks usable as route endpoints
LANDMARKS: Dict[str, Dict[str, Any]] = {
    'A': {'name': 'Gastown', 'coordinates': (49.2827, -123.1207)},
    'B': {'name': 'Waterfront Station', 'coordinates': (49.2810, -123.1190)},
    'C': {'name': 'Granville Street', 'coordinates': (49.2780, -123.1230)},
    'D': {'name': 'Vancouver Art Gallery', 'coordinates': (49.2790, -123.1250)},
    'E': {'name': 'Yaletown', 'coordinates': (49.2760, -123.1280)},
    'F': {'name': 'Library Square', 'coordinates': (49.2740, -123.1200)},
}


class InvalidLocationError(ValueError):
    """Raised when a start/end parameter is neither a landmark nor lat,lng."""


class RouteNotFoundError(LookupError):
    """Raised when neither route variant connects the two points."""


def parse_location(value: str) -> Coordinate:
    """
    Resolve a location parameter to (lat, lng).

    Args:
        value: Landmark letter (A-F) or "lat,lng"

    Raises:
        InvalidLocationError: If the value cannot be resolved
    """
    if value is None or not str(value).strip():
        raise InvalidLocationError("Location must not be empty")

    landmark = LANDMARKS.get(value.strip().upper())
    if landmark:
        return landmark['coordinates']

    parts = value.split(',')
    if len(parts) == 2:
        try:
            lat, lng = float(parts[0]), float(parts[1])
        except ValueError:
            lat = lng = math.nan
        if math.isfinite(lat) and math.isfinite(lng) and -90 <= lat <= 90 and -180 <= lng <= 180:
            return (lat, lng)

    raise InvalidLocationError(
        f"Invalid location: {value}. Use a landmark id (A-F) or lat,lng coordinates"
    )


class SafetyRoutingService:
    """
    Service class that provides fastest/safest routing for the API.

    The street graph is built lazily on the first route request and shared by
    all later requests.
    """

    def __init__(self, data_dir: Optional[str] = None,
                 config: Optional[RoutingConfig] = None,
                 build_fn: Optional[Callable[[], RoutingContext]] = None):
        """
        Initialize the routing service.

        Args:
            data_dir: Directory with the CSV exports (default: $SAFETY_ROUTING_DATA_DIR or ./data)
            config: Routing configuration
            build_fn: Override for context construction
        """
        self.data_dir = data_dir or os.environ.get('SAFETY_ROUTING_DATA_DIR', DEFAULT_DATA_DIR)
        self.config = config or RoutingConfig()
        self.loader = ContextLoader(build_fn or self._build_context)

    def _build_context(self) -> RoutingContext:
        logger.info(f"Loading street data from {self.data_dir}")
        segments = load_street_data(self.data_dir, self.config)
        return RoutingContext.from_segments(segments, self.config)

    def get_health_status(self) -> HealthResponse:
        """Get the health status without triggering a graph build."""
        loaded = self.loader.is_loaded
        context = self.loader.get() if loaded else None
        return HealthResponse(
            status="healthy" if loaded else "not_loaded",
            version=API_VERSION,
            graph_loaded=loaded,
            segment_count=len(context.segments) if context else 0,
            node_count=context.graph.number_of_nodes() if context else 0
        )

    def list_landmarks(self) -> List[LandmarkNode]:
        return [
            LandmarkNode(id=key, name=value['name'], coordinates=list(value['coordinates']))
            for key, value in LANDMARKS.items()
        ]

    def calculate_route(self, start: str, end: str, hour: Optional[str] = None) -> RouteResponse:
        """
        Calculate fastest and safest routes between two locations.

        Args:
            start: Landmark letter or "lat,lng"
            end: Landmark letter or "lat,lng"
            hour: Hour of day or ISO timestamp; defaults to midday

        Raises:
            InvalidLocationError: For unparseable start/end
            NoNearbyNodesError: If the graph has no nodes to snap to
            RouteNotFoundError: If the points are not connected
        """
        start_coord = parse_location(start)
        end_coord = parse_location(end)

        optimizer = RouteOptimizer(self.loader.get())
        result = optimizer.find_routes(start_coord, end_coord, hour)
        routes = result['routes']
        metadata = result['metadata']

        if not routes:
            raise RouteNotFoundError("No route found between the specified locations")

        fastest = routes.get('fastest')
        safest = routes.get('safest')

        return RouteResponse(
            fastest_route=self._to_latlng(fastest),
            safest_route=self._to_latlng(safest),
            start=LatLng(lat=start_coord[0], lng=start_coord[1]),
            end=LatLng(lat=end_coord[0], lng=end_coord[1]),
            start_street=self._nearest_street(metadata['start_street']),
            end_street=self._nearest_street(metadata['end_street']),
            hour=metadata['hour'],
            regime=metadata['regime'],
            fastest_stats=self._route_stats(fastest),
            safest_stats=self._route_stats(safest),
            route_geojson=self._routes_to_geojson(routes)
        )

    @staticmethod
    def _to_latlng(route: Optional[RouteDetails]) -> List[LatLng]:
        if route is None:
            return []
        return [LatLng(lat=lat, lng=lng) for lat, lng in route.coordinates]

    @staticmethod
    def _nearest_street(info: Dict[str, Any]) -> NearestStreet:
        point = info['point']
        return NearestStreet(
            street_name=info['street_name'],
            point=LatLng(lat=point[0], lng=point[1]) if point else None,
            distance_km=info['distance_km']
        )

    @staticmethod
    def _route_stats(route: Optional[RouteDetails]) -> Optional[RouteStats]:
        if route is None:
            return None
        summary = route.get_summary()
        return RouteStats(
            algorithm=summary['algorithm'],
            total_distance_km=summary['total_distance_km'],
            node_count=summary['node_count'],
            segment_count=summary['segment_count'],
            average_safety_score=summary['average_safety_score'],
            calculation_time_ms=summary['calculation_time_ms']
        )

    @staticmethod
    def _routes_to_geojson(routes: Dict[str, RouteDetails]) -> Dict[str, Any]:
        """Convert routes to a GeoJSON FeatureCollection of LineStrings (lon, lat)."""
        features = []
        for name, route in routes.items():
            features.append(geojson.Feature(
                geometry=geojson.LineString([[lng, lat] for lat, lng in route.coordinates]),
                properties={
                    "route": name,
                    "total_distance_km": round(route.total_distance, 3),
                    "segment_ids": route.segment_ids
                }
            ))
        return geojson.FeatureCollection(features)


# Global service instance
routing_service = SafetyRoutingService()


def get_routing_service() -> SafetyRoutingService:
    """FastAPI dependency returning the shared service."""
    return routing_service
