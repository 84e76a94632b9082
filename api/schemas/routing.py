"""
Pydantic schemas for the safety-aware routing API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """A single coordinate in map-client order."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    lng: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class RouteStats(BaseModel):
    """Statistics about a calculated route."""
    algorithm: str = Field(..., description="Route variant: 'fastest' or 'safest'")
    total_distance_km: float = Field(..., description="Total route distance in kilometres")
    node_count: int = Field(..., description="Number of graph nodes on the route")
    segment_count: int = Field(..., description="Number of street segments traversed")
    average_safety_score: Optional[float] = Field(default=None, description="Mean weighted safety score of traversed segments")
    calculation_time_ms: Optional[float] = Field(default=None, description="Search and reconstruction time")


class NearestStreet(BaseModel):
    """Closest point on the street network to a query point."""
    street_name: Optional[str] = Field(default=None, description="Name of the closest street")
    point: Optional[LatLng] = Field(default=None, description="Closest point on that street")
    distance_km: Optional[float] = Field(default=None, description="Distance from the query point in kilometres")


class RouteResponse(BaseModel):
    """Response model for route calculation."""
    fastest_route: List[LatLng] = Field(default_factory=list, description="Shortest-distance polyline")
    safest_route: List[LatLng] = Field(default_factory=list, description="Safety-weighted polyline")
    start: LatLng = Field(..., description="Requested start point")
    end: LatLng = Field(..., description="Requested end point")
    start_street: Optional[NearestStreet] = Field(default=None, description="Street nearest to the start point")
    end_street: Optional[NearestStreet] = Field(default=None, description="Street nearest to the end point")
    hour: int = Field(..., ge=0, le=23, description="Hour of day used for the safety profile")
    regime: str = Field(..., description="'day' or 'night'")
    fastest_stats: Optional[RouteStats] = Field(default=None, description="Fastest route statistics")
    safest_stats: Optional[RouteStats] = Field(default=None, description="Safest route statistics")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Both routes as a GeoJSON FeatureCollection")


class LandmarkNode(BaseModel):
    """A named test location usable in place of coordinates."""
    id: str = Field(..., description="Landmark letter")
    name: str = Field(..., description="Landmark name")
    coordinates: List[float] = Field(..., description="[lat, lng]")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    graph_loaded: bool = Field(..., description="Whether the street graph has been built")
    segment_count: int = Field(..., description="Number of street segments loaded")
    node_count: int = Field(..., description="Number of graph nodes")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
