"""
FastAPI routes for safety-aware routing endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from safety_aware_routing.algorithms.optimization.route_optimizer import NoNearbyNodesError
from api.schemas.routing import ErrorResponse, HealthResponse, LandmarkNode, RouteResponse
from api.services.routing_service import (
    InvalidLocationError,
    RouteNotFoundError,
    SafetyRoutingService,
    get_routing_service
)

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/routing", tags=["routing"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
def health_check(service: SafetyRoutingService = Depends(get_routing_service)):
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information
    """
    return service.get_health_status()


@router.get(
    "/route",
    response_model=RouteResponse,
    summary="Calculate Fastest and Safest Routes",
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def calculate_route(
    start: str = Query(..., description="Landmark id (A-F) or 'lat,lng'"),
    end: str = Query(..., description="Landmark id (A-F) or 'lat,lng'"),
    hour: Optional[str] = Query(None, description="Hour of day (0-23) or ISO timestamp"),
    service: SafetyRoutingService = Depends(get_routing_service)
):
    """
    Calculate the fastest and the safety-weighted route between two locations.

    The safety-weighted route uses a night profile (full lighting weight,
    amplified crime penalty) outside 07:00-18:59 and a day profile otherwise.

    Example:
        ``GET /api/routing/route?start=A&end=49.2740,-123.1200&hour=22``
    """
    logger.info(f"Route request: {start} -> {end} (hour={hour})")

    try:
        return service.calculate_route(start, end, hour)
    except InvalidLocationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NoNearbyNodesError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not find nearby street segments for the given coordinates"
        )
    except RouteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/nodes", response_model=List[LandmarkNode], summary="List Landmark Nodes")
def list_nodes(service: SafetyRoutingService = Depends(get_routing_service)):
    """Landmarks that can be used in place of coordinates."""
    return service.list_landmarks()


@router.get("/", summary="API Information")
def get_api_info():
    """
    Get information about the Safety-Aware Routing API.

    Returns:
        dict: API information and available endpoints
    """
    return {
        "api": "Safety-Aware Routing API",
        "version": "1.0.0",
        "description": "Fastest and safest cycling/walking routes for Vancouver",
        "endpoints": {
            "GET /api/routing/route": "Calculate fastest and safest routes",
            "GET /api/routing/nodes": "List landmark nodes",
            "GET /api/routing/health": "Check service health status",
            "GET /api/routing/": "This information endpoint"
        }
    }
