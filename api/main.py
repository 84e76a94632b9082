"""
Safety-Aware Routing API - FastAPI Main Application

A RESTful API returning the fastest and the safest route between two points
of the Vancouver bikeway network.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from api.routes.routing import router as routing_router
from api.schemas.routing import ErrorResponse
from api.services.routing_service import routing_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Safety-Aware Routing API...")
    logger.info(f"Street data directory: {routing_service.data_dir} (graph builds on first request)")

    yield

    logger.info("Shutting down Safety-Aware Routing API...")


# Create FastAPI application
app = FastAPI(
    title="Safety-Aware Routing API",
    description="""
    **Fastest and safest routes over the Vancouver bikeway network**

    Every request returns two routes: the shortest one, and one weighted by
    bikeway infrastructure, sidewalk condition, street lighting, amenities,
    crime and disruptions. Lighting and crime count for more at night.

    ## Quick Start

    1. List landmark nodes: `GET /api/routing/nodes`
    2. Calculate routes: `GET /api/routing/route?start=A&end=F&hour=22`
    """,
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware for web applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error="validation_error",
            message="Request validation failed",
            details={"errors": jsonable_encoder(exc.errors())}
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred"
        ).model_dump()
    )


# Include routers
app.include_router(routing_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Safety-Aware Routing API",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routing/health",
        "coverage_area": "Vancouver, British Columbia, Canada"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    service_health = routing_service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }


# Development server configuration
if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
