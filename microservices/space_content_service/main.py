"""
Space Content Service Main Application

FastAPI application serving the ordered Target content of a space.
Port: 8260
"""

import logging
import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.logger import setup_service_logger

from .factory import SpaceContentServiceFactory
from .models import (
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
    ServiceInfoResponse,
)
from .protocols import UpstreamBatchError
from .routes_registry import ROUTES, SERVICE_METADATA
from .space_content_service import SpaceContentService

settings = get_settings()

# Configure logging
setup_service_logger(settings.service.service_name, settings.logging)
logger = logging.getLogger(__name__)

# Service configuration
SERVICE_NAME = settings.service.service_name
SERVICE_PORT = settings.service.service_port
SERVICE_VERSION = settings.service.service_version

NOT_FOUND_MESSAGE = "No live or scheduled experiences were found for this space."

# Track startup time for uptime calculation
startup_time = time.time()

# Global factory instance
factory: Optional[SpaceContentServiceFactory] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    global factory

    logger.info(f"Starting {SERVICE_NAME} on port {SERVICE_PORT}")

    factory = SpaceContentServiceFactory(settings)
    await factory.initialize()

    yield

    # Cleanup
    logger.info(f"Shutting down {SERVICE_NAME}")
    await factory.close()
    factory = None


# Create FastAPI application
app = FastAPI(
    title="Space Content Service",
    description="Aggregates Adobe Target activities, audiences and offers into the ordered content of a space",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# ====================
# Exception Handlers
# ====================


@app.exception_handler(UpstreamBatchError)
async def upstream_batch_handler(request: Request, exc: UpstreamBatchError):
    logger.error(f"{exc} for {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "status": status.HTTP_400_BAD_REQUEST,
            "message": "Bad Request",
            "result": exc.records,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all for anything outside the upstream error taxonomy"""
    error_traceback = traceback.format_exc()
    logger.error(f"Unhandled exception: {exc}\n{error_traceback}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )


# ====================
# Dependencies
# ====================


def get_service() -> SpaceContentService:
    """Get space content service from factory"""
    if not factory:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return factory.service


# ====================
# Health Endpoints
# ====================


@app.get("/api/v1/space/health")
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint"""
    dependencies = {
        "target_api": "configured" if settings.target.is_configured else "not_configured",
    }

    return HealthResponse(
        status="healthy" if factory else "degraded",
        service=SERVICE_NAME,
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
        dependencies=dependencies,
    )


@app.get("/health/ready", response_model=ReadinessResponse, tags=["Health"])
async def readiness_check():
    """Readiness check endpoint"""
    checks = {
        "factory": factory is not None,
        "target_credentials": settings.target.is_configured,
    }
    details = {
        "factory": "Initialized" if checks["factory"] else "Factory not initialized",
        "target_credentials": (
            f"Tenant {settings.target.tenant_id}"
            if checks["target_credentials"]
            else "API_KEY, TENANT_ID, CLIENT_ID or CLIENT_SECRET missing"
        ),
    }

    return ReadinessResponse(
        ready=all(checks.values()),
        checks=checks,
        details=details,
    )


@app.get("/health/live", response_model=LivenessResponse, tags=["Health"])
async def liveness_check():
    """Liveness check endpoint"""
    return LivenessResponse(
        alive=True,
        uptime_seconds=time.time() - startup_time,
    )


@app.get("/api/v1/space/info", response_model=ServiceInfoResponse, tags=["Health"])
async def service_info():
    """Service metadata and routes"""
    return ServiceInfoResponse(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        description=SERVICE_METADATA["description"],
        capabilities=SERVICE_METADATA["capabilities"],
        routes=ROUTES,
        timestamp=datetime.now(timezone.utc),
    )


# ====================
# Space Endpoints
# ====================


@app.get("/api/v1/space/{space_name}", tags=["Space"])
@app.get("/space/{space_name}", tags=["Space"], include_in_schema=False)
async def get_space_content(
    space_name: str = Path(..., description="Space name, matched case-insensitively against activity names"),
    service: SpaceContentService = Depends(get_service),
):
    """
    Get the content of a space

    Returns every live or scheduled activity targeting the space with its
    options, audiences, schedule and offer content, ordered by date.

    The names "health" and "info" are taken by the service endpoints under
    /api/v1/space/; spaces with those names are served by /space/{space_name}.
    """
    started = time.perf_counter()
    requested_space = space_name.lower()

    try:
        entries = await service.get_space_content(requested_space)
    finally:
        if settings.logging.log_request_timing:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"GET space '{requested_space}' took {elapsed_ms:.1f} ms")

    if not entries:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": NOT_FOUND_MESSAGE, "data": []},
        )

    return JSONResponse(content=[entry.to_wire() for entry in entries])


# ====================
# Main Entry Point
# ====================


def main():
    """Run the service"""
    import uvicorn

    uvicorn.run(
        "microservices.space_content_service.main:app",
        host=settings.service.service_host,
        port=SERVICE_PORT,
        log_level=settings.logging.log_level.lower(),
    )


if __name__ == "__main__":
    main()
