"""
Space Content Service Routes Registry

Defines service metadata and routes exposed by the service.
"""

SERVICE_METADATA = {
    "service_name": "space_content_service",
    "version": "1.0.0",
    "description": "Denormalized, date-ordered Adobe Target content per space",
    "tags": ['space', 'target', 'personalization', 'v1'],
    "capabilities": ['space_content', 'activity_scheduling', 'offer_resolution'],
}

ROUTES = [
    {"path": "/health", "methods": ["GET"], "description": "Health check"},
    {"path": "/health/ready", "methods": ["GET"], "description": "Readiness check"},
    {"path": "/health/live", "methods": ["GET"], "description": "Liveness check"},
    {"path": "/api/v1/space/health", "methods": ["GET"], "description": "Service health check (API v1)"},
    {"path": "/api/v1/space/info", "methods": ["GET"], "description": "Service information"},
    {"path": "/api/v1/space/{space_name}", "methods": ["GET"], "description": "Ordered content of a space"},
    {"path": "/space/{space_name}", "methods": ["GET"], "description": "Ordered content of a space (legacy path)"},
]


__all__ = ["SERVICE_METADATA", "ROUTES"]
