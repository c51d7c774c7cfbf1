"""
Health check endpoint

GET /health - service status
"""

from fastapi import APIRouter

from web.dependencies import is_backend_available
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status

    Returns:
        HealthResponse: status, version and whether a backend is configured
    """
    return HealthResponse(
        status="ok",
        version=API_VERSION,
        backend_configured=is_backend_available(),
    )
