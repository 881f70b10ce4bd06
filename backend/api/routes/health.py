"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from schemas.health import HealthResponse

VERSION = "1.0.0"

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return health status of the API."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=datetime.now(timezone.utc),
    )
