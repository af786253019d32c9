"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from lingualearn.config.languages import list_language_names
from lingualearn.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="ok",
        version="0.1.0",
        timestamp=datetime.now(timezone.utc).isoformat(),
        languages=len(list_language_names()),
    )
