"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.supabase_client import is_configured

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 when Supabase credentials are set, 503 otherwise.
    """
    backend_configured = is_configured()
    timestamp = datetime.now(timezone.utc).isoformat()

    if backend_configured:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            backend_configured=True,
            timestamp=timestamp,
        )

    return JSONResponse(
        status_code=503,
        content=HealthResponse(
            status="unhealthy",
            version=API_VERSION,
            backend_configured=False,
            timestamp=timestamp,
            error="SUPABASE_URL or SUPABASE_KEY not set",
        ).model_dump(),
    )
