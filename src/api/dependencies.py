"""FastAPI dependencies for API key checks and the report clock."""

import secrets
from collections.abc import Callable
from datetime import datetime

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core.config import REPORT_API_KEY
from services.reports import local_now


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Check the X-API-Key header against REPORT_API_KEY.

    Raises:
        HTTPException: 500 if no key is configured, 401 if the key does not match
    """
    if not REPORT_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": ["Set REPORT_API_KEY"],
            },
        )

    if not secrets.compare_digest(x_api_key, REPORT_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key


def get_clock() -> Callable[[], datetime]:
    """Clock used for open shifts; overridden in tests."""
    return local_now
