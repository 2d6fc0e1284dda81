"""Pydantic request models for API endpoints."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class AttendanceReportRequest(BaseModel):
    """
    Attendance export request.

    Either a year or an explicit start/end_exclusive pair selects the window;
    with neither, the configured report year is used. Records are rows in the
    Supabase joined shape; when omitted they are fetched from the backend.
    """

    year: int | None = Field(default=None, ge=1900, le=9998)
    start: date | None = None
    end_exclusive: date | None = None
    records: list[dict[str, Any]] | None = None
