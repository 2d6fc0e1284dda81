"""API Pydantic models."""

from .requests import AttendanceReportRequest
from .responses import ErrorCodes, ErrorResponse, HealthResponse

__all__ = ["AttendanceReportRequest", "HealthResponse", "ErrorResponse", "ErrorCodes"]
