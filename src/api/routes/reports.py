"""Attendance report export endpoint."""

import asyncio
import time
from collections.abc import Callable
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from api.dependencies import get_clock, verify_api_key
from api.logging import RequestLog, log_request
from api.models.requests import AttendanceReportRequest
from api.models.responses import ErrorCodes
from core.config import REPORT_FILENAME_PREFIX
from core.validation import validate_records
from models.attendance import AttendanceRecord, ReportWindow
from services.attendance import fetch_attendance_records, parse_record
from services.reports import (
    EmptyReportError,
    InvalidWindowError,
    build_report,
    default_window,
    report_span,
    report_to_bytes,
)

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def resolve_window(body: AttendanceReportRequest) -> ReportWindow:
    """Explicit start/end_exclusive if given, else the year window."""
    if body.start is None and body.end_exclusive is None:
        return default_window(body.year)

    if body.start is None or body.end_exclusive is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Incomplete report window",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Provide both start and end_exclusive, or neither"],
            },
        )
    return ReportWindow(start=body.start, end_exclusive=body.end_exclusive)


def _process_in_thread(
    records: list[AttendanceRecord],
    window: ReportWindow,
    now: Callable[[], datetime],
) -> tuple[bytes, int, float]:
    """Build the workbook in the thread pool and return (xlsx, sheets, hours)."""
    wb = build_report(records, window, now)

    total_hours = 0.0
    for ws in wb.worksheets:
        for (value,) in ws.iter_rows(min_row=2, min_col=4, max_col=4, values_only=True):
            if isinstance(value, (int, float)):
                total_hours += value

    return report_to_bytes(wb), len(wb.worksheets), round(total_hours, 2)


@router.post("/reports/attendance")
async def export_attendance_report(
    request: Request,
    body: AttendanceReportRequest,
    now: Callable[[], datetime] = Depends(get_clock),
    _api_key: str = Depends(verify_api_key),
):
    """
    Export attendance as an Excel workbook with one sheet per employee.

    Uses the records in the request body, or fetches them from Supabase.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/reports/attendance",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        window = resolve_window(body)
        request_log.window_start = window.start.isoformat()
        request_log.window_end = window.end_exclusive.isoformat()

        if body.records is not None:
            records = [parse_record(row) for row in body.records]
        else:
            span = report_span(window)
            try:
                records = await asyncio.to_thread(fetch_attendance_records, span)
            except Exception as e:
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail={
                        "error": "Could not fetch attendance records",
                        "code": ErrorCodes.BACKEND_UNAVAILABLE,
                        "details": [str(e)],
                    },
                ) from e
        request_log.record_count = len(records)

        validated_records = validate_records(records)
        warnings = [r["error_message"] for r in validated_records if r.get("error_message")]
        request_log.warnings.extend(warnings)

        excel_bytes, sheet_count, total_hours = await asyncio.to_thread(
            _process_in_thread,
            validated_records,
            window,
            now,
        )

        request_log.status_code = 200
        request_log.sheets_generated = sheet_count
        request_log.total_hours = total_hours
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        output_filename = f"{REPORT_FILENAME_PREFIX}_{window.start.year}.xlsx"
        return Response(
            content=excel_bytes,
            media_type=XLSX_MEDIA_TYPE,
            headers={
                "Content-Disposition": f'attachment; filename="{output_filename}"',
                "X-Report-Warnings": str(len(warnings)),
            },
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except InvalidWindowError as e:
        request_log.status_code = 400
        request_log.error_code = ErrorCodes.INVALID_WINDOW
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid report window",
                "code": ErrorCodes.INVALID_WINDOW,
                "details": [str(e)],
            },
        )

    except EmptyReportError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.NO_ATTENDANCE_RECORDS
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "No attendance records to export",
                "code": ErrorCodes.NO_ATTENDANCE_RECORDS,
                "details": [str(e)],
            },
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
