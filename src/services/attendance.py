"""
Attendance record fetching from Supabase.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from core.config import ATTENDANCE_SELECT, ATTENDANCE_TABLE, REPORT_TIMEZONE
from core.supabase_client import get_supabase_client
from models.attendance import AttendanceRecord, ReportWindow


def parse_timestamp(value) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into a naive datetime in the report timezone.

    Offset-aware values are converted first; naive values are taken as local.
    The fold attribute survives the conversion, so the repeated hour of a
    daylight-saving change stays distinguishable for hour arithmetic.
    Returns None for missing or unparseable values.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(REPORT_TIMEZONE)).replace(tzinfo=None)
    return parsed


def parse_record(row: dict) -> AttendanceRecord:
    """Parse a Supabase attendance row with its profile and location joins."""
    profile = row.get("profiles") or {}
    location = row.get("locations") or {}

    return {
        "id": str(row.get("id") or ""),
        "first_name": (profile.get("first_name") or "").strip() or None,
        "last_name": (profile.get("last_name") or "").strip() or None,
        "location_name": (location.get("name") or "").strip() or None,
        "check_in": parse_timestamp(row.get("check_in")),
        "check_out": parse_timestamp(row.get("check_out")),
        "task": row.get("task"),
        "error_message": None,
    }


def fetch_attendance_records(window: ReportWindow) -> list[AttendanceRecord]:
    """
    Fetch attendance records checked in within window, oldest first.

    Window bounds are midnight in the report timezone.
    """
    supabase = get_supabase_client()
    tz = ZoneInfo(REPORT_TIMEZONE)
    start_dt = datetime.combine(window.start, datetime.min.time()).replace(tzinfo=tz)
    end_dt = datetime.combine(window.end_exclusive, datetime.min.time()).replace(tzinfo=tz)

    response = (
        supabase.table(ATTENDANCE_TABLE)
        .select(ATTENDANCE_SELECT)
        .gte("check_in", start_dt.isoformat())
        .lt("check_in", end_dt.isoformat())
        .order("check_in")
        .execute()
    )

    rows = response.data or []
    return [parse_record(row) for row in rows]
