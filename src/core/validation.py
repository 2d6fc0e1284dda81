"""
Attendance record validation and duplicate detection.
"""

from datetime import date
from zoneinfo import ZoneInfo

from core.config import REPORT_TIMEZONE, UNKNOWN_EMPLOYEE_NAME
from models.attendance import AttendanceRecord


def employee_display_name(record: AttendanceRecord) -> str:
    """Build 'First Last' from the joined profile, 'Unknown' if no first name."""
    first_name = (record.get("first_name") or "").strip() or UNKNOWN_EMPLOYEE_NAME
    last_name = (record.get("last_name") or "").strip()
    return f"{first_name} {last_name}".strip()


def check_in_date(record: AttendanceRecord) -> date | None:
    """Calendar date of the check-in in the report timezone, ignoring time of day."""
    check_in = record.get("check_in")
    if check_in is None:
        return None
    if check_in.tzinfo is not None:
        check_in = check_in.astimezone(ZoneInfo(REPORT_TIMEZONE))
    return check_in.date()


def validate_records(records: list[AttendanceRecord]) -> list[AttendanceRecord]:
    """
    Validate records and populate error_message field.

    Checks:
    1. Employee and location joins resolved
    2. Check-in present, check-out not before check-in
    3. At most one record per employee per day (only the first is exported)

    Nothing here rejects a record; the report degrades per row instead.
    """
    seen_days: dict[tuple[str, date], str] = {}

    for record in records:
        errors = []

        if not (record.get("first_name") or "").strip() and not (record.get("last_name") or "").strip():
            errors.append("Missing employee name")
        if not record.get("location_name"):
            errors.append("Missing location")

        check_in = record.get("check_in")
        check_out = record.get("check_out")
        if check_in is None:
            errors.append("Missing check-in")
        elif check_out is not None and check_out < check_in:
            errors.append(
                f"Check-out {check_out:%d.%m.%Y %H:%M} is before check-in {check_in:%d.%m.%Y %H:%M}"
            )

        record["error_message"] = "; ".join(errors) if errors else None

        day = check_in_date(record)
        if day is None:
            continue
        key = (employee_display_name(record), day)
        if key in seen_days:
            duplicate_error = (
                f"Duplicate record for {day:%d.%m.%Y}; "
                f"record {seen_days[key]} is exported instead"
            )
            if record["error_message"]:
                record["error_message"] += "; " + duplicate_error
            else:
                record["error_message"] = duplicate_error
        else:
            seen_days[key] = record["id"]

    return records
