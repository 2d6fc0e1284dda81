"""
Worked-hours arithmetic for attendance records.
"""

from collections import defaultdict
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from core.config import REPORT_TIMEZONE
from core.validation import employee_display_name
from models.attendance import AttendanceRecord


def to_utc(value: datetime) -> datetime:
    """Naive values are wall-clock time in the report timezone (fold picks the repeated hour)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(REPORT_TIMEZONE))
    return value.astimezone(timezone.utc)


def worked_hours(check_in: datetime, check_out: datetime) -> float:
    """Elapsed hours between check-in and check-out, rounded to 2 decimals; inverted pairs give 0.0."""
    elapsed = to_utc(check_out) - to_utc(check_in)
    hours = round(elapsed.total_seconds() / 3600, 2)
    return max(hours, 0.0)


def monthly_hours(records: list[AttendanceRecord], month_start: datetime) -> float:
    """Total hours of closed shifts checked in on or after month_start."""
    total = 0.0
    for record in records:
        check_in = record.get("check_in")
        check_out = record.get("check_out")
        if check_in is None or check_out is None or check_in < month_start:
            continue
        total += worked_hours(check_in, check_out)
    return round(total, 2)


def hours_by_employee(
    records: list[AttendanceRecord], month_start: datetime
) -> dict[str, float]:
    """Closed-shift hours since month_start, keyed by employee display name."""
    grouped: dict[str, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        grouped[employee_display_name(record)].append(record)

    return {name: monthly_hours(group, month_start) for name, group in grouped.items()}
