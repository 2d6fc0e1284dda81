"""
Data models for attendance records and report rows.

Records stay TypedDicts so rows coming back from Supabase can be passed around
as plain dictionaries.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, TypedDict


class AttendanceRecord(TypedDict):
    """Attendance record joined with employee and location display data."""
    id: str
    first_name: str | None
    last_name: str | None
    location_name: str | None
    check_in: datetime | None
    check_out: datetime | None  # None = shift still open
    task: str | None
    error_message: str | None


class ReportRow(TypedDict):
    """One row of an employee sheet, either a day or a week total."""
    kind: Literal["day", "total"]
    week: str
    day: str
    date: str
    hours: float | str  # number for day rows, SUM formula for total rows
    location: str


@dataclass(frozen=True)
class ReportWindow:
    """Calendar span of a report; end is exclusive."""

    start: date
    end_exclusive: date
