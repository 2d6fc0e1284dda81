"""
Attendance report generation in Excel format.

One sheet per employee, one row per calendar day of the report window, grouped
into Sunday-to-Saturday weeks with a SUM total row after each week.
"""

from collections import defaultdict
from collections.abc import Callable
from datetime import date, datetime, timedelta
from io import BytesIO
from pathlib import Path
from zoneinfo import ZoneInfo

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font

from core.config import (
    HOURS_COLUMN,
    HOURS_NUMBER_FORMAT,
    MAX_SHEET_NAME_LENGTH,
    OUTPUT_DIR,
    REPORT_FILENAME_PREFIX,
    REPORT_HEADERS,
    REPORT_TIMEZONE,
    REPORT_YEAR,
    UNKNOWN_EMPLOYEE_NAME,
    WEEKDAY_NAMES,
)
from core.validation import check_in_date, employee_display_name
from models.attendance import AttendanceRecord, ReportRow, ReportWindow
from services.hours import worked_hours

DAYS_PER_WEEK = 7
FIRST_DATA_ROW = 2  # row 1 holds the headers


class EmptyReportError(ValueError):
    """Workbook has no employee sheets to write."""


class InvalidWindowError(ValueError):
    """Report window is empty or reversed."""


def local_now() -> datetime:
    """Current wall-clock time in the report timezone, naive with fold kept."""
    return datetime.now(ZoneInfo(REPORT_TIMEZONE)).replace(tzinfo=None)


# =============================================================================
# WINDOW
# =============================================================================


def default_window(year: int | None = None) -> ReportWindow:
    """Jan 1 of year up to Jan 1 of the following year."""
    year = year or REPORT_YEAR
    return ReportWindow(start=date(year, 1, 1), end_exclusive=date(year + 1, 1, 1))


def validate_window(window: ReportWindow) -> None:
    """Raise InvalidWindowError unless start < end_exclusive."""
    if window.end_exclusive <= window.start:
        raise InvalidWindowError(
            f"Report window end {window.end_exclusive.isoformat()} must be after "
            f"start {window.start.isoformat()}"
        )


def aligned_start(day: date) -> date:
    """Sunday on or before day."""
    # weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def iter_weeks(window: ReportWindow) -> list[list[date]]:
    """
    Split the window into 7-day weeks starting on the aligned Sunday.

    The last week runs through its Saturday even if that passes end_exclusive,
    so every week has exactly 7 days.
    """
    weeks = []
    current = aligned_start(window.start)
    while current < window.end_exclusive:
        weeks.append([current + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)])
        current += timedelta(days=DAYS_PER_WEEK)
    return weeks


def report_span(window: ReportWindow) -> ReportWindow:
    """Dates actually covered by the report rows: whole weeks around window."""
    validate_window(window)
    weeks = iter_weeks(window)
    return ReportWindow(
        start=weeks[0][0], end_exclusive=weeks[-1][-1] + timedelta(days=1)
    )


# =============================================================================
# FORMATTING
# =============================================================================


def format_date_display(d: date) -> str:
    """Format date as DD.MM.YYYY."""
    return d.strftime("%d.%m.%Y")


def strip_illegal_characters(value):
    """Drop control characters openpyxl refuses to write; non-strings pass through."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def make_sheet_name(name: str) -> str:
    """Create a valid Excel sheet name (31 chars max)."""
    sanitized = strip_illegal_characters(name).strip()
    # openpyxl rejects these in titles
    for char in ["\\", "/", "?", "*", "[", "]", ":"]:
        sanitized = sanitized.replace(char, "-")

    return sanitized[:MAX_SHEET_NAME_LENGTH] or UNKNOWN_EMPLOYEE_NAME


# =============================================================================
# ROW BUILDING
# =============================================================================


def group_by_employee(records: list[AttendanceRecord]) -> dict[str, list[AttendanceRecord]]:
    """
    Group records by employee display name.

    Groups keep the order in which each employee first appears.
    """
    grouped = defaultdict(list)

    for record in records:
        grouped[employee_display_name(record)].append(record)

    return dict(grouped)


def index_first_by_day(records: list[AttendanceRecord]) -> dict[date, AttendanceRecord]:
    """
    Map each check-in date to the first record for that day.

    Later records on an already seen day are ignored (first match wins).
    Records without a check-in are skipped.
    """
    by_day: dict[date, AttendanceRecord] = {}
    for record in records:
        day = check_in_date(record)
        if day is not None and day not in by_day:
            by_day[day] = record
    return by_day


def build_sheet_rows(
    records: list[AttendanceRecord],
    window: ReportWindow,
    now: Callable[[], datetime] = local_now,
) -> list[ReportRow]:
    """
    Build day and week-total rows for one employee.

    Worked hours come from the first record checked in on each day, with `now`
    standing in for the check-out of an open shift. Days without a record get
    0 hours and an empty location.
    """
    by_day = index_first_by_day(records)
    rows: list[ReportRow] = []
    row_number = FIRST_DATA_ROW

    for week_number, week in enumerate(iter_weeks(window), start=1):
        week_label = f"Week {week_number}"
        week_start_row = row_number

        for day in week:
            hours = 0.0
            location = ""
            matched = by_day.get(day)
            if matched:
                check_out = matched.get("check_out")
                if check_out is None:
                    check_out = now()  # open shift counts up to now
                hours = worked_hours(matched["check_in"], check_out)
                location = matched.get("location_name") or ""

            rows.append(
                {
                    "kind": "day",
                    "week": week_label,
                    "day": WEEKDAY_NAMES[day.weekday()],
                    "date": format_date_display(day),
                    "hours": hours,
                    "location": location,
                }
            )
            row_number += 1

        rows.append(
            {
                "kind": "total",
                "week": f"{week_label} TOTAL",
                "day": "",
                "date": "",
                "hours": f"=SUM({HOURS_COLUMN}{week_start_row}:{HOURS_COLUMN}{row_number - 1})",
                "location": "",
            }
        )
        row_number += 1

    return rows


# =============================================================================
# EXCEL REPORT GENERATION
# =============================================================================


def write_report_sheet(ws, rows: list[ReportRow]):
    """
    Write headers and report rows to an Excel worksheet.

    Columns: A=Week, B=Day, C=Date, D=Worked Hours, E=Location.
    Week total rows are bold.
    """
    for col_idx, header in enumerate(REPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, row in enumerate(rows, start=FIRST_DATA_ROW):
        row_data = [row["week"], row["day"], row["date"], row["hours"], row["location"]]

        for col_idx, value in enumerate(row_data, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=strip_illegal_characters(value))
            if row["kind"] == "total":
                cell.font = Font(bold=True)

        ws.cell(row=row_idx, column=4).number_format = HOURS_NUMBER_FORMAT


def build_report(
    records: list[AttendanceRecord],
    window: ReportWindow | None = None,
    now: Callable[[], datetime] = local_now,
) -> Workbook:
    """
    Create the attendance workbook with one sheet per employee.

    Every employee present in records gets a sheet, even without any day inside
    the window. Sheet titles are truncated to 31 characters and not
    deduplicated here; openpyxl suffixes a colliding title with a number.

    Raises:
        InvalidWindowError: If window end is not after its start
    """
    window = window or default_window()
    validate_window(window)

    wb = Workbook()
    wb.remove(wb.active)

    for employee_name, employee_records in group_by_employee(records).items():
        rows = build_sheet_rows(employee_records, window, now)
        ws = wb.create_sheet(title=make_sheet_name(employee_name))
        write_report_sheet(ws, rows)

    return wb


def report_to_bytes(wb: Workbook) -> bytes:
    """Serialize workbook to xlsx bytes."""
    if not wb.worksheets:
        raise EmptyReportError("Report contains no employee sheets")

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def save_report(wb: Workbook, output_path: Path):
    """Save workbook to output_path, creating parent directories."""
    if not wb.worksheets:
        raise EmptyReportError("Report contains no employee sheets")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}")


def generate_output_filename(year: int) -> Path:
    """
    Generate output filename with versioning.

    Format: anwesenheit_YYYY_a.xlsx
    Adds _a, _b, _c suffix if file exists for proper alphabetical sorting.
    """
    output_dir = OUTPUT_DIR / "reports" / "attendance"
    output_dir.mkdir(parents=True, exist_ok=True)
    base_name = f"{REPORT_FILENAME_PREFIX}_{year}"

    suffix_char = ord("a")

    while True:
        output_path = output_dir / f"{base_name}_{chr(suffix_char)}.xlsx"
        if not output_path.exists():
            return output_path
        suffix_char += 1
        if suffix_char > ord("z"):
            raise RuntimeError("Too many output files exist")
