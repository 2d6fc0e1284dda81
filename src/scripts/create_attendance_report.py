#!/usr/bin/env python3
"""
Create the yearly attendance report from Supabase attendance records.

Generates an Excel workbook with one sheet per employee:
- One row per day, Sunday-aligned weeks
- A SUM total row after every week

Usage:
    uv run python src/scripts/create_attendance_report.py --year 2025
    uv run python src/scripts/create_attendance_report.py --start 2024-12-29 --end 2026-01-01
"""

import argparse
import sys
import traceback
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.validation import validate_records
from models.attendance import ReportWindow
from services.attendance import fetch_attendance_records
from services.hours import hours_by_employee
from services.reports import (
    build_report,
    default_window,
    generate_output_filename,
    local_now,
    report_span,
    save_report,
)


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_report_window(
    year: int | None, start_str: str | None, end_str: str | None
) -> ReportWindow:
    """
    Resolve the report window from command-line arguments.

    Args:
        year: Report year; used when no explicit dates are given
        start_str: Optional start date (YYYY-MM-DD)
        end_str: Optional exclusive end date (YYYY-MM-DD)

    Returns:
        ReportWindow
    """
    if start_str or end_str:
        if not (start_str and end_str):
            raise ValueError("--start and --end must be given together")
        return ReportWindow(
            start=datetime.strptime(start_str, "%Y-%m-%d").date(),
            end_exclusive=datetime.strptime(end_str, "%Y-%m-%d").date(),
        )
    return default_window(year)


# =============================================================================
# MAIN
# =============================================================================


def main(year: int | None = None, start_str: str | None = None, end_str: str | None = None):
    """Main entry point for the attendance report."""
    try:
        # 1. Resolve window
        window = get_report_window(year, start_str, end_str)
        span = report_span(window)
        print(
            f"Generating attendance report for {window.start} to {window.end_exclusive} "
            f"(weeks {span.start} to {span.end_exclusive})"
        )

        # 2. Fetch records with employee and location joins
        records = fetch_attendance_records(span)
        print(f"\nTotal records: {len(records)}")

        if not records:
            print("No attendance records found!")
            return

        # 3. Validate records (bad data is flagged, not dropped)
        validated_records = validate_records(records)
        conflicts = [r for r in validated_records if r.get("error_message")]
        print(f"Records with conflicts: {len(conflicts)}")
        for record in conflicts:
            print(f"  {record['id']}: {record['error_message']}")

        # 4. Generate Excel file
        output_path = generate_output_filename(window.start.year)
        wb = build_report(validated_records, window)
        save_report(wb, output_path)
        print(f"Sheets: {len(wb.worksheets)}")

        # 5. Closed-shift hours for the current month
        month_start = local_now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        print(f"\nHours since {month_start:%d.%m.%Y} (closed shifts):")
        for name, hours in sorted(hours_by_employee(validated_records, month_start).items()):
            print(f"  {name}: {hours:.2f}")

        print("\nDone!")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate attendance report")
    parser.add_argument(
        "--year",
        type=int,
        help="Report year. Defaults to REPORT_YEAR or the current year.",
    )
    parser.add_argument("--start", help="Window start (YYYY-MM-DD). Requires --end.")
    parser.add_argument("--end", help="Exclusive window end (YYYY-MM-DD). Requires --start.")
    args = parser.parse_args()

    main(args.year, args.start, args.end)
