"""End-to-end check over a generated year of attendance rows."""

from datetime import datetime

from core.validation import employee_display_name, validate_records
from fixtures.generate_attendance import generate_rows
from services.attendance import parse_record
from services.reports import build_report, default_window


def test_full_year_report():
    records = validate_records([parse_record(row) for row in generate_rows(2025, 4, seed=7)])
    names = {employee_display_name(r) for r in records}

    wb = build_report(records, default_window(2025), lambda: datetime(2026, 1, 1))

    assert len(wb.worksheets) == len(names)
    for ws in wb.worksheets:
        # header + 53 weeks of 7 days and a total row
        assert ws.max_row == 1 + 53 * 8
        assert ws.cell(row=ws.max_row, column=4).value == f"=SUM(D{ws.max_row - 7}:D{ws.max_row - 1})"
