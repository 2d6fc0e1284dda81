"""Tests for the command-line scripts and the request log."""

import sqlite3
from datetime import date

import pytest

from api.logging import RequestLog, log_request
from models.attendance import ReportWindow
from scripts.create_attendance_report import get_report_window
from scripts.init_db import create_database


class TestReportWindowArgs:
    def test_year(self):
        assert get_report_window(2025, None, None) == ReportWindow(
            start=date(2025, 1, 1), end_exclusive=date(2026, 1, 1)
        )

    def test_explicit_dates(self):
        assert get_report_window(None, "2024-12-29", "2026-01-01") == ReportWindow(
            start=date(2024, 12, 29), end_exclusive=date(2026, 1, 1)
        )

    def test_start_without_end(self):
        with pytest.raises(ValueError):
            get_report_window(None, "2025-01-01", None)


def test_request_log_written(tmp_path):
    db_path = tmp_path / "db" / "attendance-export.db"
    create_database(db_path)

    log = RequestLog(
        endpoint="/v1/reports/attendance",
        method="POST",
        status_code=200,
        sheets_generated=2,
        total_hours=10.5,
        warnings=["Missing location"],
    )
    log_request(log, db_path)

    conn = sqlite3.connect(db_path)
    try:
        row = conn.execute(
            "SELECT status_code, sheets_generated, total_hours FROM api_requests WHERE request_id = ?",
            (log.request_id,),
        ).fetchone()
        details = conn.execute(
            "SELECT detail_type, message FROM api_request_details WHERE request_id = ?",
            (log.request_id,),
        ).fetchall()
    finally:
        conn.close()

    assert row == (200, 2, 10.5)
    assert details == [("warning", "Missing location")]
