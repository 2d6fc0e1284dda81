"""Tests for attendance record validation."""

from datetime import date, datetime, timezone

import core.validation as validation
from core.validation import check_in_date, employee_display_name, validate_records


def test_display_name_joins_and_trims(sample_record):
    assert employee_display_name(sample_record) == "Anna Schmidt"
    assert employee_display_name({**sample_record, "last_name": None}) == "Anna"


def test_display_name_placeholder_for_missing_first_name(sample_record):
    assert employee_display_name({**sample_record, "first_name": None}) == "Unknown Schmidt"
    assert employee_display_name({**sample_record, "first_name": "", "last_name": ""}) == "Unknown"


def test_display_name_strips_whitespace_before_placeholder(sample_record):
    assert employee_display_name({**sample_record, "first_name": "  "}) == "Unknown Schmidt"
    assert employee_display_name({**sample_record, "first_name": " Anna ", "last_name": "\t"}) == "Anna"


def test_check_in_date_of_aware_value_is_local(sample_record, monkeypatch):
    monkeypatch.setattr(validation, "REPORT_TIMEZONE", "Europe/Berlin")
    late = {**sample_record, "check_in": datetime(2025, 3, 10, 23, 30, tzinfo=timezone.utc)}
    assert check_in_date(late) == date(2025, 3, 11)


def test_clean_records_have_no_errors(sample_records):
    validated = validate_records(sample_records)
    assert [r["error_message"] for r in validated] == [None, None, None]


def test_missing_joins_flagged(sample_record):
    record = {**sample_record, "first_name": None, "last_name": None, "location_name": None}
    (validated,) = validate_records([record])
    assert validated["error_message"] == "Missing employee name; Missing location"


def test_missing_check_in_flagged(sample_record):
    (validated,) = validate_records([{**sample_record, "check_in": None}])
    assert validated["error_message"] == "Missing check-in"


def test_inverted_shift_flagged(sample_record):
    record = {**sample_record, "check_out": datetime(2025, 3, 10, 7, 0)}
    (validated,) = validate_records([record])
    assert "is before check-in" in validated["error_message"]


def test_duplicate_same_day_flags_only_later_record(sample_record):
    later = {
        **sample_record,
        "id": "rec-dup",
        "check_in": datetime(2025, 3, 10, 18, 0),
        "check_out": datetime(2025, 3, 10, 19, 0),
    }
    first, second = validate_records([sample_record, later])
    assert first["error_message"] is None
    assert second["error_message"] == "Duplicate record for 10.03.2025; record rec-1 is exported instead"


def test_same_day_for_different_employees_is_not_duplicate(sample_record):
    other = {**sample_record, "id": "rec-9", "first_name": "Jonas", "last_name": "Weber"}
    validated = validate_records([sample_record, other])
    assert all(r["error_message"] is None for r in validated)
