"""Tests for worked-hours arithmetic."""

from datetime import datetime, timezone

import pytest

import services.hours as hours
from services.hours import hours_by_employee, monthly_hours, worked_hours

MONTH_START = datetime(2025, 3, 1)


def test_worked_hours_rounds_to_two_decimals():
    assert worked_hours(datetime(2025, 3, 10, 8, 0), datetime(2025, 3, 10, 16, 30)) == 8.5
    assert worked_hours(datetime(2025, 3, 10, 8, 0), datetime(2025, 3, 10, 8, 20)) == 0.33


def test_worked_hours_inverted_is_zero():
    assert worked_hours(datetime(2025, 3, 10, 8, 0), datetime(2025, 3, 10, 7, 0)) == 0.0


def test_monthly_hours_counts_closed_shifts_only(sample_records):
    # Anna: 8.5 + 3.25, Jonas' open shift is excluded
    assert monthly_hours(sample_records, MONTH_START) == 11.75


def test_monthly_hours_skips_earlier_months(sample_record):
    earlier = {
        **sample_record,
        "check_in": datetime(2025, 2, 28, 8, 0),
        "check_out": datetime(2025, 2, 28, 12, 0),
    }
    assert monthly_hours([earlier, sample_record], MONTH_START) == 8.5


def test_hours_by_employee(sample_records):
    assert hours_by_employee(sample_records, MONTH_START) == {
        "Anna Schmidt": 11.75,
        "Jonas Weber": 0.0,
    }


class TestDaylightSaving:
    @pytest.fixture(autouse=True)
    def berlin_timezone(self, monkeypatch):
        monkeypatch.setattr(hours, "REPORT_TIMEZONE", "Europe/Berlin")

    def test_spring_forward_night_loses_an_hour(self):
        # 29/30 March 2025: clocks jump from 02:00 to 03:00
        assert worked_hours(datetime(2025, 3, 29, 22, 0), datetime(2025, 3, 30, 6, 0)) == 7.0

    def test_fall_back_night_gains_an_hour(self):
        # 25/26 October 2025: clocks go back from 03:00 to 02:00
        assert worked_hours(datetime(2025, 10, 25, 22, 0), datetime(2025, 10, 26, 6, 0)) == 9.0

    def test_repeated_hour_uses_fold(self):
        first_pass = datetime(2025, 10, 26, 2, 30)
        second_pass = datetime(2025, 10, 26, 2, 30, fold=1)
        assert worked_hours(first_pass, second_pass) == 1.0

    def test_aware_values_accepted(self):
        check_in = datetime(2025, 3, 29, 21, 0, tzinfo=timezone.utc)
        check_out = datetime(2025, 3, 30, 4, 0, tzinfo=timezone.utc)
        assert worked_hours(check_in, check_out) == 7.0
