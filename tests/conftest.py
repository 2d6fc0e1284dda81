"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def sample_record():
    """Sample parsed attendance record for testing."""
    return {
        "id": "rec-1",
        "first_name": "Anna",
        "last_name": "Schmidt",
        "location_name": "Werkstatt Nord",
        "check_in": datetime(2025, 3, 10, 8, 0),
        "check_out": datetime(2025, 3, 10, 16, 30),
        "task": "Inventory",
        "error_message": None,
    }


@pytest.fixture
def sample_records(sample_record):
    """Records for two employees, one of them with an open shift."""
    return [
        sample_record,
        {
            **sample_record,
            "id": "rec-2",
            "check_in": datetime(2025, 3, 11, 9, 0),
            "check_out": datetime(2025, 3, 11, 12, 15),
        },
        {
            **sample_record,
            "id": "rec-3",
            "first_name": "Jonas",
            "last_name": "Weber",
            "location_name": "Lager Süd",
            "check_in": datetime(2025, 3, 10, 8, 0),
            "check_out": None,
        },
    ]


@pytest.fixture
def fixed_now():
    """Clock frozen at 2025-03-10 10:00."""
    return lambda: datetime(2025, 3, 10, 10, 0)


@pytest.fixture
def supabase_row():
    """Attendance row as returned by the joined Supabase select."""
    return {
        "id": "7c1e0f4e-1b7a-4f0e-9d7e-3f1a2b3c4d5e",
        "profile_id": "a1b2c3d4-0000-0000-0000-000000000001",
        "location_id": "a1b2c3d4-0000-0000-0000-000000000002",
        "check_in": "2025-03-10T07:00:00+00:00",
        "check_out": "2025-03-10T15:30:00+00:00",
        "task": "Inventory",
        "comments": None,
        "created_at": "2025-03-10T07:00:01+00:00",
        "profiles": {"first_name": "Anna", "last_name": "Schmidt"},
        "locations": {"name": "Werkstatt Nord"},
    }
