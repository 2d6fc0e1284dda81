"""
Configuration constants and environment setup.
"""

import os
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "attendance-export.db"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# SUPABASE CREDENTIALS (from environment)
# =============================================================================

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")

# Joined select used by the admin dashboard
ATTENDANCE_TABLE = "attendance_records"
ATTENDANCE_SELECT = (
    "*, profiles:profile_id (first_name, last_name), locations:location_id (name)"
)

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

REPORT_TIMEZONE = os.environ.get("REPORT_TIMEZONE", "Europe/Berlin")
REPORT_YEAR = int(os.environ.get("REPORT_YEAR", str(date.today().year)))
REPORT_FILENAME_PREFIX = "anwesenheit"

REPORT_LOCATION_LABEL = os.environ.get("REPORT_LOCATION_LABEL", "Location")
REPORT_HEADERS = ["Week", "Day", "Date", "Worked Hours", REPORT_LOCATION_LABEL]
HOURS_COLUMN = "D"
HOURS_NUMBER_FORMAT = "0.00"

# Indexed by date.weekday(); spelled out so output does not depend on locale
WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

UNKNOWN_EMPLOYEE_NAME = "Unknown"

# Excel sheet name limit
MAX_SHEET_NAME_LENGTH = 31

# =============================================================================
# API CONFIGURATION
# =============================================================================

REPORT_API_KEY = os.environ.get("REPORT_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
