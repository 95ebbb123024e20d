"""Application configuration for Fitness Club Manager.

This module centralizes:
- Application UI settings
- Filesystem paths (data files and logs)
- Membership rules (plan prices, premium charge, loyalty points)
- Lookup tables (genders, theme colors)

All paths are based on the application root directory and are created on demand.
"""

from __future__ import annotations

from pathlib import Path

# ------------------------------
# Application Settings
# ------------------------------

APP_NAME: str = "Fitness Club Management System"
VERSION: str = "1.0.0"

WINDOW_WIDTH: int = 1280
WINDOW_HEIGHT: int = 760
MIN_WINDOW_WIDTH: int = 1000
MIN_WINDOW_HEIGHT: int = 600

THEME_NAME: str = "cosmo"

# ------------------------------
# Paths Configuration
# ------------------------------

# Application root directory (the directory containing this file).
BASE_DIR: Path = Path(__file__).resolve().parent

# Data directory (report exports and saved rosters).
DATA_DIR: Path = BASE_DIR / "data"

# Log directory (activity log and crash tracebacks).
LOGS_DIR: Path = BASE_DIR / "logs"

MEMBERS_REPORT_FILE: str = "members.txt"
MEMBERS_DATA_FILE: str = "members_data.txt"

ACTIVITY_LOG_PATH: Path = LOGS_DIR / "activity.log"
ERROR_LOG_PATH: Path = LOGS_DIR / "error.log"

# ------------------------------
# Regular Membership
# ------------------------------

# Insertion order defines the upgrade tiers (lowest first).
PLAN_PRICES: dict[str, float] = {
    "Basic": 6500.0,
    "Standard": 12500.0,
    "Deluxe": 18500.0,
}
DEFAULT_PLAN: str = "Basic"

ATTENDANCE_UPGRADE_LIMIT: int = 30
REGULAR_LOYALTY_POINTS: int = 5

# ------------------------------
# Premium Membership
# ------------------------------

PREMIUM_CHARGE: float = 50000.0
PREMIUM_DISCOUNT_RATE: float = 0.10
PREMIUM_LOYALTY_POINTS: int = 10

# ------------------------------
# Registration
# ------------------------------

# Appended to the local part typed into the form.
EMAIL_DOMAIN: str = "@gmail.com"

GENDER_OPTIONS: tuple[str, ...] = ("Male", "Female")

CURRENCY: str = "NPR"

# ------------------------------
# Theme Colors
# ------------------------------

THEME_COLORS: dict[str, str] = {
    "primary": "#2980b9",
    "secondary": "#3498db",
    "success": "#2ecc71",
    "warning": "#f1c40f",
    "danger": "#e74c3c",
    "background": "#ecf0f1",
    "text_primary": "#2c3e50",
    "active_row": "#dcfce7",
    "inactive_row": "#e5e7eb",
}

# ------------------------------
# Date Format
# ------------------------------

DATE_FORMAT: str = "%Y-%m-%d"
DATETIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def init_directories() -> None:
    """Create all necessary application directories.

    This function is safe to call multiple times.
    """

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    LOGS_DIR.mkdir(parents=True, exist_ok=True)


def get_report_path() -> Path:
    """Return the default path of the human-readable members report."""

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR / MEMBERS_REPORT_FILE


def get_data_file_path() -> Path:
    """Return the default path of the machine-readable roster file."""

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR / MEMBERS_DATA_FILE
