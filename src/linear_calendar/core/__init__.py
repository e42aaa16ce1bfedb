"""Core configuration and calendar-date utilities."""

from .config import APP_NAME, DATA_DIR, GRID_COLUMNS, MAX_YEAR, MIN_YEAR, STATE_FILE, ensure_data_dir
from .dates import (
    InvalidDateFormatError,
    days_in_month,
    format_iso,
    is_today,
    is_weekend,
    parse_iso,
)

__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "GRID_COLUMNS",
    "InvalidDateFormatError",
    "MAX_YEAR",
    "MIN_YEAR",
    "STATE_FILE",
    "days_in_month",
    "ensure_data_dir",
    "format_iso",
    "is_today",
    "is_weekend",
    "parse_iso",
]
