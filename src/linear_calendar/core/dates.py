"""Calendar-date arithmetic shared by the layout, drag and sync layers."""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from typing import Optional, Tuple

_ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateFormatError(ValueError):
    """Raised when a string is not a fixed-width ``YYYY-MM-DD`` calendar date."""


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def format_iso(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_iso(text: str) -> date:
    if not isinstance(text, str) or not _ISO_PATTERN.match(text):
        raise InvalidDateFormatError(f"Expected YYYY-MM-DD, got {text!r}")
    try:
        return date(int(text[0:4]), int(text[5:7]), int(text[8:10]))
    except ValueError as exc:
        raise InvalidDateFormatError(f"Not a calendar date: {text!r}") from exc


def is_weekend(year: int, month: int, day: int) -> bool:
    return date(year, month, day).weekday() >= 5


def is_today(year: int, month: int, day: int, *, today: Optional[date] = None) -> bool:
    reference = today or date.today()
    return (year, month, day) == (reference.year, reference.month, reference.day)


def month_label(year: int, month: int) -> str:
    return date(year, month, 1).strftime("%b %Y")


def shift_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def day_diff(origin: date, target: date) -> int:
    """Whole days from ``origin`` to ``target`` (negative when moving backwards)."""

    return (target - origin).days


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


__all__ = [
    "InvalidDateFormatError",
    "day_diff",
    "days_in_month",
    "format_iso",
    "is_today",
    "is_weekend",
    "month_bounds",
    "month_label",
    "parse_iso",
    "shift_days",
    "year_bounds",
]
