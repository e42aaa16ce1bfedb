"""Remote calendar access and external collaborators."""

from __future__ import annotations

from .errors import AuthExpiredError, AuthRequiredError, CalendarSyncError, RemoteRequestFailedError
from .google_calendar import GoogleCalendarAdapter
from .holidays import HolidayLookup, country_holiday_lookup, visible_holidays
from .session import GoogleSession

__all__ = [
    "AuthExpiredError",
    "AuthRequiredError",
    "CalendarSyncError",
    "GoogleCalendarAdapter",
    "GoogleSession",
    "HolidayLookup",
    "RemoteRequestFailedError",
    "country_holiday_lookup",
    "visible_holidays",
]
