from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import STATE_FILE

load_dotenv()


@dataclass(frozen=True)
class GoogleSettings:
    access_token: Optional[str]
    api_base_url: str
    userinfo_url: str
    revoke_url: str
    time_zone: str
    max_results: int
    request_timeout: float
    default_calendar_id: str

    @property
    def has_token(self) -> bool:
        return bool(self.access_token)


@dataclass(frozen=True)
class StorageSettings:
    state_file: Path


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    organization: str
    holiday_country: str
    holiday_subdiv: Optional[str] = None


@dataclass(frozen=True)
class AppSettings:
    google: GoogleSettings
    storage: StorageSettings
    ui: UiSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    google = GoogleSettings(
        access_token=os.getenv("LINEAR_CALENDAR_GOOGLE_TOKEN"),
        api_base_url=os.getenv("LINEAR_CALENDAR_GOOGLE_API_BASE", "https://www.googleapis.com/calendar/v3").rstrip("/"),
        userinfo_url=os.getenv("LINEAR_CALENDAR_GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v3/userinfo"),
        revoke_url=os.getenv("LINEAR_CALENDAR_GOOGLE_REVOKE_URL", "https://oauth2.googleapis.com/revoke"),
        time_zone=os.getenv("LINEAR_CALENDAR_TIMEZONE", "UTC"),
        max_results=_int_from_env("LINEAR_CALENDAR_MAX_RESULTS", 2500),
        request_timeout=_float_from_env("LINEAR_CALENDAR_HTTP_TIMEOUT", 30.0),
        default_calendar_id=os.getenv("LINEAR_CALENDAR_DEFAULT_CALENDAR", "primary"),
    )

    state_file = os.getenv("LINEAR_CALENDAR_STATE_FILE")
    storage = StorageSettings(state_file=Path(state_file) if state_file else STATE_FILE)

    ui = UiSettings(
        app_name=os.getenv("LINEAR_CALENDAR_APP_NAME", "Linear Calendar"),
        organization=os.getenv("LINEAR_CALENDAR_APP_ORG", "LinearCalendar"),
        holiday_country=os.getenv("LINEAR_CALENDAR_HOLIDAY_COUNTRY", "US"),
        holiday_subdiv=os.getenv("LINEAR_CALENDAR_HOLIDAY_SUBDIV") or None,
    )

    return AppSettings(google=google, storage=storage, ui=ui)
