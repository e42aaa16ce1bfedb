"""Conversion between Google Calendar payloads and local events.

Google stores all-day events with an exclusive end date, the local model uses
an inclusive one. Reads subtract one day from ``end.date`` and writes add one.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.dates import parse_iso
from ..domain import DEFAULT_REMOTE_COLOR, CalendarInfo, MirroredEvent, UserProfile

UNTITLED = "(No title)"

GOOGLE_COLOR_MAP: Dict[str, str] = {
    "1": "#7986cb",  # lavender
    "2": "#33b679",  # sage
    "3": "#8e24aa",  # grape
    "4": "#e67c73",  # flamingo
    "5": "#f6bf26",  # banana
    "6": "#f4511e",  # tangerine
    "7": "#039be5",  # peacock
    "8": "#616161",  # graphite
    "9": "#3f51b5",  # blueberry
    "10": "#0b8043",  # basil
    "11": "#d50000",  # tomato
}


def exclusive_to_inclusive(end: date) -> date:
    return end - timedelta(days=1)


def inclusive_to_exclusive(end: date) -> date:
    return end + timedelta(days=1)


class GoogleEventTime(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    all_day: Optional[str] = Field(default=None, alias="date")
    date_time: Optional[str] = Field(default=None, alias="dateTime")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")

    @classmethod
    def for_day(cls, day: date, time_zone: str) -> "GoogleEventTime":
        return cls(all_day=day.isoformat(), time_zone=time_zone)

    @property
    def is_set(self) -> bool:
        return bool(self.all_day or self.date_time)


class GoogleEventItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    color_id: Optional[str] = Field(default=None, alias="colorId")
    start: Optional[GoogleEventTime] = None
    end: Optional[GoogleEventTime] = None

    @property
    def is_displayable(self) -> bool:
        return self.start is not None and self.start.is_set and self.end is not None and self.end.is_set

    def to_domain(self, calendar_id: str) -> MirroredEvent:
        if not self.is_displayable:
            raise ValueError(f"Google event {self.id} has no start or end time")
        if self.start.all_day:
            start_date = parse_iso(self.start.all_day)
            end_date = exclusive_to_inclusive(parse_iso(self.end.all_day or self.start.all_day))
        else:
            start_date = parse_iso((self.start.date_time or "")[:10])
            end_date = parse_iso((self.end.date_time or self.start.date_time or "")[:10])
        color = GOOGLE_COLOR_MAP.get(self.color_id or "", DEFAULT_REMOTE_COLOR)
        return MirroredEvent.build(
            calendar_id=calendar_id,
            remote_id=self.id,
            title=self.summary or UNTITLED,
            start_date=start_date,
            end_date=end_date,
            color=color,
            description=self.description or "",
        )


class GoogleEventWrite(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: Optional[str] = None
    description: Optional[str] = None
    start: Optional[GoogleEventTime] = None
    end: Optional[GoogleEventTime] = None

    @classmethod
    def for_range(
        cls,
        *,
        title: Optional[str],
        description: Optional[str],
        start_date: date,
        end_date: date,
        time_zone: str,
    ) -> "GoogleEventWrite":
        return cls(
            summary=title,
            description=description,
            start=GoogleEventTime.for_day(start_date, time_zone),
            end=GoogleEventTime.for_day(inclusive_to_exclusive(end_date), time_zone),
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def patch_payload(event: MirroredEvent, changes: Dict[str, Any], time_zone: str) -> Dict[str, Any]:
    """Build a PATCH body holding only the changed fields.

    The API needs start and end together, so when only one of them changed the
    event's current value is sent for the other.
    """

    body = GoogleEventWrite(
        summary=changes.get("title"),
        description=changes.get("description"),
    )
    if "start_date" in changes or "end_date" in changes:
        start = changes.get("start_date") or event.start_date
        end = changes.get("end_date") or event.end_date
        body.start = GoogleEventTime.for_day(start, time_zone)
        body.end = GoogleEventTime.for_day(inclusive_to_exclusive(end), time_zone)
    return body.to_payload()


class GoogleCalendarListEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    summary: str = ""
    background_color: Optional[str] = Field(default=None, alias="backgroundColor")

    def to_domain(self) -> CalendarInfo:
        return CalendarInfo(
            id=self.id,
            summary=self.summary or self.id,
            background_color=self.background_color or DEFAULT_REMOTE_COLOR,
            enabled=True,
        )


class GoogleUserInfo(BaseModel):
    name: str = ""
    email: str = ""
    picture: str = ""

    def to_domain(self) -> UserProfile:
        return UserProfile(name=self.name, email=self.email, picture=self.picture)


__all__ = [
    "GOOGLE_COLOR_MAP",
    "GoogleCalendarListEntry",
    "GoogleEventItem",
    "GoogleEventTime",
    "GoogleEventWrite",
    "GoogleUserInfo",
    "UNTITLED",
    "exclusive_to_inclusive",
    "inclusive_to_exclusive",
    "patch_payload",
]
