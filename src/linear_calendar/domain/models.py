from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional, Union

from ..core.dates import parse_iso
from .enums import ModalMode

DEFAULT_EVENT_COLORS = (
    "#6366f1",  # indigo
    "#f43f5e",  # rose
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#0ea5e9",  # sky
    "#f97316",  # orange
)

DEFAULT_REMOTE_COLOR = "#3b82f6"


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return parse_iso(value)


@dataclass(frozen=True, slots=True, kw_only=True)
class _EventFields:
    id: str
    title: str
    start_date: date
    end_date: date
    color: str
    description: str = ""

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def clamped(self):
        """Return a copy whose end date is never before its start date."""

        if self.end_date < self.start_date:
            return replace(self, end_date=self.start_date)
        return self


@dataclass(frozen=True, slots=True, kw_only=True)
class LocalEvent(_EventFields):
    """An event owned and persisted by this application."""

    @property
    def is_mirrored(self) -> bool:
        return False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "LocalEvent":
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            start_date=_as_date(record["start_date"]),
            end_date=_as_date(record["end_date"]),
            color=record.get("color") or DEFAULT_EVENT_COLORS[0],
            description=record.get("description") or "",
        ).clamped()

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "color": self.color,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class MirroredEvent(_EventFields):
    """A cached copy of an event whose source of truth is a remote calendar."""

    calendar_id: str
    remote_id: str

    def __post_init__(self) -> None:
        if not self.calendar_id:
            raise ValueError("Mirrored events require a calendar id.")

    @property
    def is_mirrored(self) -> bool:
        return True

    @staticmethod
    def make_id(calendar_id: str, remote_id: str) -> str:
        return f"{calendar_id}::{remote_id}"

    @classmethod
    def build(
        cls,
        *,
        calendar_id: str,
        remote_id: str,
        title: str,
        start_date: date,
        end_date: date,
        color: str = DEFAULT_REMOTE_COLOR,
        description: str = "",
    ) -> "MirroredEvent":
        return cls(
            id=cls.make_id(calendar_id, remote_id),
            title=title,
            start_date=start_date,
            end_date=end_date,
            color=color,
            description=description,
            calendar_id=calendar_id,
            remote_id=remote_id,
        ).clamped()


Event = Union[LocalEvent, MirroredEvent]


@dataclass(frozen=True, slots=True)
class ModalState:
    is_open: bool = False
    mode: ModalMode = ModalMode.CREATE
    event_id: Optional[str] = None
    prefill_date: Optional[date] = None


@dataclass(frozen=True, slots=True)
class CalendarInfo:
    id: str
    summary: str
    background_color: str = DEFAULT_REMOTE_COLOR
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class UserProfile:
    name: str = ""
    email: str = ""
    picture: str = ""


@dataclass(frozen=True, slots=True)
class Holiday:
    date: date
    name: str
    type: str
