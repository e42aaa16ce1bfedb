"""Domain models for the linear calendar."""

from __future__ import annotations

from .enums import DragKind, ModalMode, Theme
from .models import (
    DEFAULT_EVENT_COLORS,
    DEFAULT_REMOTE_COLOR,
    CalendarInfo,
    Event,
    Holiday,
    LocalEvent,
    MirroredEvent,
    ModalState,
    UserProfile,
)

__all__ = [
    "CalendarInfo",
    "DEFAULT_EVENT_COLORS",
    "DEFAULT_REMOTE_COLOR",
    "DragKind",
    "Event",
    "Holiday",
    "LocalEvent",
    "MirroredEvent",
    "ModalMode",
    "ModalState",
    "Theme",
    "UserProfile",
]
