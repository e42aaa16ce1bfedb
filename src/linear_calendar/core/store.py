from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from ..domain import (
    DEFAULT_EVENT_COLORS,
    CalendarInfo,
    Event,
    LocalEvent,
    MirroredEvent,
    ModalMode,
    ModalState,
    Theme,
    UserProfile,
)
from .config import MAX_YEAR, MIN_YEAR
from .dates import InvalidDateFormatError, parse_iso
from .layout import PositionedEvent, layout_month
from .persistence import SCHEMA_VERSION, StateFile

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"title", "start_date", "end_date", "color", "description"})

Listener = Callable[["EventStore"], None]


class EventNotFoundError(KeyError):
    """Raised when a mutation names an event the store does not hold."""


def clamp_year(year: int) -> int:
    return max(MIN_YEAR, min(MAX_YEAR, year))


def _coerce_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unsupported event fields: {', '.join(sorted(unknown))}")
    coerced = dict(changes)
    for key in ("start_date", "end_date"):
        value = coerced.get(key)
        if isinstance(value, str):
            coerced[key] = parse_iso(value)
    return coerced


class EventStore:
    """Single source of truth for local events, mirrored events and UI state.

    Every mutation is synchronous. Collections are swapped for new tuples rather
    than edited in place, so a reader holding a previous snapshot never sees a
    half-applied change. Listeners run after each mutation, in subscription order.
    """

    def __init__(self, persistence: Optional[StateFile] = None, *, today: Optional[date] = None) -> None:
        self._persistence = persistence
        self._listeners: list[Listener] = []
        self._local: Tuple[LocalEvent, ...] = ()
        self._mirrored: Tuple[MirroredEvent, ...] = ()
        self._calendars: Tuple[CalendarInfo, ...] = ()
        self._modal = ModalState()
        self._theme = Theme.LIGHT
        self._year = clamp_year((today or date.today()).year)
        self._connected = False
        self._loading = False
        self._profile: Optional[UserProfile] = None
        if persistence is not None:
            self._restore(persistence.load())

    # ------------------------------------------------------------------ snapshots

    @property
    def local_events(self) -> Tuple[LocalEvent, ...]:
        return self._local

    @property
    def mirrored_events(self) -> Tuple[MirroredEvent, ...]:
        return self._mirrored

    @property
    def calendars(self) -> Tuple[CalendarInfo, ...]:
        return self._calendars

    @property
    def enabled_calendars(self) -> Tuple[CalendarInfo, ...]:
        return tuple(calendar for calendar in self._calendars if calendar.enabled)

    @property
    def modal(self) -> ModalState:
        return self._modal

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def current_year(self) -> int:
        return self._year

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def profile(self) -> Optional[UserProfile]:
        return self._profile

    def all_events(self) -> List[Event]:
        return [*self._local, *self._mirrored]

    def find_event(self, event_id: str) -> Optional[Event]:
        for event in self.all_events():
            if event.id == event_id:
                return event
        return None

    def calendar(self, calendar_id: str) -> Optional[CalendarInfo]:
        for calendar in self._calendars:
            if calendar.id == calendar_id:
                return calendar
        return None

    def events_for_month(self, year: int, month: int) -> List[PositionedEvent]:
        return layout_month(self.all_events(), year, month)

    # ------------------------------------------------------------------ subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, *, persist: bool = False) -> None:
        if persist:
            self._persist()
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------ local events

    def add_event(
        self,
        *,
        title: str,
        start_date: date | str,
        end_date: date | str | None = None,
        color: str = DEFAULT_EVENT_COLORS[0],
        description: str = "",
    ) -> LocalEvent:
        start = parse_iso(start_date) if isinstance(start_date, str) else start_date
        end = parse_iso(end_date) if isinstance(end_date, str) else (end_date or start)
        event = LocalEvent(
            id=str(uuid4()),
            title=title,
            start_date=start,
            end_date=end,
            color=color,
            description=description,
        ).clamped()
        self._local = (*self._local, event)
        self._commit(persist=True)
        return event

    def update_event(self, event_id: str, **changes: Any) -> LocalEvent:
        updates = _coerce_changes(changes)
        for index, event in enumerate(self._local):
            if event.id == event_id:
                updated = replace(event, **updates).clamped()
                self._local = (*self._local[:index], updated, *self._local[index + 1 :])
                self._commit(persist=True)
                return updated
        raise EventNotFoundError(event_id)

    def delete_event(self, event_id: str) -> bool:
        remaining = tuple(event for event in self._local if event.id != event_id)
        if len(remaining) == len(self._local):
            return False
        self._local = remaining
        self._commit(persist=True)
        return True

    # ------------------------------------------------------------------ mirrored events

    def set_mirrored_events(self, events: Iterable[MirroredEvent]) -> None:
        self._mirrored = tuple(event.clamped() for event in events)
        self._commit()

    def add_mirrored_event(self, event: MirroredEvent) -> None:
        self._mirrored = (*self._mirrored, event.clamped())
        self._commit()

    def update_mirrored_event(self, event_id: str, **changes: Any) -> MirroredEvent:
        updates = _coerce_changes(changes)
        for index, event in enumerate(self._mirrored):
            if event.id == event_id:
                updated = replace(event, **updates).clamped()
                self._mirrored = (*self._mirrored[:index], updated, *self._mirrored[index + 1 :])
                self._commit()
                return updated
        raise EventNotFoundError(event_id)

    def remove_mirrored_event(self, event_id: str) -> bool:
        remaining = tuple(event for event in self._mirrored if event.id != event_id)
        if len(remaining) == len(self._mirrored):
            return False
        self._mirrored = remaining
        self._commit()
        return True

    def clear_mirrored(self) -> None:
        self._mirrored = ()
        self._commit()

    # ------------------------------------------------------------------ modal

    def open_create_modal(self, prefill_date: Optional[date] = None) -> None:
        self._modal = ModalState(is_open=True, mode=ModalMode.CREATE, prefill_date=prefill_date)
        self._commit()

    def open_edit_modal(self, event_id: str) -> None:
        self._modal = ModalState(is_open=True, mode=ModalMode.EDIT, event_id=event_id)
        self._commit()

    def close_modal(self) -> None:
        self._modal = ModalState()
        self._commit()

    # ------------------------------------------------------------------ navigation and theme

    def set_year(self, year: int) -> int:
        clamped = clamp_year(year)
        if clamped != self._year:
            self._year = clamped
            self._commit(persist=True)
        return self._year

    def prev_year(self) -> int:
        return self.set_year(self._year - 1)

    def next_year(self) -> int:
        return self.set_year(self._year + 1)

    def jump_to_today(self, today: Optional[date] = None) -> int:
        return self.set_year((today or date.today()).year)

    def toggle_theme(self) -> Theme:
        self._theme = self._theme.toggled()
        self._commit(persist=True)
        return self._theme

    # ------------------------------------------------------------------ remote session state

    def set_calendars(self, calendars: Iterable[CalendarInfo]) -> None:
        self._calendars = tuple(calendars)
        self._commit()

    def toggle_calendar(self, calendar_id: str) -> Tuple[CalendarInfo, ...]:
        self._calendars = tuple(
            replace(calendar, enabled=not calendar.enabled) if calendar.id == calendar_id else calendar
            for calendar in self._calendars
        )
        self._commit()
        return self._calendars

    def set_connected(self, connected: bool) -> None:
        self._connected = connected
        self._commit()

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._commit()

    def set_profile(self, profile: Optional[UserProfile]) -> None:
        self._profile = profile
        self._commit()

    # ------------------------------------------------------------------ persistence

    def snapshot(self) -> Dict[str, Any]:
        return {
            "events": [event.to_record() for event in self._local],
            "theme": self._theme.value,
            "current_year": self._year,
            "schema_version": SCHEMA_VERSION,
        }

    def _persist(self) -> None:
        if self._persistence is None:
            return
        self._persistence.save(self.snapshot())

    def _restore(self, state: Dict[str, Any]) -> None:
        events: list[LocalEvent] = []
        for record in state.get("events") or []:
            try:
                events.append(LocalEvent.from_record(record))
            except (InvalidDateFormatError, KeyError, TypeError) as exc:
                logger.warning("Skipping unreadable stored event %r: %s", record, exc)
        self._local = tuple(events)
        try:
            self._theme = Theme(state.get("theme") or Theme.LIGHT.value)
        except ValueError:
            self._theme = Theme.LIGHT
        year = state.get("current_year")
        if isinstance(year, int):
            self._year = clamp_year(year)


__all__ = ["EDITABLE_FIELDS", "EventNotFoundError", "EventStore", "clamp_year"]
