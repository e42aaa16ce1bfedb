"""Pointer-driven edits of an event's date range.

A gesture starts on a bar (move) or on one of its edges (resize), and ends
with a drop on a day cell or a cancel. Only one gesture exists at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Protocol, Tuple

from ..domain import DragKind, Event
from .dates import day_diff, shift_days
from .store import EventStore

logger = logging.getLogger(__name__)


class DragStateError(RuntimeError):
    """Raised when a gesture starts while another one is still active."""


class MirroredEditSink(Protocol):
    def submit_mirrored_edit(self, event_id: str, **changes: Any) -> None:
        ...


@dataclass(frozen=True, slots=True)
class DragState:
    event_id: str
    kind: DragKind
    origin_date: date


@dataclass(frozen=True, slots=True)
class DragOutcome:
    event_id: str
    kind: DragKind
    day_diff: int
    start_date: date
    end_date: date
    mirrored: bool


def anchor_date(event: Event, kind: DragKind) -> date:
    return event.end_date if kind is DragKind.RESIZE_END else event.start_date


def resolve_drop(event: Event, kind: DragKind, origin: date, target: date) -> Optional[Tuple[date, date]]:
    """Return the new ``(start, end)`` for a drop, or ``None`` when nothing changes.

    A resize that would put the start after the end is rejected silently.
    """

    offset = day_diff(origin, target)
    if offset == 0:
        return None

    start, end = event.start_date, event.end_date
    if kind is DragKind.MOVE:
        start, end = shift_days(start, offset), shift_days(end, offset)
    elif kind is DragKind.RESIZE_START:
        candidate = shift_days(start, offset)
        if candidate <= end:
            start = candidate
    elif kind is DragKind.RESIZE_END:
        candidate = shift_days(end, offset)
        if candidate >= start:
            end = candidate

    if (start, end) == (event.start_date, event.end_date):
        return None
    return start, end


class DragController:
    def __init__(self, store: EventStore, mirrored_sink: Optional[MirroredEditSink] = None) -> None:
        self._store = store
        self._mirrored_sink = mirrored_sink
        self._state: Optional[DragState] = None

    @property
    def state(self) -> Optional[DragState]:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is not None

    def begin(self, event_id: str, kind: DragKind | str, origin_date: Optional[date] = None) -> DragState:
        if self._state is not None:
            raise DragStateError(f"A drag of {self._state.event_id} is already in progress.")
        drag_kind = DragKind(kind)
        if origin_date is None:
            event = self._store.find_event(event_id)
            if event is None:
                raise KeyError(event_id)
            origin_date = anchor_date(event, drag_kind)
        self._state = DragState(event_id=event_id, kind=drag_kind, origin_date=origin_date)
        return self._state

    def cancel(self) -> None:
        self._state = None

    def drop(self, target_date: Optional[date]) -> Optional[DragOutcome]:
        state, self._state = self._state, None
        if state is None or target_date is None:
            return None

        event = self._store.find_event(state.event_id)
        if event is None:
            logger.debug("Dropped event %s no longer exists", state.event_id)
            return None

        resolved = resolve_drop(event, state.kind, state.origin_date, target_date)
        if resolved is None:
            return None
        start, end = resolved

        if event.is_mirrored:
            if self._mirrored_sink is None:
                logger.warning("No sync controller attached; ignoring drag of mirrored event %s", event.id)
                return None
            self._mirrored_sink.submit_mirrored_edit(event.id, start_date=start, end_date=end)
        else:
            self._store.update_event(event.id, start_date=start, end_date=end)

        return DragOutcome(
            event_id=event.id,
            kind=state.kind,
            day_diff=day_diff(state.origin_date, target_date),
            start_date=start,
            end_date=end,
            mirrored=event.is_mirrored,
        )


__all__ = [
    "DragController",
    "DragOutcome",
    "DragState",
    "DragStateError",
    "MirroredEditSink",
    "anchor_date",
    "resolve_drop",
]
