"""Keeps the mirrored half of the event store in step with Google Calendar.

Writes are optimistic: the store is updated first and the remote call follows.
A remote confirmation never writes back into the store, so the newest local
write always wins over an older in-flight reply. Refreshes are not cancelled
when superseded; whichever reply lands last replaces the mirrored collection.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, List, Optional, Set, Tuple

from ..core.dates import year_bounds
from ..core.store import EventNotFoundError, EventStore
from ..data.errors import AuthExpiredError, AuthRequiredError, CalendarSyncError
from ..data.google_calendar import GoogleCalendarAdapter
from ..data.session import GoogleSession
from ..domain import CalendarInfo, MirroredEvent, UserProfile

logger = logging.getLogger(__name__)

_SESSION_ERRORS = (AuthExpiredError, AuthRequiredError)


@dataclass(frozen=True, slots=True)
class CalendarFetchResult:
    calendar: CalendarInfo
    events: Tuple[MirroredEvent, ...] = ()
    error: Optional[CalendarSyncError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SyncController:
    def __init__(
        self,
        store: EventStore,
        adapter: GoogleCalendarAdapter,
        session: GoogleSession,
        *,
        default_calendar_id: str = "primary",
    ) -> None:
        self._store = store
        self._adapter = adapter
        self._session = session
        self._default_calendar_id = default_calendar_id
        self._pending: Set[asyncio.Task[None]] = set()

    @property
    def is_connected(self) -> bool:
        return self._session.is_active()

    # ------------------------------------------------------------------ session

    async def connect(self, token: Optional[str]) -> List[CalendarFetchResult]:
        if not token:
            raise AuthRequiredError("No Google access token available.")
        self._session.set_token(token)
        self._store.set_loading(True)
        try:
            profile, calendars = await asyncio.gather(self._fetch_profile_quietly(), self._adapter.list_calendars())
            self._store.set_connected(True)
            self._store.set_profile(profile)
            self._store.set_calendars(calendars)
            results = await self._refresh_enabled()
        except CalendarSyncError:
            logger.exception("Google Calendar connect failed")
            self._end_session()
            raise
        finally:
            self._store.set_loading(False)
        logger.info("Connected to Google Calendar with %d calendars", len(calendars))
        return results

    async def disconnect(self) -> None:
        await self._adapter.revoke()
        self._end_session()

    def _end_session(self) -> None:
        self._session.clear()
        self._store.set_connected(False)
        self._store.clear_mirrored()
        self._store.set_calendars(())
        self._store.set_profile(None)

    async def _fetch_profile_quietly(self) -> Optional[UserProfile]:
        try:
            return await self._adapter.fetch_profile()
        except CalendarSyncError as exc:
            logger.warning("Could not load Google profile: %s", exc)
            return None

    # ------------------------------------------------------------------ refresh triggers

    async def refresh(self) -> List[CalendarFetchResult]:
        if not self._session.is_active():
            return []
        self._store.set_loading(True)
        try:
            return await self._refresh_enabled()
        finally:
            self._store.set_loading(False)

    async def toggle_calendar(self, calendar_id: str) -> List[CalendarFetchResult]:
        self._store.toggle_calendar(calendar_id)
        return await self.refresh()

    async def change_year(self, year: int) -> List[CalendarFetchResult]:
        previous = self._store.current_year
        if self._store.set_year(year) == previous:
            return []
        return await self.refresh()

    async def jump_to_today(self, today: Optional[date] = None) -> List[CalendarFetchResult]:
        return await self.change_year((today or date.today()).year)

    async def _refresh_enabled(self) -> List[CalendarFetchResult]:
        enabled = self._store.enabled_calendars
        if not enabled:
            self._store.set_mirrored_events(())
            return []

        range_start, range_end = year_bounds(self._store.current_year)
        results = list(
            await asyncio.gather(*(self._fetch_calendar(calendar, range_start, range_end) for calendar in enabled))
        )

        for result in results:
            if isinstance(result.error, _SESSION_ERRORS):
                self._end_session()
                raise result.error

        self._store.set_mirrored_events(event for result in results for event in result.events)
        return results

    async def _fetch_calendar(self, calendar: CalendarInfo, range_start: date, range_end: date) -> CalendarFetchResult:
        try:
            events = await self._adapter.fetch_events(calendar.id, range_start, range_end)
        except CalendarSyncError as exc:
            if not isinstance(exc, _SESSION_ERRORS):
                logger.warning("Fetching calendar %s failed: %s", calendar.id, exc)
            return CalendarFetchResult(calendar=calendar, error=exc)
        colored = tuple(replace(event, color=calendar.background_color) for event in events)
        return CalendarFetchResult(calendar=calendar, events=colored)

    # ------------------------------------------------------------------ mirrored writes

    def _mirrored(self, event_id: str) -> MirroredEvent:
        for event in self._store.mirrored_events:
            if event.id == event_id:
                return event
        raise EventNotFoundError(event_id)

    def _apply_optimistic(self, event_id: str, changes: dict[str, Any]) -> Tuple[MirroredEvent, dict[str, Any]]:
        if "color" in changes:
            raise ValueError("Mirrored events take the colour of their calendar.")
        original = self._mirrored(event_id)
        if not self._session.is_active():
            raise AuthRequiredError("Connect Google Calendar before editing its events.")
        updated = self._store.update_mirrored_event(event_id, **changes)
        return original, {key: getattr(updated, key) for key in changes}

    async def create_event(
        self,
        *,
        title: str,
        start_date: date,
        end_date: Optional[date] = None,
        description: str = "",
        calendar_id: Optional[str] = None,
    ) -> MirroredEvent:
        target = calendar_id or self._default_calendar_id
        try:
            created = await self._adapter.create_event(
                target,
                title=title,
                start_date=start_date,
                end_date=end_date or start_date,
                description=description,
            )
        except _SESSION_ERRORS:
            self._end_session()
            raise

        calendar = self._store.calendar(target) or next(iter(self._store.calendars), None)
        if calendar is not None:
            created = replace(created, color=calendar.background_color)
        self._store.add_mirrored_event(created)
        return created

    async def edit_event(self, event_id: str, **changes: Any) -> MirroredEvent:
        original, remote_changes = self._apply_optimistic(event_id, changes)
        try:
            await self._adapter.update_event(original, **remote_changes)
        except _SESSION_ERRORS:
            self._end_session()
            raise
        return self._mirrored(event_id)

    def submit_mirrored_edit(self, event_id: str, **changes: Any) -> asyncio.Task[None]:
        """Apply a drag result locally now and push it to Google in the background."""

        loop = asyncio.get_running_loop()
        original, remote_changes = self._apply_optimistic(event_id, changes)
        task = loop.create_task(self._push_logged(original, remote_changes))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _push_logged(self, original: MirroredEvent, changes: dict[str, Any]) -> None:
        try:
            await self._adapter.update_event(original, **changes)
        except _SESSION_ERRORS as exc:
            logger.warning("Session ended while syncing %s: %s", original.id, exc)
            self._end_session()
        except CalendarSyncError as exc:
            logger.warning("Failed to sync drag of %s to Google: %s", original.id, exc)

    async def delete_event(self, event_id: str) -> None:
        event = self._mirrored(event_id)
        try:
            await self._adapter.delete_event(event)
        except _SESSION_ERRORS:
            self._end_session()
            raise
        self._store.remove_mirrored_event(event_id)

    async def wait_pending(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending))


__all__ = ["CalendarFetchResult", "SyncController"]
