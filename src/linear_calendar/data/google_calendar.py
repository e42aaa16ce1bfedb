from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, AsyncIterator, Dict, List, Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError

from ..config.settings import GoogleSettings
from ..core.dates import InvalidDateFormatError
from ..domain import CalendarInfo, MirroredEvent, UserProfile
from .errors import AuthExpiredError, RemoteRequestFailedError
from .session import GoogleSession
from .wire import (
    GoogleCalendarListEntry,
    GoogleEventItem,
    GoogleEventWrite,
    GoogleUserInfo,
    patch_payload,
)

logger = logging.getLogger(__name__)

GONE_STATUS_CODES = {404, 410}


def _safe_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error_payload = payload.get("error")
        if isinstance(error_payload, dict):
            message = error_payload.get("message")
            if isinstance(message, str) and message.strip():
                return " ".join(message.split())[:200]
        if isinstance(error_payload, str) and error_payload.strip():
            return " ".join(error_payload.split())[:200]

    raw_text = response.text.strip()
    if raw_text:
        return " ".join(raw_text.split())[:200]
    return "Request failed without an error payload"


def day_boundary(day: date, time_zone: str) -> str:
    return datetime.combine(day, time.min, tzinfo=ZoneInfo(time_zone)).isoformat()


class GoogleCalendarAdapter:
    """Google Calendar v3 client speaking in local whole-day events."""

    def __init__(
        self,
        settings: GoogleSettings,
        session: GoogleSession,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._settings = settings
        self._session = session
        self._http_client = http_client

    @property
    def time_zone(self) -> str:
        return self._settings.time_zone

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._settings.request_timeout) as client:
            yield client

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        allow_status: frozenset[int] = frozenset(),
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._session.token()}"}
        try:
            async with self._client() as client:
                response = await client.request(method, url, params=params, json=json_body, headers=headers)
        except httpx.HTTPError as exc:
            raise RemoteRequestFailedError(status_code=None, message=str(exc)) from exc

        if response.status_code == 401:
            self._session.clear()
            raise AuthExpiredError("Google Calendar session expired.")
        if response.status_code in allow_status:
            return response
        if response.status_code < 200 or response.status_code >= 300:
            raise RemoteRequestFailedError(
                status_code=response.status_code,
                message=_safe_error_message(response),
            )
        return response

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._request(method, url, **kwargs)
        if response.status_code == 204 or not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteRequestFailedError(
                status_code=response.status_code,
                message="Google Calendar API returned invalid JSON",
            ) from exc
        if not isinstance(payload, dict):
            raise RemoteRequestFailedError(
                status_code=response.status_code,
                message="Google Calendar API returned an unexpected JSON payload shape",
            )
        return payload

    def _events_url(self, calendar_id: str, remote_id: Optional[str] = None) -> str:
        url = f"{self._settings.api_base_url}/calendars/{quote(calendar_id, safe='')}/events"
        if remote_id is not None:
            url += f"/{quote(remote_id, safe='')}"
        return url

    # ------------------------------------------------------------------ events

    async def fetch_events(self, calendar_id: str, range_start: date, range_end: date) -> List[MirroredEvent]:
        params = {
            "timeMin": day_boundary(range_start, self.time_zone),
            "timeMax": day_boundary(range_end + timedelta(days=1), self.time_zone),
            "timeZone": self.time_zone,
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": str(self._settings.max_results),
        }
        payload = await self._request_json("GET", self._events_url(calendar_id), params=params)
        events: list[MirroredEvent] = []
        for raw in payload.get("items") or []:
            try:
                item = GoogleEventItem.model_validate(raw)
                if not item.is_displayable:
                    continue
                events.append(item.to_domain(calendar_id))
            except (ValidationError, InvalidDateFormatError) as exc:
                logger.warning("Skipping unreadable event from calendar %s: %s", calendar_id, exc)
        logger.debug("Fetched %d events from calendar %s", len(events), calendar_id)
        return events

    async def create_event(
        self,
        calendar_id: str,
        *,
        title: str,
        start_date: date,
        end_date: date,
        description: str = "",
    ) -> MirroredEvent:
        body = GoogleEventWrite.for_range(
            title=title,
            description=description,
            start_date=start_date,
            end_date=max(start_date, end_date),
            time_zone=self.time_zone,
        )
        payload = await self._request_json("POST", self._events_url(calendar_id), json_body=body.to_payload())
        try:
            return GoogleEventItem.model_validate(payload).to_domain(calendar_id)
        except ValueError as exc:
            raise RemoteRequestFailedError(status_code=None, message=f"Unreadable created event: {exc}") from exc

    async def update_event(self, event: MirroredEvent, **changes: Any) -> None:
        body = patch_payload(event, changes, self.time_zone)
        if not body:
            return
        await self._request_json(
            "PATCH",
            self._events_url(event.calendar_id, event.remote_id),
            json_body=body,
        )

    async def delete_event(self, event: MirroredEvent) -> None:
        response = await self._request(
            "DELETE",
            self._events_url(event.calendar_id, event.remote_id),
            allow_status=frozenset(GONE_STATUS_CODES),
        )
        if response.status_code in GONE_STATUS_CODES:
            logger.info("Event %s was already removed remotely", event.id)

    # ------------------------------------------------------------------ account

    async def list_calendars(self) -> List[CalendarInfo]:
        payload = await self._request_json("GET", f"{self._settings.api_base_url}/users/me/calendarList")
        calendars: list[CalendarInfo] = []
        for raw in payload.get("items") or []:
            try:
                calendars.append(GoogleCalendarListEntry.model_validate(raw).to_domain())
            except ValidationError as exc:
                logger.warning("Skipping unreadable calendar entry: %s", exc)
        return calendars

    async def fetch_profile(self) -> UserProfile:
        payload = await self._request_json("GET", self._settings.userinfo_url)
        return GoogleUserInfo.model_validate(payload).to_domain()

    async def revoke(self) -> None:
        if not self._session.is_active():
            return
        token = self._session.token()
        try:
            async with self._client() as client:
                await client.post(self._settings.revoke_url, params={"token": token})
        except httpx.HTTPError as exc:
            logger.warning("Token revocation failed: %s", exc)
        finally:
            self._session.clear()


__all__ = ["GoogleCalendarAdapter", "day_boundary"]
