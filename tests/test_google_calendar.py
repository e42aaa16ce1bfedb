import json
from datetime import date

import httpx
import pytest

from conftest import API_BASE, make_mirrored

from linear_calendar.data import (
    AuthExpiredError,
    AuthRequiredError,
    GoogleCalendarAdapter,
    GoogleSession,
    RemoteRequestFailedError,
)


def _adapter(google_settings, handler, *, token="token-123"):
    session = GoogleSession()
    if token:
        session.set_token(token)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleCalendarAdapter(google_settings, session, http_client=client), session


@pytest.mark.asyncio
async def test_fetch_events_sends_year_window_and_parses_items(google_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(
            200,
            json={
                "items": [
                    {"id": "a", "summary": "Holiday", "start": {"date": "2024-08-01"}, "end": {"date": "2024-08-04"}},
                    {"id": "cancelled", "start": {}, "end": {}},
                    {"id": "broken", "start": {"date": "08/01/2024"}, "end": {"date": "2024-08-02"}},
                ]
            },
        )

    adapter, _ = _adapter(google_settings, handler)
    events = await adapter.fetch_events("team@group.calendar", date(2024, 1, 1), date(2024, 12, 31))

    request = seen["request"]
    assert request.url.path == "/v3/calendars/team@group.calendar/events"
    assert request.headers["Authorization"] == "Bearer token-123"
    params = request.url.params
    assert params["timeMin"] == "2024-01-01T00:00:00+01:00"
    assert params["timeMax"] == "2025-01-01T00:00:00+01:00"
    assert params["timeZone"] == "Europe/Berlin"
    assert params["singleEvents"] == "true"
    assert params["orderBy"] == "startTime"
    assert params["maxResults"] == "2500"

    assert [event.remote_id for event in events] == ["a"]
    assert (events[0].start_date, events[0].end_date) == (date(2024, 8, 1), date(2024, 8, 3))
    assert events[0].calendar_id == "team@group.calendar"


@pytest.mark.asyncio
async def test_unauthorized_response_clears_the_session(google_settings):
    adapter, session = _adapter(google_settings, lambda request: httpx.Response(401, json={"error": "expired"}))

    with pytest.raises(AuthExpiredError):
        await adapter.list_calendars()
    assert not session.is_active()


@pytest.mark.asyncio
async def test_calls_without_a_session_are_rejected(google_settings):
    calls = []
    adapter, _ = _adapter(google_settings, lambda request: calls.append(request), token=None)

    with pytest.raises(AuthRequiredError):
        await adapter.fetch_events("primary", date(2024, 1, 1), date(2024, 12, 31))
    assert calls == []


@pytest.mark.asyncio
async def test_server_errors_surface_status_and_message(google_settings):
    adapter, session = _adapter(
        google_settings,
        lambda request: httpx.Response(500, json={"error": {"message": "Backend   exploded"}}),
    )

    with pytest.raises(RemoteRequestFailedError) as excinfo:
        await adapter.list_calendars()
    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Backend exploded"
    assert session.is_active()


@pytest.mark.asyncio
async def test_transport_errors_become_request_failures(google_settings):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    adapter, _ = _adapter(google_settings, handler)
    with pytest.raises(RemoteRequestFailedError) as excinfo:
        await adapter.list_calendars()
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_create_event_posts_exclusive_end(google_settings):
    seen = {}

    def handler(request):
        body = json.loads(request.content)
        seen["method"] = request.method
        seen["body"] = body
        return httpx.Response(200, json={"id": "new-id", **body})

    adapter, _ = _adapter(google_settings, handler)
    event = await adapter.create_event(
        "primary",
        title="Offsite",
        start_date=date(2024, 9, 2),
        end_date=date(2024, 9, 4),
        description="Bring laptops",
    )

    assert seen["method"] == "POST"
    assert seen["body"] == {
        "summary": "Offsite",
        "description": "Bring laptops",
        "start": {"date": "2024-09-02", "timeZone": "Europe/Berlin"},
        "end": {"date": "2024-09-05", "timeZone": "Europe/Berlin"},
    }
    assert event.id == "primary::new-id"
    assert event.end_date == date(2024, 9, 4)


@pytest.mark.asyncio
async def test_create_event_rejects_a_reply_without_dates(google_settings):
    adapter, session = _adapter(google_settings, lambda request: httpx.Response(200, json={"id": "new-id"}))

    with pytest.raises(RemoteRequestFailedError, match="Unreadable created event"):
        await adapter.create_event("primary", title="Offsite", start_date=date(2024, 9, 2), end_date=date(2024, 9, 2))
    assert session.is_active()


@pytest.mark.asyncio
async def test_update_event_patches_both_endpoints(google_settings):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    adapter, _ = _adapter(google_settings, handler)
    event = make_mirrored("evt/1", "2024-06-10", "2024-06-12")
    await adapter.update_event(event, start_date=date(2024, 6, 8))

    assert seen["method"] == "PATCH"
    assert seen["path"] == "/v3/calendars/primary/events/evt/1"
    assert seen["body"]["start"]["date"] == "2024-06-08"
    assert seen["body"]["end"]["date"] == "2024-06-13"


@pytest.mark.asyncio
async def test_update_without_changes_makes_no_request(google_settings):
    calls = []
    adapter, _ = _adapter(google_settings, lambda request: calls.append(request))
    await adapter.update_event(make_mirrored("r1", "2024-06-10", "2024-06-12"))
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [204, 404, 410])
async def test_delete_tolerates_already_removed_events(google_settings, status):
    adapter, _ = _adapter(google_settings, lambda request: httpx.Response(status))
    await adapter.delete_event(make_mirrored("r1", "2024-06-10", "2024-06-12"))


@pytest.mark.asyncio
async def test_delete_propagates_other_failures(google_settings):
    adapter, _ = _adapter(google_settings, lambda request: httpx.Response(403, text="forbidden"))
    with pytest.raises(RemoteRequestFailedError):
        await adapter.delete_event(make_mirrored("r1", "2024-06-10", "2024-06-12"))


@pytest.mark.asyncio
async def test_list_calendars_and_profile(google_settings):
    def handler(request):
        if request.url.path.endswith("/calendarList"):
            return httpx.Response(
                200,
                json={"items": [{"id": "primary", "summary": "Me", "backgroundColor": "#123456"}, {"summary": "x"}]},
            )
        return httpx.Response(200, json={"name": "Ada", "email": "ada@example.com"})

    adapter, _ = _adapter(google_settings, handler)
    calendars = await adapter.list_calendars()
    profile = await adapter.fetch_profile()

    assert [(calendar.id, calendar.background_color) for calendar in calendars] == [("primary", "#123456")]
    assert profile.email == "ada@example.com"


@pytest.mark.asyncio
async def test_revoke_clears_session_even_when_revocation_fails(google_settings):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    adapter, session = _adapter(google_settings, handler)
    await adapter.revoke()
    assert not session.is_active()
