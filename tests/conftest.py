"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from linear_calendar.config.settings import GoogleSettings  # noqa: E402
from linear_calendar.core.persistence import StateFile  # noqa: E402
from linear_calendar.core.store import EventStore  # noqa: E402
from linear_calendar.domain import LocalEvent, MirroredEvent  # noqa: E402

TODAY = date(2024, 6, 15)
API_BASE = "https://calendar.test/v3"


def make_local(event_id, start, end, *, title=None, color="#6366f1"):
    return LocalEvent(
        id=event_id,
        title=title or event_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        color=color,
    )


def make_mirrored(remote_id, start, end, *, calendar_id="primary", title=None):
    return MirroredEvent.build(
        calendar_id=calendar_id,
        remote_id=remote_id,
        title=title or remote_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
    )


@pytest.fixture
def state_file(tmp_path):
    """State file inside the test's temporary directory."""
    return StateFile(tmp_path / "state.json")


@pytest.fixture
def store(state_file):
    """Event store pinned to 2024 and backed by a temporary state file."""
    return EventStore(state_file, today=TODAY)


@pytest.fixture
def google_settings():
    """Google settings pointing at a fake API host."""
    return GoogleSettings(
        access_token=None,
        api_base_url=API_BASE,
        userinfo_url="https://userinfo.test/v3/userinfo",
        revoke_url="https://oauth.test/revoke",
        time_zone="Europe/Berlin",
        max_results=2500,
        request_timeout=5.0,
        default_calendar_id="primary",
    )
