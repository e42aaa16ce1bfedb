from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from ..config import AppSettings, get_settings
from ..core.drag import DragController
from ..core.persistence import StateFile
from ..core.store import EventStore
from ..data import GoogleCalendarAdapter, GoogleSession, HolidayLookup, country_holiday_lookup
from .sync import SyncController


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root wiring the store, the Google adapter and the controllers."""

    settings: AppSettings = field(default_factory=get_settings)
    http_client: Optional[httpx.AsyncClient] = None
    store: EventStore = field(init=False)
    session: GoogleSession = field(init=False)
    adapter: GoogleCalendarAdapter = field(init=False)
    sync: SyncController = field(init=False)
    drag: DragController = field(init=False)
    holidays: HolidayLookup = field(init=False)

    def __post_init__(self) -> None:
        self.store = EventStore(StateFile(self.settings.storage.state_file))
        self.session = GoogleSession()
        self.adapter = GoogleCalendarAdapter(self.settings.google, self.session, http_client=self.http_client)
        self.sync = SyncController(
            self.store,
            self.adapter,
            self.session,
            default_calendar_id=self.settings.google.default_calendar_id,
        )
        self.drag = DragController(self.store, self.sync)
        self.holidays = country_holiday_lookup(self.settings.ui.holiday_country, self.settings.ui.holiday_subdiv)
