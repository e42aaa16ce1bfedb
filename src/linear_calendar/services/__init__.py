"""Application services orchestrating the store and the remote calendar."""

from __future__ import annotations

from .context import ServiceContext
from .sync import CalendarFetchResult, SyncController

__all__ = ["CalendarFetchResult", "ServiceContext", "SyncController"]
