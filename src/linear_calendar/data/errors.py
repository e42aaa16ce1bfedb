from __future__ import annotations

from typing import Optional


class CalendarSyncError(RuntimeError):
    """Base error raised by the remote calendar layer."""


class AuthRequiredError(CalendarSyncError):
    """Raised when a remote call is attempted without an active session."""


class AuthExpiredError(CalendarSyncError):
    """Raised when the remote service rejects the session token mid-session."""


class RemoteRequestFailedError(CalendarSyncError):
    """Raised for any other unsuccessful remote response."""

    def __init__(self, *, status_code: Optional[int], message: str) -> None:
        self.status_code = status_code
        self.message = message
        label = status_code if status_code is not None else "transport"
        super().__init__(f"Google Calendar API request failed ({label}): {message}")
