from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import AuthRequiredError


@dataclass
class GoogleSession:
    """Holds the bearer token for the current Google session.

    Acquiring and refreshing the token happens elsewhere; this object only
    remembers it for the adapter and forgets it when the session ends.
    """

    _access_token: Optional[str] = None

    def set_token(self, token: str) -> None:
        self._access_token = token

    def clear(self) -> None:
        self._access_token = None

    def token(self) -> str:
        if not self._access_token:
            raise AuthRequiredError("Google Calendar session is not active.")
        return self._access_token

    def is_active(self) -> bool:
        return bool(self._access_token)
