from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

from .config import STATE_FILE

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

DEFAULT_STATE: Dict[str, Any] = {
    "events": [],
    "theme": "light",
    "current_year": None,
    "schema_version": SCHEMA_VERSION,
}


class StateFile:
    """JSON snapshot of the state that survives restarts.

    Only local events, the theme flag and the selected year are written here.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or STATE_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return deepcopy(DEFAULT_STATE)
        raw = self._path.read_bytes()
        if not raw.strip():
            return deepcopy(DEFAULT_STATE)
        try:
            state = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("State file %s is not valid JSON; starting from defaults.", self._path)
            return deepcopy(DEFAULT_STATE)
        if not isinstance(state, dict):
            return deepcopy(DEFAULT_STATE)
        # Backfill missing keys when upgrading.
        for key, value in DEFAULT_STATE.items():
            if key not in state:
                state[key] = deepcopy(value)
        return state

    def save(self, state: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(state, option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")


__all__ = ["DEFAULT_STATE", "SCHEMA_VERSION", "StateFile"]
