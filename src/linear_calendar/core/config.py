from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Linear Calendar"
APP_AUTHOR = "LinearCalendar"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
STATE_FILE = DATA_DIR / "calendar_state.json"

MIN_YEAR = 2000
MAX_YEAR = 2049
GRID_COLUMNS = 31


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
