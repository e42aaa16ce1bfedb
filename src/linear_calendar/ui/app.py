from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from ..bootstrap import configure_logging
from ..config import get_settings
from ..services import ServiceContext
from .main_window import MainWindow


def run_gui(state_file: Optional[Path] = None) -> None:
    configure_logging()
    settings = get_settings()
    if state_file is not None:
        settings = replace(settings, storage=replace(settings.storage, state_file=state_file))

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(settings.ui.app_name)
    app.setOrganizationName(settings.ui.organization)

    window = MainWindow(context=ServiceContext(settings=settings))
    window.show()
    sys.exit(app.exec())
