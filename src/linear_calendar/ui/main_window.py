from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from ..core.drag import DragOutcome
from ..core.store import EventStore
from ..data import AuthExpiredError, AuthRequiredError, visible_holidays
from ..domain import DragKind, MirroredEvent, ModalMode, Theme
from ..services import CalendarFetchResult, ServiceContext
from ..utils.qt import AsyncBridge
from .components.event_dialog import EventDialog
from .components.jump_dialog import JumpDialog
from .components.sidebar import Sidebar
from .components.year_grid import YearGrid
from .styles.theme import apply_palette

logger = logging.getLogger(__name__)


class StoreSignals(QObject):
    changed = pyqtSignal()


class MainWindow(QMainWindow):
    def __init__(self, *, context: ServiceContext, bridge: Optional[AsyncBridge] = None) -> None:
        super().__init__()
        self.context = context
        self.store: EventStore = context.store
        self.bridge = bridge or AsyncBridge()
        self._theme: Optional[Theme] = None

        self.setWindowTitle(context.settings.ui.app_name)
        self.resize(1480, 860)

        self.sidebar = Sidebar()
        self.grid = YearGrid()
        scroll = QScrollArea()
        scroll.setWidget(self.grid)
        scroll.setWidgetResizable(False)
        self.scroll_area = scroll

        central = QWidget()
        outer = QVBoxLayout(central)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.addLayout(self._build_header())

        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)
        splitter.addWidget(self.sidebar)
        splitter.addWidget(scroll)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        outer.addWidget(splitter, stretch=1)
        self.setCentralWidget(central)

        self.sidebar.connect_requested.connect(self.connect_google)
        self.sidebar.disconnect_requested.connect(self.disconnect_google)
        self.sidebar.refresh_requested.connect(self.refresh_remote)
        self.sidebar.calendar_toggled.connect(self.toggle_calendar)
        self.sidebar.new_event_requested.connect(lambda: self.open_create(None))

        self.grid.cell_clicked.connect(self.open_create)
        self.grid.event_clicked.connect(self.open_edit)
        self.grid.drag_started.connect(self.begin_drag)
        self.grid.drag_dropped.connect(self.finish_drag)

        # Listeners run on the loop thread; the queued signal brings the repaint back here.
        self.store_signals = StoreSignals()
        self.store_signals.changed.connect(self.render)
        self._unsubscribe = self.store.subscribe(lambda _store: self.store_signals.changed.emit())

        self.render()
        if context.settings.google.has_token:
            self.connect_google()

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        header.setContentsMargins(16, 12, 16, 12)

        prev_button = QPushButton("‹")
        prev_button.setObjectName("secondaryButton")
        prev_button.clicked.connect(lambda: self.change_year(self.store.current_year - 1))
        header.addWidget(prev_button)

        self.year_label = QLabel("")
        self.year_label.setObjectName("yearLabel")
        header.addWidget(self.year_label)

        next_button = QPushButton("›")
        next_button.setObjectName("secondaryButton")
        next_button.clicked.connect(lambda: self.change_year(self.store.current_year + 1))
        header.addWidget(next_button)

        today_button = QPushButton("Today")
        today_button.clicked.connect(self.jump_to_today)
        header.addWidget(today_button)

        jump_button = QPushButton("Jump to…")
        jump_button.setObjectName("secondaryButton")
        jump_button.clicked.connect(self.open_jump_dialog)
        header.addWidget(jump_button)

        header.addStretch(1)

        self.theme_button = QPushButton("")
        self.theme_button.setObjectName("secondaryButton")
        self.theme_button.clicked.connect(self.toggle_theme)
        header.addWidget(self.theme_button)
        return header

    # ------------------------------------------------------------------ rendering

    def render(self) -> None:
        store = self.store
        year = store.current_year
        if store.theme is not self._theme:
            self._theme = store.theme
            app = QApplication.instance()
            if app is not None:
                self.grid.set_palette(apply_palette(app, store.theme))
            self.theme_button.setText("Dark mode" if store.theme is Theme.LIGHT else "Light mode")

        self.year_label.setText(str(year))
        positioned = {month: store.events_for_month(year, month) for month in range(1, 13)}
        self.grid.set_year_layout(year, positioned, self._holidays(year), today=date.today())

        self.sidebar.set_connected(store.connected, loading=store.loading)
        self.sidebar.set_profile(store.profile)
        self.sidebar.set_calendars(store.calendars)
        if store.loading:
            self.statusBar().showMessage("Syncing with Google Calendar…")

    def _holidays(self, year: int):
        try:
            return visible_holidays(self.context.holidays, year)
        except (KeyError, NotImplementedError) as exc:
            logger.warning("Holiday lookup unavailable: %s", exc)
            return {}

    # ------------------------------------------------------------------ navigation

    def change_year(self, year: int) -> None:
        self.bridge.submit(
            self.context.sync.change_year,
            year,
            on_success=self._report_fetch,
            on_error=self._handle_error,
        )

    def jump_to_today(self) -> None:
        self.bridge.submit(self.context.sync.jump_to_today, on_success=self._report_fetch, on_error=self._handle_error)
        self._scroll_to_month(date.today().month)

    def open_jump_dialog(self) -> None:
        dialog = JumpDialog(year=self.store.current_year)
        if dialog.exec() != JumpDialog.DialogCode.Accepted:
            return
        year, month = dialog.values()
        self.change_year(year)
        self._scroll_to_month(month)

    def _scroll_to_month(self, month: int) -> None:
        top = self.grid.month_top(month)
        self.scroll_area.verticalScrollBar().setValue(max(top - self.grid.geometry_model.header_height, 0))

    def toggle_theme(self) -> None:
        self.bridge.call(self.store.toggle_theme, on_error=self._handle_error)

    # ------------------------------------------------------------------ google session

    def connect_google(self) -> None:
        token = self.context.settings.google.access_token
        if not token:
            token, accepted = QInputDialog.getText(
                self,
                "Connect Google Calendar",
                "OAuth access token:",
                QLineEdit.EchoMode.Password,
            )
            if not accepted or not token.strip():
                return
            token = token.strip()

        def done(results: List[CalendarFetchResult]) -> None:
            self._report_fetch(results)
            self.statusBar().showMessage("Connected to Google Calendar.", 4000)

        self.bridge.submit(self.context.sync.connect, token, on_success=done, on_error=self._handle_error)

    def disconnect_google(self) -> None:
        def done(_result) -> None:
            self.statusBar().showMessage("Disconnected from Google Calendar.", 4000)

        self.bridge.submit(self.context.sync.disconnect, on_success=done, on_error=self._handle_error)

    def refresh_remote(self) -> None:
        self.bridge.submit(self.context.sync.refresh, on_success=self._report_fetch, on_error=self._handle_error)

    def toggle_calendar(self, calendar_id: str) -> None:
        self.bridge.submit(
            self.context.sync.toggle_calendar,
            calendar_id,
            on_success=self._report_fetch,
            on_error=self._handle_error,
        )

    def _report_fetch(self, results: List[CalendarFetchResult]) -> None:
        failed = [result.calendar.summary for result in results if not result.ok]
        if failed:
            self.statusBar().showMessage(f"Could not load: {', '.join(failed)}", 6000)
        elif results:
            self.statusBar().showMessage("Calendars synchronized.", 3000)

    # ------------------------------------------------------------------ event dialog

    def open_create(self, day: Optional[date]) -> None:
        self.bridge.call(self.store.open_create_modal, day, on_success=lambda _: self._show_modal())

    def open_edit(self, event_id: str) -> None:
        self.bridge.call(self.store.open_edit_modal, event_id, on_success=lambda _: self._show_modal())

    def _show_modal(self) -> None:
        modal = self.store.modal
        if not modal.is_open:
            return
        event = self.store.find_event(modal.event_id) if modal.event_id else None
        if modal.mode is ModalMode.EDIT and event is None:
            self.bridge.call(self.store.close_modal)
            return

        dialog = EventDialog(
            mode=modal.mode,
            event=event,
            prefill_date=modal.prefill_date,
            can_save_remote=self.store.connected,
        )
        accepted = dialog.exec() == EventDialog.DialogCode.Accepted
        self.bridge.call(self.store.close_modal)
        if not accepted:
            return

        if dialog.deleted and event is not None:
            self._delete(event)
        elif event is not None:
            self._save_edit(event, dialog.values())
        elif dialog.save_remote:
            values = dialog.values()
            values.pop("color", None)
            self.bridge.submit(self.context.sync.create_event, on_error=self._handle_error, **values)
        else:
            self.bridge.call(self.store.add_event, on_error=self._handle_error, **dialog.values())

    def _save_edit(self, event, values: dict) -> None:
        if isinstance(event, MirroredEvent):
            values.pop("color", None)
            self.bridge.submit(self.context.sync.edit_event, event.id, on_error=self._handle_error, **values)
        else:
            self.bridge.call(self.store.update_event, event.id, on_error=self._handle_error, **values)

    def _delete(self, event) -> None:
        if isinstance(event, MirroredEvent):
            self.bridge.submit(self.context.sync.delete_event, event.id, on_error=self._handle_error)
        else:
            self.bridge.call(self.store.delete_event, event.id, on_error=self._handle_error)

    # ------------------------------------------------------------------ drag

    def begin_drag(self, event_id: str, kind: str, origin: Optional[date]) -> None:
        self.bridge.call(self.context.drag.begin, event_id, DragKind(kind), origin, on_error=self._handle_error)

    def finish_drag(self, target: Optional[date]) -> None:
        def done(outcome: Optional[DragOutcome]) -> None:
            if outcome is not None:
                self.statusBar().showMessage(
                    f"Moved to {outcome.start_date.isoformat()} – {outcome.end_date.isoformat()}", 3000
                )

        self.bridge.call(self.context.drag.drop, target, on_success=done, on_error=self._handle_error)

    # ------------------------------------------------------------------ misc

    def _handle_error(self, exc: Exception) -> None:
        logger.warning("UI action failed: %s", exc)
        if isinstance(exc, AuthExpiredError):
            message = "Your Google session expired. Connect again to keep syncing."
        elif isinstance(exc, AuthRequiredError):
            message = "Connect a Google account first."
        else:
            message = str(exc)
        self.statusBar().showMessage(f"Error: {message}", 5000)
        QMessageBox.critical(self, "Error", message)

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        self.bridge.shutdown()
        super().closeEvent(event)
