from __future__ import annotations

from typing import Iterable, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...domain import CalendarInfo, UserProfile


class Sidebar(QWidget):
    calendar_toggled = pyqtSignal(str)
    connect_requested = pyqtSignal()
    disconnect_requested = pyqtSignal()
    refresh_requested = pyqtSignal()
    new_event_requested = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("sidebarPanel")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.user_label = QLabel("Not connected")
        self.user_label.setAlignment(Qt.AlignmentFlag.AlignLeft)
        self.user_label.setWordWrap(True)
        layout.addWidget(self.user_label)

        self.connect_button = QPushButton("Connect Google")
        self.connect_button.clicked.connect(self._emit_connection_request)
        layout.addWidget(self.connect_button)

        action_row = QHBoxLayout()
        self.refresh_button = QPushButton("Refresh")
        self.refresh_button.setObjectName("secondaryButton")
        self.refresh_button.clicked.connect(self.refresh_requested)
        action_row.addWidget(self.refresh_button)

        new_event = QPushButton("Add Event")
        new_event.clicked.connect(self.new_event_requested)
        action_row.addWidget(new_event)
        layout.addLayout(action_row)

        layout.addWidget(QLabel("Calendars"))
        self.calendar_list = QListWidget()
        self.calendar_list.itemChanged.connect(self._emit_toggled)
        layout.addWidget(self.calendar_list, stretch=1)

        self._connected = False
        self._populating = False
        self.set_connected(False)

    def set_connected(self, connected: bool, *, loading: bool = False) -> None:
        self._connected = connected
        self.connect_button.setText("Disconnect" if connected else "Connect Google")
        self.connect_button.setEnabled(not loading)
        self.refresh_button.setEnabled(connected and not loading)
        self.calendar_list.setEnabled(connected and not loading)

    def set_profile(self, profile: Optional[UserProfile]) -> None:
        if profile is None:
            self.user_label.setText("Not connected" if not self._connected else "Google Calendar")
            return
        parts = [part for part in (profile.name, profile.email) if part]
        if parts:
            parts[0] = f"<b>{parts[0]}</b>"
        self.user_label.setText("<br>".join(parts) or "Google Calendar")
        self.user_label.setToolTip(profile.email)

    def set_calendars(self, calendars: Iterable[CalendarInfo]) -> None:
        self._populating = True
        try:
            self.calendar_list.clear()
            for calendar in calendars:
                item = QListWidgetItem(calendar.summary)
                item.setData(Qt.ItemDataRole.UserRole, calendar.id)
                item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
                item.setCheckState(Qt.CheckState.Checked if calendar.enabled else Qt.CheckState.Unchecked)
                item.setForeground(QColor(calendar.background_color))
                self.calendar_list.addItem(item)
        finally:
            self._populating = False

    def _emit_toggled(self, item: QListWidgetItem) -> None:
        if self._populating:
            return
        self.calendar_toggled.emit(item.data(Qt.ItemDataRole.UserRole))

    def _emit_connection_request(self) -> None:
        if self._connected:
            self.disconnect_requested.emit()
        else:
            self.connect_requested.emit()
