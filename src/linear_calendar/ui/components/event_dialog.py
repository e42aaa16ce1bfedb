from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from PyQt6.QtCore import QDate
from PyQt6.QtGui import QColor, QIcon, QPixmap
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from ...domain import DEFAULT_EVENT_COLORS, Event, ModalMode


def _swatch(color: str) -> QIcon:
    pixmap = QPixmap(14, 14)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


def _qdate(day: date) -> QDate:
    return QDate(day.year, day.month, day.day)


class EventDialog(QDialog):
    """Create or edit one event. ``deleted`` is set when the user asks to remove it."""

    def __init__(
        self,
        *,
        mode: ModalMode,
        event: Optional[Event] = None,
        prefill_date: Optional[date] = None,
        can_save_remote: bool = False,
    ) -> None:
        super().__init__()
        self.mode = mode
        self.event = event
        self.deleted = False
        self.setWindowTitle("New event" if mode is ModalMode.CREATE else "Edit event")
        layout = QVBoxLayout(self)
        form = QFormLayout()

        start = event.start_date if event else (prefill_date or date.today())
        end = event.end_date if event else start

        self.title_input = QLineEdit(event.title if event else "")
        self.title_input.setPlaceholderText("Title")
        form.addRow("Title", self.title_input)

        self.start_input = QDateEdit()
        self.start_input.setCalendarPopup(True)
        self.start_input.setDisplayFormat("yyyy-MM-dd")
        self.start_input.setDate(_qdate(start))
        form.addRow("Start", self.start_input)

        self.end_input = QDateEdit()
        self.end_input.setCalendarPopup(True)
        self.end_input.setDisplayFormat("yyyy-MM-dd")
        self.end_input.setDate(_qdate(end))
        form.addRow("End", self.end_input)

        self.color_box = QComboBox()
        for color in DEFAULT_EVENT_COLORS:
            self.color_box.addItem(_swatch(color), color, color)
        if event is not None and event.color in DEFAULT_EVENT_COLORS:
            self.color_box.setCurrentIndex(DEFAULT_EVENT_COLORS.index(event.color))
        mirrored = event is not None and event.is_mirrored
        self.color_box.setEnabled(not mirrored)
        form.addRow("Colour", self.color_box)

        self.description_input = QTextEdit()
        self.description_input.setPlaceholderText("Description")
        self.description_input.setPlainText(event.description if event else "")
        form.addRow("Description", self.description_input)

        self.remote_checkbox = QCheckBox("Save to Google Calendar")
        self.remote_checkbox.setVisible(mode is ModalMode.CREATE)
        self.remote_checkbox.setEnabled(can_save_remote)
        self.remote_checkbox.setChecked(can_save_remote)
        self.remote_checkbox.toggled.connect(self._sync_color_state)
        form.addRow("", self.remote_checkbox)

        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._validate_and_accept)
        buttons.rejected.connect(self.reject)
        if mode is ModalMode.EDIT:
            delete_button = QPushButton("Delete")
            delete_button.setObjectName("secondaryButton")
            delete_button.clicked.connect(self._request_delete)
            buttons.addButton(delete_button, QDialogButtonBox.ButtonRole.DestructiveRole)
        layout.addWidget(buttons)
        self._sync_color_state()

    def _sync_color_state(self) -> None:
        if self.mode is ModalMode.CREATE:
            self.color_box.setEnabled(not self.remote_checkbox.isChecked())

    def _validate_and_accept(self) -> None:
        if not self.title_input.text().strip():
            QMessageBox.warning(self, "Missing title", "Provide a title for the event.")
            return
        self.accept()

    def _request_delete(self) -> None:
        answer = QMessageBox.question(self, "Delete event", "Delete this event?")
        if answer == QMessageBox.StandardButton.Yes:
            self.deleted = True
            self.accept()

    @property
    def save_remote(self) -> bool:
        return self.mode is ModalMode.CREATE and self.remote_checkbox.isEnabled() and self.remote_checkbox.isChecked()

    def values(self) -> Dict[str, Any]:
        start = self.start_input.date().toPyDate()
        end = self.end_input.date().toPyDate()
        values: Dict[str, Any] = {
            "title": self.title_input.text().strip(),
            "start_date": start,
            "end_date": max(start, end),
            "description": self.description_input.toPlainText().strip(),
        }
        if self.color_box.isEnabled():
            values["color"] = self.color_box.currentData()
        return values
