from __future__ import annotations

import calendar
from typing import Tuple

from PyQt6.QtWidgets import QComboBox, QDialog, QDialogButtonBox, QFormLayout, QSpinBox, QVBoxLayout

from ...core.config import MAX_YEAR, MIN_YEAR


class JumpDialog(QDialog):
    """Pick a month and year to scroll the grid to."""

    def __init__(self, *, year: int, month: int = 1) -> None:
        super().__init__()
        self.setWindowTitle("Jump to date")
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.month_box = QComboBox()
        for index in range(1, 13):
            self.month_box.addItem(calendar.month_name[index], index)
        self.month_box.setCurrentIndex(month - 1)
        form.addRow("Month", self.month_box)

        self.year_input = QSpinBox()
        self.year_input.setRange(MIN_YEAR, MAX_YEAR)
        self.year_input.setValue(year)
        form.addRow("Year", self.year_input)

        layout.addLayout(form)
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def values(self) -> Tuple[int, int]:
        return self.year_input.value(), self.month_box.currentData()

