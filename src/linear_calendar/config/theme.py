from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..domain import Theme


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#ffffff"
    background_secondary: str = "#f8fafc"
    surface: str = "#f1f5f9"
    accent_primary: str = "#6366f1"
    accent_error: str = "#e11d48"
    text_primary: str = "#0f172a"
    text_secondary: str = "#64748b"
    border_subtle: str = "#e2e8f0"
    border_strong: str = "#cbd5e1"
    weekend: str = "#f1f5f9"
    today: str = "#e0e7ff"
    holiday: str = "#fef3c7"
    year_divider: str = "#6366f1"

    @classmethod
    def for_theme(cls, theme: Theme) -> "AppPalette":
        if theme is Theme.DARK:
            return cls(
                background_primary="#030712",
                background_secondary="#050b18",
                surface="#0c162c",
                accent_primary="#7dd3fc",
                accent_error="#fb7185",
                text_primary="#f8fafc",
                text_secondary="#c7d2fe",
                border_subtle="#1e293b",
                border_strong="#243657",
                weekend="#0b1324",
                today="#1e1b4b",
                holiday="#3b2f0b",
                year_divider="#7dd3fc",
            )
        return cls()

    def stylesheet_rules(self) -> Dict[str, Dict[str, str]]:
        return {
            "QMainWindow, QDialog, QScrollArea": {
                "background-color": self.background_primary,
                "color": self.text_primary,
            },
            "QLabel, QCheckBox": {"color": self.text_primary, "font-size": "13px"},
            "QLabel#yearLabel": {"font-size": "22px", "font-weight": "800", "padding": "0 8px"},
            "QPushButton": {
                "background-color": self.accent_primary,
                "color": self.background_primary,
                "border": "none",
                "border-radius": "6px",
                "padding": "5px 14px",
                "font-weight": "600",
            },
            "QPushButton:disabled": {"background-color": self.border_subtle, "color": self.text_secondary},
            "QPushButton#secondaryButton": {
                "background-color": "transparent",
                "color": self.accent_primary,
                "border": f"1px solid {self.border_strong}",
            },
            "QLineEdit, QTextEdit, QComboBox, QDateEdit, QSpinBox": {
                "background-color": self.background_secondary,
                "color": self.text_primary,
                "border": f"1px solid {self.border_strong}",
                "border-radius": "4px",
                "padding": "4px 6px",
            },
            "QListWidget": {"background-color": self.background_secondary, "border": "none"},
            "QWidget#sidebarPanel": {"background-color": self.surface},
            "QStatusBar": {"color": self.text_secondary},
        }

    def as_stylesheet(self) -> str:
        """Global stylesheet for the QApplication."""

        blocks = []
        for selector, properties in self.stylesheet_rules().items():
            body = "".join(f" {name}: {value};" for name, value in properties.items())
            blocks.append(f"{selector} {{{body} }}")
        return "\n".join(blocks)
