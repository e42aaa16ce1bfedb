from __future__ import annotations

from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication

from ...config import AppPalette
from ...domain import Theme

Role = QPalette.ColorRole


def apply_palette(app: QApplication, theme: Theme) -> AppPalette:
    palette = AppPalette.for_theme(theme)
    roles = {
        Role.Window: palette.background_primary,
        Role.Base: palette.background_secondary,
        Role.AlternateBase: palette.surface,
        Role.Text: palette.text_primary,
        Role.WindowText: palette.text_primary,
        Role.PlaceholderText: palette.text_secondary,
        Role.Button: palette.accent_primary,
        Role.ButtonText: palette.background_primary,
        Role.Highlight: palette.accent_primary,
        Role.HighlightedText: palette.background_primary,
    }
    qt_palette = QPalette()
    for role, color in roles.items():
        qt_palette.setColor(role, QColor(color))
    app.setPalette(qt_palette)
    app.setStyleSheet(palette.as_stylesheet())
    return palette
