from __future__ import annotations

from enum import Enum


class DragKind(str, Enum):
    MOVE = "move"
    RESIZE_START = "resize-start"
    RESIZE_END = "resize-end"


class ModalMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT
