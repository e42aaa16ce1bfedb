from __future__ import annotations

import calendar
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple

from PyQt6.QtCore import QPoint, QRect, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QApplication, QSizePolicy, QWidget

from ...config import AppPalette
from ...core.config import GRID_COLUMNS
from ...core.layout import PositionedEvent, month_cells
from ...domain import DragKind, Holiday
from ..geometry import GridGeometry, lanes_per_month


class YearGrid(QWidget):
    """Twelve month rows of 31 day cells with event bars drawn in lanes."""

    cell_clicked = pyqtSignal(object)
    event_clicked = pyqtSignal(str)
    drag_started = pyqtSignal(str, str, object)
    drag_dropped = pyqtSignal(object)

    def __init__(self, geometry: Optional[GridGeometry] = None) -> None:
        super().__init__()
        self.setObjectName("yearGrid")
        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.geometry_model = geometry or GridGeometry()
        self._year = date.today().year
        self._positioned: Dict[int, List[PositionedEvent]] = {month: [] for month in range(1, 13)}
        self._lanes: Dict[int, int] = {month: 0 for month in range(1, 13)}
        self._holidays: Mapping[date, Holiday] = {}
        self._palette = AppPalette()
        self._today: Optional[date] = None

        self._pressed: Optional[Tuple[QPoint, Optional[PositionedEvent], DragKind]] = None
        self._dragging = False
        self._hover: Optional[date] = None

    # ------------------------------------------------------------------ data

    def set_year_layout(
        self,
        year: int,
        positioned_by_month: Mapping[int, List[PositionedEvent]],
        holidays: Mapping[date, Holiday],
        *,
        today: Optional[date] = None,
    ) -> None:
        self._year = year
        self._positioned = {month: list(positioned_by_month.get(month, [])) for month in range(1, 13)}
        self._lanes = lanes_per_month(self._positioned)
        self._holidays = holidays
        self._today = today
        self.setFixedSize(self.sizeHint())
        self.update()

    def set_palette(self, palette: AppPalette) -> None:
        self._palette = palette
        self.update()

    def month_top(self, month: int) -> int:
        return self.geometry_model.row_tops(self._lanes)[month]

    def sizeHint(self) -> QSize:
        return QSize(self.geometry_model.width, self.geometry_model.total_height(self._lanes))

    # ------------------------------------------------------------------ painting

    def paintEvent(self, _event) -> None:
        geo = self.geometry_model
        palette = self._palette
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(palette.background_primary))

        painter.setPen(QColor(palette.text_secondary))
        for column in range(GRID_COLUMNS):
            cell = QRect(geo.month_label_width + column * geo.day_width, 0, geo.day_width, geo.header_height)
            painter.drawText(cell, Qt.AlignmentFlag.AlignCenter, str(column + 1))

        tops = geo.row_tops(self._lanes)
        for month in range(1, 13):
            self._paint_month(painter, month, tops[month])

        painter.setPen(QPen(QColor(palette.year_divider), 2))
        painter.drawLine(0, geo.header_height - 1, geo.width, geo.header_height - 1)
        painter.end()

    def _paint_month(self, painter: QPainter, month: int, top: int) -> None:
        geo = self.geometry_model
        palette = self._palette
        height = geo.row_height(self._lanes.get(month, 0))

        label = QRect(0, top, geo.month_label_width, height)
        painter.setPen(QColor(palette.text_primary))
        painter.drawText(label.adjusted(8, 0, 0, 0), Qt.AlignmentFlag.AlignVCenter, calendar.month_abbr[month])

        for cell in month_cells(self._year, month, today=self._today):
            rect = QRect(geo.month_label_width + (cell.day - 1) * geo.day_width, top, geo.day_width, height)
            if not cell.is_valid:
                painter.fillRect(rect, QColor(palette.border_subtle))
                continue
            day = date(self._year, month, cell.day)
            if cell.is_today:
                painter.fillRect(rect, QColor(palette.today))
            elif day in self._holidays:
                painter.fillRect(rect, QColor(palette.holiday))
            elif cell.is_weekend:
                painter.fillRect(rect, QColor(palette.weekend))
            if self._dragging and self._hover == day:
                highlight = QColor(palette.accent_primary)
                highlight.setAlpha(60)
                painter.fillRect(rect, highlight)
            painter.setPen(QColor(palette.border_subtle))
            painter.drawRect(rect)

        painter.setPen(QColor(palette.border_strong))
        painter.drawLine(0, top + height - 1, geo.width, top + height - 1)

        font = QFont(painter.font())
        font.setPointSizeF(max(font.pointSizeF() - 1, 7))
        painter.setFont(font)
        for item in self._positioned.get(month, []):
            x, y, width, bar_height = geo.bar_rect(top, item)
            bar = QRect(x, y, width, bar_height)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(item.event.color))
            painter.drawRoundedRect(bar, 4, 4)
            painter.setPen(QColor("#ffffff"))
            painter.drawText(
                bar.adjusted(4, 0, -4, 0),
                Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                item.event.title if item.is_start or item.start_col == 0 else "",
            )
        painter.setBrush(Qt.BrushStyle.NoBrush)

    # ------------------------------------------------------------------ pointer

    def date_at(self, pos: QPoint) -> Optional[date]:
        return self.geometry_model.date_at(self._year, pos.x(), pos.y(), self._lanes)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position().toPoint()
        hit = self.geometry_model.hit_bar(pos.x(), pos.y(), self._positioned)
        if hit is None:
            self._pressed = (pos, None, DragKind.MOVE)
        else:
            self._pressed = (pos, hit[0], hit[1])

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position().toPoint()
        if self._pressed is None:
            hit = self.geometry_model.hit_bar(pos.x(), pos.y(), self._positioned)
            self._update_cursor(hit[1] if hit else None)
            return

        origin, item, kind = self._pressed
        if not self._dragging and item is not None:
            if (pos - origin).manhattanLength() >= QApplication.startDragDistance():
                self._dragging = True
                grabbed = self.date_at(origin) if kind is DragKind.MOVE else None
                self.drag_started.emit(item.event.id, kind.value, grabbed)
        if self._dragging:
            hover = self.date_at(pos)
            if hover != self._hover:
                self._hover = hover
                self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton or self._pressed is None:
            return
        pos = event.position().toPoint()
        _origin, item, _kind = self._pressed
        dragging = self._dragging
        self._pressed = None
        self._dragging = False
        self._hover = None

        if dragging:
            target = self.date_at(pos) if self.rect().contains(pos) else None
            self.drag_dropped.emit(target)
            self.update()
        elif item is not None:
            self.event_clicked.emit(item.event.id)
        else:
            day = self.date_at(pos)
            if day is not None:
                self.cell_clicked.emit(day)

    def _update_cursor(self, kind: Optional[DragKind]) -> None:
        if kind in (DragKind.RESIZE_START, DragKind.RESIZE_END):
            self.setCursor(Qt.CursorShape.SizeHorCursor)
        elif kind is DragKind.MOVE:
            self.setCursor(Qt.CursorShape.OpenHandCursor)
        else:
            self.unsetCursor()
