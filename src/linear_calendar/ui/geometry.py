from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..core.config import GRID_COLUMNS
from ..core.dates import days_in_month
from ..core.layout import PositionedEvent, lane_count
from ..domain import DragKind

Rect = Tuple[int, int, int, int]


@dataclass(frozen=True)
class GridGeometry:
    """Pixel layout of the year grid: twelve month rows of 31 day columns."""

    month_label_width: int = 80
    day_width: int = 36
    header_height: int = 30
    cell_height: int = 40
    event_height: int = 20
    event_gap: int = 2
    edge_grip: int = 6

    @property
    def width(self) -> int:
        return self.month_label_width + GRID_COLUMNS * self.day_width

    def row_height(self, lanes: int) -> int:
        return self.cell_height + lanes * (self.event_height + self.event_gap)

    def row_tops(self, lanes_by_month: Mapping[int, int]) -> Dict[int, int]:
        tops: dict[int, int] = {}
        y = self.header_height
        for month in range(1, 13):
            tops[month] = y
            y += self.row_height(lanes_by_month.get(month, 0))
        return tops

    def total_height(self, lanes_by_month: Mapping[int, int]) -> int:
        return self.header_height + sum(self.row_height(lanes_by_month.get(month, 0)) for month in range(1, 13))

    def column_at(self, x: int) -> Optional[int]:
        offset = x - self.month_label_width
        if offset < 0:
            return None
        column = offset // self.day_width
        return column if column < GRID_COLUMNS else None

    def month_at(self, y: int, lanes_by_month: Mapping[int, int]) -> Optional[int]:
        for month, top in self.row_tops(lanes_by_month).items():
            if top <= y < top + self.row_height(lanes_by_month.get(month, 0)):
                return month
        return None

    def date_at(self, year: int, x: int, y: int, lanes_by_month: Mapping[int, int]) -> Optional[date]:
        month = self.month_at(y, lanes_by_month)
        column = self.column_at(x)
        if month is None or column is None or column + 1 > days_in_month(year, month):
            return None
        return date(year, month, column + 1)

    def bar_rect(self, row_top: int, item: PositionedEvent) -> Rect:
        x = self.month_label_width + item.start_col * self.day_width + 1
        y = row_top + self.cell_height + item.lane * (self.event_height + self.event_gap)
        width = (item.end_col - item.start_col + 1) * self.day_width - 2
        return x, y, width, self.event_height

    def hit_bar(
        self,
        x: int,
        y: int,
        positioned_by_month: Mapping[int, Sequence[PositionedEvent]],
    ) -> Optional[Tuple[PositionedEvent, DragKind]]:
        lanes = lanes_per_month(positioned_by_month)
        month = self.month_at(y, lanes)
        if month is None:
            return None
        top = self.row_tops(lanes)[month]
        for item in positioned_by_month.get(month, ()):
            left, bar_top, width, height = self.bar_rect(top, item)
            if not (left <= x < left + width and bar_top <= y < bar_top + height):
                continue
            if item.is_start and x < left + self.edge_grip:
                return item, DragKind.RESIZE_START
            if item.is_end and x >= left + width - self.edge_grip:
                return item, DragKind.RESIZE_END
            return item, DragKind.MOVE
        return None


def lanes_per_month(positioned_by_month: Mapping[int, Sequence[PositionedEvent]]) -> Dict[int, int]:
    return {month: lane_count(list(items)) for month, items in positioned_by_month.items()}


__all__ = ["GridGeometry", "Rect", "lanes_per_month"]
