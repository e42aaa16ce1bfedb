"""Lane assignment for the month rows of the year grid.

Each month is drawn on a fixed 31-column grid. ``layout_month`` clips events
to the month, orders them widest-first within a start day and packs them into
lanes greedily. The packing is not guaranteed to use the fewest lanes, but lane
numbers are what the grid draws, so the algorithm must stay exactly as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..domain import Event
from .config import GRID_COLUMNS
from .dates import days_in_month, format_iso, is_today, is_weekend, month_bounds


@dataclass(frozen=True, slots=True)
class PositionedEvent:
    event: Event
    start_col: int
    end_col: int
    lane: int
    is_start: bool
    is_end: bool


@dataclass(frozen=True, slots=True)
class MonthCell:
    year: int
    month: int
    day: int
    is_valid: bool
    is_weekend: bool
    is_today: bool
    date_str: str


def layout_month(events: Iterable[Event], year: int, month: int) -> List[PositionedEvent]:
    month_start, month_end = month_bounds(year, month)
    last_col = month_end.day - 1

    relevant = [event for event in events if event.start_date <= month_end and event.end_date >= month_start]
    if not relevant:
        return []

    # Two stable passes: end date descending, then start date ascending.
    relevant.sort(key=lambda event: event.end_date, reverse=True)
    relevant.sort(key=lambda event: event.start_date)

    positioned: list[PositionedEvent] = []
    lane_ends: list[int] = []

    for event in relevant:
        start_col = 0 if event.start_date < month_start else event.start_date.day - 1
        end_col = last_col if event.end_date > month_end else event.end_date.day - 1

        lane = 0
        while lane < len(lane_ends) and lane_ends[lane] >= start_col:
            lane += 1
        if lane == len(lane_ends):
            lane_ends.append(end_col)
        else:
            lane_ends[lane] = end_col

        positioned.append(
            PositionedEvent(
                event=event,
                start_col=start_col,
                end_col=end_col,
                lane=lane,
                is_start=event.start_date >= month_start,
                is_end=event.end_date <= month_end,
            )
        )

    return positioned


def lane_count(positioned: Sequence[PositionedEvent]) -> int:
    if not positioned:
        return 0
    return max(item.lane for item in positioned) + 1


def month_cells(year: int, month: int, *, today: Optional[date] = None) -> List[MonthCell]:
    total = days_in_month(year, month)
    cells: list[MonthCell] = []
    for day in range(1, GRID_COLUMNS + 1):
        valid = day <= total
        cells.append(
            MonthCell(
                year=year,
                month=month,
                day=day,
                is_valid=valid,
                is_weekend=valid and is_weekend(year, month, day),
                is_today=valid and is_today(year, month, day, today=today),
                date_str=format_iso(year, month, day) if valid else "",
            )
        )
    return cells


__all__ = ["MonthCell", "PositionedEvent", "lane_count", "layout_month", "month_cells"]
