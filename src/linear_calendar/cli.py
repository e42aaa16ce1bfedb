from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from .bootstrap import configure_logging
from .config import get_settings
from .core.dates import InvalidDateFormatError, days_in_month, month_label, parse_iso
from .core.layout import PositionedEvent, lane_count, layout_month
from .core.persistence import StateFile
from .core.store import EventStore
from .data import country_holiday_lookup, visible_holidays
from .domain import DEFAULT_EVENT_COLORS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Linear Calendar command line interface.")
    parser.add_argument("--state-file", type=Path, default=None, help="Override the local state file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("gui", help="Launch the desktop year view.")

    show_parser = subparsers.add_parser("show", help="Print the lane layout of a year or month.")
    show_parser.add_argument("--year", type=int, default=None)
    show_parser.add_argument("--month", type=int, choices=range(1, 13), default=None)

    add_parser = subparsers.add_parser("add", help="Add a local event.")
    add_parser.add_argument("title")
    add_parser.add_argument("start", help="Start date (YYYY-MM-DD).")
    add_parser.add_argument("end", nargs="?", default=None, help="Inclusive end date (YYYY-MM-DD).")
    add_parser.add_argument("--color", default=DEFAULT_EVENT_COLORS[0], choices=DEFAULT_EVENT_COLORS)
    add_parser.add_argument("--description", default="")

    list_parser = subparsers.add_parser("list", help="List local events.")
    list_parser.add_argument("--year", type=int, default=None)

    holiday_parser = subparsers.add_parser("holidays", help="List public and bank holidays for a year.")
    holiday_parser.add_argument("--year", type=int, default=None)
    holiday_parser.add_argument("--country", default=None)
    holiday_parser.add_argument("--subdiv", default=None, help="State or province code, e.g. NSW.")

    return parser


def render_month(positioned: Sequence[PositionedEvent], year: int, month: int) -> List[str]:
    """Text rendering of one month row, one line per lane."""

    width = days_in_month(year, month)
    lines = [f"{month_label(year, month):<9}" + "".join(str(day % 10) for day in range(1, width + 1))]
    for lane in range(lane_count(positioned)):
        row = [" "] * width
        titles = []
        for item in positioned:
            if item.lane != lane:
                continue
            for col in range(item.start_col, item.end_col + 1):
                row[col] = "="
            row[item.start_col] = "[" if item.is_start else "<"
            row[item.end_col] = "]" if item.is_end else ">"
            if item.start_col == item.end_col and item.is_start and item.is_end:
                row[item.start_col] = "#"
            titles.append(item.event.title)
        lines.append(" " * 9 + "".join(row) + "  " + ", ".join(titles))
    return lines


def _open_store(state_file: Optional[Path]) -> EventStore:
    path = state_file or get_settings().storage.state_file
    return EventStore(StateFile(path))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "gui":
        configure_logging()
        logger.info("Linear Calendar GUI starting")
        from .ui.app import run_gui

        run_gui(args.state_file)
        return 0

    store = _open_store(args.state_file)
    try:
        if args.command == "show":
            year = args.year or store.current_year
            months = [args.month] if args.month else range(1, 13)
            for month in months:
                positioned = layout_month(store.all_events(), year, month)
                print("\n".join(render_month(positioned, year, month)))
        elif args.command == "add":
            event = store.add_event(
                title=args.title,
                start_date=parse_iso(args.start),
                end_date=parse_iso(args.end) if args.end else None,
                color=args.color,
                description=args.description,
            )
            print(f"Added {event.id}: {event.title} {event.start_date.isoformat()}..{event.end_date.isoformat()}")
        elif args.command == "list":
            events = sorted(store.local_events, key=lambda item: (item.start_date, item.end_date))
            if args.year:
                first, last = date(args.year, 1, 1), date(args.year, 12, 31)
                events = [event for event in events if event.start_date <= last and event.end_date >= first]
            for event in events:
                print(f"{event.start_date.isoformat()}..{event.end_date.isoformat()}  {event.title}  ({event.id})")
        elif args.command == "holidays":
            year = args.year or store.current_year
            ui = get_settings().ui
            subdiv = args.subdiv or (None if args.country else ui.holiday_subdiv)
            lookup = country_holiday_lookup(args.country or ui.holiday_country, subdiv)
            for day, holiday in visible_holidays(lookup, year).items():
                print(f"{day.isoformat()}  {holiday.name}")
    except InvalidDateFormatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
