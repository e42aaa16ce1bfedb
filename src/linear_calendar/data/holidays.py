from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Callable, Dict, Mapping, Optional, Tuple

import holidays

from ..domain import Holiday

HolidayLookup = Callable[[int], Mapping[date, Holiday]]

SURFACED_TYPES = frozenset({"public", "bank"})

# Earlier categories win when a day appears in more than one table.
_CATEGORY_TYPES: Tuple[Tuple[str, str], ...] = ((holidays.PUBLIC, "public"), (holidays.BANK, "bank"))


def country_holiday_lookup(country: str, subdiv: Optional[str] = None) -> HolidayLookup:
    """Holiday lookup backed by the ``holidays`` package.

    Each of the country's supported public and bank categories is loaded on its
    own so every entry carries the category it came from as its ``type``.
    """

    @lru_cache(maxsize=1)
    def _categories() -> Tuple[Tuple[str, str], ...]:
        supported = holidays.country_holidays(country, subdiv=subdiv).supported_categories
        return tuple((category, kind) for category, kind in _CATEGORY_TYPES if category in supported)

    @lru_cache(maxsize=8)
    def _lookup(year: int) -> Dict[date, Holiday]:
        table: Dict[date, Holiday] = {}
        for category, kind in _categories():
            entries = holidays.country_holidays(country, subdiv=subdiv, years=year, categories=(category,))
            for day, name in entries.items():
                table.setdefault(day, Holiday(date=day, name=name, type=kind))
        return dict(sorted(table.items()))

    return _lookup


def visible_holidays(lookup: HolidayLookup, year: int) -> Dict[date, Holiday]:
    return {day: holiday for day, holiday in lookup(year).items() if holiday.type in SURFACED_TYPES}


__all__ = ["HolidayLookup", "SURFACED_TYPES", "country_holiday_lookup", "visible_holidays"]
