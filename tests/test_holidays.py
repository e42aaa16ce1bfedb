from datetime import date

from linear_calendar.data import country_holiday_lookup, visible_holidays
from linear_calendar.domain import Holiday


def test_only_public_and_bank_holidays_are_surfaced():
    table = {
        date(2024, 1, 1): Holiday(date=date(2024, 1, 1), name="New Year", type="public"),
        date(2024, 8, 26): Holiday(date=date(2024, 8, 26), name="Summer Bank Holiday", type="bank"),
        date(2024, 2, 14): Holiday(date=date(2024, 2, 14), name="Valentine's Day", type="observance"),
    }

    visible = visible_holidays(lambda year: table, 2024)
    assert sorted(holiday.name for holiday in visible.values()) == ["New Year", "Summer Bank Holiday"]


def test_country_lookup_uses_the_holidays_tables():
    lookup = country_holiday_lookup("US")
    july_fourth = lookup(2024)[date(2024, 7, 4)]
    assert july_fourth.type == "public"
    assert "Independence" in july_fourth.name
    assert lookup(2024) is lookup(2024)


def test_bank_holidays_are_loaded_with_their_category():
    lookup = country_holiday_lookup("AU", subdiv="NSW")
    bank_holiday = lookup(2024)[date(2024, 8, 5)]
    assert bank_holiday.type == "bank"
    assert lookup(2024)[date(2024, 1, 26)].type == "public"

    visible = visible_holidays(lookup, 2024)
    assert date(2024, 8, 5) in visible
    assert {holiday.type for holiday in visible.values()} == {"public", "bank"}
