from datetime import date

import pytest

from linear_calendar.domain import LocalEvent, MirroredEvent, Theme


def test_mirrored_event_requires_a_calendar():
    with pytest.raises(ValueError):
        MirroredEvent(
            id="x",
            title="x",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 1),
            color="#3b82f6",
            calendar_id="",
            remote_id="x",
        )


def test_origin_is_carried_on_the_event():
    mirrored = MirroredEvent.build(
        calendar_id="team::a",
        remote_id="r",
        title="x",
        start_date=date(2024, 1, 2),
        end_date=date(2024, 1, 1),
    )
    assert mirrored.is_mirrored
    assert mirrored.calendar_id == "team::a"
    assert mirrored.end_date == date(2024, 1, 2)


def test_local_record_round_trip():
    event = LocalEvent(
        id="1", title="Trip", start_date=date(2024, 1, 1), end_date=date(2024, 1, 3), color="#f43f5e"
    )
    assert LocalEvent.from_record(event.to_record()) == event
    assert event.duration_days == 3
    assert not event.is_mirrored


def test_theme_toggle():
    assert Theme.LIGHT.toggled() is Theme.DARK
    assert Theme.DARK.toggled() is Theme.LIGHT
