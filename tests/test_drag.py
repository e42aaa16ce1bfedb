from datetime import date
from unittest.mock import MagicMock

import pytest

from conftest import make_local, make_mirrored

from linear_calendar.core.drag import DragController, DragStateError, resolve_drop
from linear_calendar.domain import DragKind


@pytest.fixture
def controller(store):
    return DragController(store)


def _add(store, start, end):
    return store.add_event(title="Trip", start_date=start, end_date=end)


def test_move_shifts_both_ends(store, controller):
    event = _add(store, "2024-06-01", "2024-06-03")
    controller.begin(event.id, DragKind.MOVE, date(2024, 6, 1))
    outcome = controller.drop(date(2024, 6, 4))

    assert outcome.day_diff == 3
    moved = store.find_event(event.id)
    assert (moved.start_date, moved.end_date) == (date(2024, 6, 4), date(2024, 6, 6))
    assert not controller.is_dragging


def test_move_round_trip_restores_original_range(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    controller.begin(event.id, "move", date(2024, 6, 10))
    controller.drop(date(2024, 6, 25))
    controller.begin(event.id, "move", date(2024, 6, 25))
    controller.drop(date(2024, 6, 10))

    restored = store.find_event(event.id)
    assert (restored.start_date, restored.end_date) == (event.start_date, event.end_date)


def test_resize_end_before_start_is_rejected(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    controller.begin(event.id, DragKind.RESIZE_END)
    assert controller.state.origin_date == date(2024, 6, 12)

    assert controller.drop(date(2024, 6, 5)) is None
    assert store.find_event(event.id).end_date == date(2024, 6, 12)
    assert not controller.is_dragging


def test_resize_start_can_shrink_to_a_single_day(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    controller.begin(event.id, DragKind.RESIZE_START)
    outcome = controller.drop(date(2024, 6, 12))

    assert (outcome.start_date, outcome.end_date) == (date(2024, 6, 12), date(2024, 6, 12))


@pytest.mark.parametrize("offset", [-40, -3, -1, 1, 2, 15, 60])
@pytest.mark.parametrize("kind", [DragKind.RESIZE_START, DragKind.RESIZE_END])
def test_resize_never_inverts_the_range(kind, offset):
    event = make_local("e", "2024-06-10", "2024-06-14")
    origin = date(2024, 6, 10) if kind is DragKind.RESIZE_START else date(2024, 6, 14)
    resolved = resolve_drop(event, kind, origin, date.fromordinal(origin.toordinal() + offset))
    start, end = resolved or (event.start_date, event.end_date)
    assert start <= end


def test_drop_on_the_origin_is_a_no_op(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    listener = MagicMock()
    store.subscribe(listener)
    controller.begin(event.id, DragKind.MOVE, date(2024, 6, 11))

    assert controller.drop(date(2024, 6, 11)) is None
    listener.assert_not_called()


def test_drop_outside_the_grid_cancels(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    controller.begin(event.id, DragKind.MOVE)
    assert controller.drop(None) is None
    assert not controller.is_dragging
    assert store.find_event(event.id).start_date == date(2024, 6, 10)


def test_only_one_gesture_at_a_time(store, controller):
    event = _add(store, "2024-06-10", "2024-06-12")
    controller.begin(event.id, DragKind.MOVE)
    with pytest.raises(DragStateError):
        controller.begin(event.id, DragKind.RESIZE_END)
    controller.cancel()
    controller.begin(event.id, DragKind.RESIZE_END)


def test_begin_on_unknown_event_without_origin_raises(controller):
    with pytest.raises(KeyError):
        controller.begin("missing", DragKind.MOVE)
    assert not controller.is_dragging


def test_mirrored_drop_goes_to_the_sink(store):
    mirrored = make_mirrored("r1", "2024-06-10", "2024-06-12")
    store.set_mirrored_events([mirrored])
    sink = MagicMock()
    controller = DragController(store, sink)

    controller.begin(mirrored.id, DragKind.RESIZE_END)
    outcome = controller.drop(date(2024, 6, 14))

    assert outcome.mirrored
    sink.submit_mirrored_edit.assert_called_once_with(
        mirrored.id, start_date=date(2024, 6, 10), end_date=date(2024, 6, 14)
    )


def test_mirrored_drop_without_sink_is_ignored(store):
    mirrored = make_mirrored("r1", "2024-06-10", "2024-06-12")
    store.set_mirrored_events([mirrored])
    controller = DragController(store)

    controller.begin(mirrored.id, DragKind.MOVE)
    assert controller.drop(date(2024, 6, 20)) is None
    assert store.find_event(mirrored.id).start_date == date(2024, 6, 10)
