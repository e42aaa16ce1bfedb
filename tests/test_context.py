from dataclasses import replace
from datetime import date

import pytest

from linear_calendar.config import get_settings
from linear_calendar.domain import DragKind
from linear_calendar.services import ServiceContext


@pytest.fixture
def context(tmp_path, google_settings):
    settings = get_settings()
    settings = replace(
        settings,
        google=google_settings,
        storage=replace(settings.storage, state_file=tmp_path / "state.json"),
    )
    return ServiceContext(settings=settings)


def test_context_wires_store_and_controllers(context, tmp_path):
    assert context.store is context.sync._store
    assert not context.sync.is_connected

    event = context.store.add_event(title="Trip", start_date=date(2024, 6, 1))
    context.drag.begin(event.id, DragKind.MOVE)
    context.drag.drop(date(2024, 6, 3))

    assert context.store.find_event(event.id).start_date == date(2024, 6, 3)
    assert (tmp_path / "state.json").exists()
