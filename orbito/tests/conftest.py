from __future__ import annotations

import pytest

from orbito.analytics.store import clear_events
from orbito.app import app
from orbito.recommendations.cache import clear_cache
from orbito.tours.data_store import get_tour_store
from orbito.tests.fakes import SAMPLE_TOURS, FakeTourStore, recent_bookings


@pytest.fixture(autouse=True)
def _reset_state():
    clear_cache()
    clear_events()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def fake_store() -> FakeTourStore:
    store = FakeTourStore(
        SAMPLE_TOURS,
        bookings=recent_bookings(),
        user_tours={"foodie": [SAMPLE_TOURS[0], SAMPLE_TOURS[3]]},
    )
    app.dependency_overrides[get_tour_store] = lambda: store
    return store
