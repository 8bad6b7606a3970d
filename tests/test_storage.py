"""Tests for the SQLite itinerary store."""
from __future__ import annotations

import pytest

from src.core.errors import PersistenceError
from src.storage.itineraries import ItineraryStore, ItinerarySubmission, join_destinations


def _submission(**overrides) -> ItinerarySubmission:
    data = {
        "name": "Avery",
        "email": "avery@example.com",
        "destinations": join_destinations(["Singapore", "Bali"]),
        "budget": 2000,
        "days": 5,
    }
    data.update(overrides)
    return ItinerarySubmission(**data)


@pytest.fixture
def store(tmp_path) -> ItineraryStore:
    return ItineraryStore(str(tmp_path / "itinerary.db"))


def test_insert_returns_incrementing_ids(store):
    first = store.insert(_submission())
    second = store.insert(_submission(name="Blake"))
    assert second == first + 1


def test_get_round_trips_fields(store):
    itinerary_id = store.insert(_submission(phone="+65 5550 1234", food_preferences="vegetarian"))

    record = store.get(itinerary_id)

    assert record.id == itinerary_id
    assert record.destinations == "Singapore, Bali"
    assert record.phone == "+65 5550 1234"
    assert record.food_preferences == "vegetarian"
    assert record.special_requests is None
    assert record.created_at


def test_get_missing_returns_none(store):
    assert store.get(999) is None


def test_list_all_newest_first(store):
    ids = [store.insert(_submission(name=name)) for name in ("A", "B", "C")]

    records = store.list_all()

    assert [r.id for r in records] == list(reversed(ids))


def test_unwritable_path_raises_persistence_error(tmp_path):
    with pytest.raises(PersistenceError):
        ItineraryStore(str(tmp_path / "missing-dir" / "itinerary.db"))
