"""Tests for the exercise append protocol."""

from datetime import date

import pytest

from exercise_tracker.domain.errors import (
    ConcurrentUpdateError,
    NotFoundError,
    ValidationError,
)
from exercise_tracker.domain.models import UserLog
from exercise_tracker.services.exercises import ExerciseService
from tests.conftest import InMemoryUserStore


def _service(store: InMemoryUserStore) -> ExerciseService:
    return ExerciseService(store, today=lambda: date(2024, 3, 9))


def test_append_returns_merged_view() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")
    service = _service(store)

    result = service.append_exercise(user.id, "run", "30", "2023-01-05")

    assert result.id == user.id
    assert result.username == "alice"
    assert result.count == 1
    assert result.description == "run"
    assert result.duration == 30
    assert result.date == "Thu Jan 05 2023"


def test_count_tracks_log_length_after_each_append() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")
    service = _service(store)

    for index in range(5):
        result = service.append_exercise(user.id, f"set {index}", index + 1)
        assert result.count == index + 1

    stored = store.users[user.id]
    assert stored.count == 5
    assert len(stored.log) == 5


def test_append_preserves_order_with_new_entry_last() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")
    service = _service(store)

    service.append_exercise(user.id, "late", 10, "2023-05-01")
    service.append_exercise(user.id, "early", 20, "2023-01-01")

    descriptions = [entry.description for entry in store.users[user.id].log]
    assert descriptions == ["late", "early"]


def test_append_defaults_date_to_today() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")
    service = _service(store)

    result = service.append_exercise(user.id, "swim", 15, "")

    assert result.date == "Sat Mar 09 2024"
    assert store.users[user.id].log[0].date == date(2024, 3, 9)


def test_append_unknown_user_raises_not_found() -> None:
    store = InMemoryUserStore()

    with pytest.raises(NotFoundError):
        _service(store).append_exercise("missing", "run", 10)


@pytest.mark.parametrize(
    ("description", "duration", "date_value", "field"),
    [
        ("", 10, None, "description"),
        (None, 10, None, "description"),
        ("run", "ten", None, "duration"),
        ("run", None, None, "duration"),
        ("run", 10, "2023-13-45", "date"),
    ],
)
def test_validation_happens_before_store_access(
    description: object, duration: object, date_value: object, field: str
) -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")

    with pytest.raises(ValidationError) as excinfo:
        _service(store).append_exercise(user.id, description, duration, date_value)

    assert excinfo.value.field == field
    assert store.reads == 0
    assert store.writes == 0


def test_invalid_date_error_names_value() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")

    with pytest.raises(ValidationError) as excinfo:
        _service(store).append_exercise(user.id, "run", 10, "yesterday")

    assert "yesterday" in excinfo.value.message


def test_concurrent_append_leaves_log_unchanged() -> None:
    store = InMemoryUserStore()
    user = store.create_user("alice")
    service = _service(store)
    service.append_exercise(user.id, "first", 10)
    stale = store.users[user.id]
    service.append_exercise(user.id, "second", 10)

    racing = UserLog(id=stale.id, username=stale.username, count=stale.count, log=[])
    with pytest.raises(ConcurrentUpdateError):
        store.append_exercise(racing, store.users[user.id].log[0])

    stored = store.users[user.id]
    assert stored.count == 2
    assert [entry.description for entry in stored.log] == ["first", "second"]
