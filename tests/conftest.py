"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from exercise_tracker.config import Settings
from exercise_tracker.containers import AppContainer
from exercise_tracker.domain.errors import ConcurrentUpdateError
from exercise_tracker.domain.models import ExerciseEntry, UserLog, UserRecord
from exercise_tracker.services.exercises import ExerciseLogRepository, ExerciseService
from exercise_tracker.services.users import UserRepository, UserService


@dataclass
class InMemoryUserStore(UserRepository, ExerciseLogRepository):
    """In-memory user collection for tests."""

    users: dict[str, UserLog] = field(default_factory=dict)
    reads: int = 0
    writes: int = 0

    def create_user(self, username: str) -> UserRecord:
        user = UserLog(id=str(uuid4()), username=username, count=0, log=[])
        self.users[user.id] = user
        return UserRecord(id=user.id, username=user.username)

    def list_users(self) -> list[UserRecord]:
        return [
            UserRecord(id=user.id, username=user.username)
            for user in self.users.values()
        ]

    def get_user_log(self, user_id: str) -> UserLog | None:
        self.reads += 1
        return self.users.get(user_id)

    def append_exercise(self, user: UserLog, entry: ExerciseEntry) -> UserLog:
        current = self.users[user.id]
        if current.count != user.count:
            raise ConcurrentUpdateError("count changed")
        log = [*user.log, entry]
        updated = UserLog(id=user.id, username=user.username, count=len(log), log=log)
        self.users[user.id] = updated
        self.writes += 1
        return updated


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        environment="test",
    )


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def container(settings: Settings, store: InMemoryUserStore) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=UserService(store),
        exercise_service=ExerciseService(store),
    )
