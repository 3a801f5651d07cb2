"""Exercise log queries and the append protocol."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from exercise_tracker.domain.errors import NotFoundError, ValidationError
from exercise_tracker.domain.models import (
    AppendedExercise,
    ExerciseEntry,
    ExerciseLogView,
    FormattedEntry,
    UserLog,
)
from exercise_tracker.domain.parsing import (
    format_calendar_date,
    parse_date,
    parse_duration,
    parse_limit,
    parse_optional_date,
)

logger = logging.getLogger(__name__)


class ExerciseLogRepository(Protocol):
    """Persistence interface for users' embedded exercise logs."""

    def get_user_log(self, user_id: str) -> UserLog | None:
        """Return the user with its full log, if present."""

    def append_exercise(self, user: UserLog, entry: ExerciseEntry) -> UserLog:
        """Atomically push the entry and set count to ``len(user.log) + 1``.

        The write only applies while the stored count still equals
        ``user.count``; otherwise ``ConcurrentUpdateError`` is raised and
        nothing changes.
        """


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class ExerciseService:
    """Service that appends exercises and answers log queries."""

    repository: ExerciseLogRepository
    today: Callable[[], date] = field(default=_utc_today)

    def append_exercise(
        self,
        user_id: str,
        description: object,
        duration: object,
        date_value: object = None,
    ) -> AppendedExercise:
        """Validate and append an exercise, returning the merged user view."""
        entry = self._build_entry(description, duration, date_value)
        user = self.repository.get_user_log(user_id)
        if user is None:
            raise NotFoundError(f"Unknown user id: {user_id}")

        updated = self.repository.append_exercise(user, entry)
        logger.info(
            "Appended exercise for user %s (count=%s)", user_id, updated.count
        )
        return AppendedExercise(
            id=updated.id,
            username=updated.username,
            count=updated.count,
            description=entry.description,
            duration=entry.duration,
            date=format_calendar_date(entry.date),
        )

    def query_log(
        self,
        user_id: str,
        from_value: str | None = None,
        to_value: str | None = None,
        limit_value: str | None = None,
    ) -> ExerciseLogView:
        """Return the user's log filtered by date range and bounded by limit."""
        start = self._parse_from(from_value)
        end = parse_optional_date(to_value, "to")
        limit = parse_limit(limit_value)

        user = self.repository.get_user_log(user_id)
        if user is None:
            raise NotFoundError(f"Unknown user id: {user_id}")

        entries = filter_entries(user.log, start, end)
        if limit is not None:
            entries = entries[:limit]
        return ExerciseLogView(
            id=user.id,
            username=user.username,
            count=len(entries),
            log=[
                FormattedEntry(
                    description=entry.description,
                    duration=entry.duration,
                    date=format_calendar_date(entry.date),
                )
                for entry in entries
            ],
        )

    def _build_entry(
        self, description: object, duration: object, date_value: object
    ) -> ExerciseEntry:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("description", "description is required")
        parsed_duration = parse_duration(duration)
        if _is_blank(date_value):
            entry_date = self.today()
        else:
            entry_date = parse_date(date_value)
        return ExerciseEntry(
            description=description, duration=parsed_duration, date=entry_date
        )

    @staticmethod
    def _parse_from(value: str | None) -> date | None:
        try:
            return parse_optional_date(value, "from")
        except ValidationError:
            logger.warning("Ignoring unparsable from date %r", value)
            return None


def filter_entries(
    entries: list[ExerciseEntry], start: date | None, end: date | None
) -> list[ExerciseEntry]:
    """Keep entries strictly after ``start`` and strictly before ``end``."""
    return [
        entry
        for entry in entries
        if (start is None or entry.date > start) and (end is None or entry.date < end)
    ]


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
