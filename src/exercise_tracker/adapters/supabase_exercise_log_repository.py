"""Supabase repository for users' embedded exercise logs.

The log lives in a ``jsonb`` column next to the denormalized ``count``.
Appends rewrite both columns in one row update that is conditioned on the
previously read count, so a racing writer makes the update match no rows
instead of leaving count and log out of step.
"""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from exercise_tracker.adapters.supabase_user_repository import USERS_TABLE
from exercise_tracker.domain.errors import (
    ConcurrentUpdateError,
    MalformedIdError,
    StoreError,
)
from exercise_tracker.domain.models import ExerciseEntry, UserLog
from exercise_tracker.services.exercises import ExerciseLogRepository

logger = logging.getLogger(__name__)


@dataclass
class SupabaseExerciseLogRepository(ExerciseLogRepository):
    """Supabase implementation for exercise log reads and appends."""

    client: Client

    def get_user_log(self, user_id: str) -> UserLog | None:
        """Return the user with its full log, if present."""
        _require_uuid(user_id)
        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("id, username, count, log")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            logger.exception("Failed to load log", extra={"user_id": user_id})
            raise StoreError("Failed to load user log") from exc
        if not response.data:
            return None
        return _parse_user_log(response.data[0])

    def append_exercise(self, user: UserLog, entry: ExerciseEntry) -> UserLog:
        """Push the entry and bump the count in a single conditional update."""
        _require_uuid(user.id)
        log = [_serialize_entry(item) for item in user.log]
        log.append(_serialize_entry(entry))
        payload = {"count": len(log), "log": log}
        try:
            response = (
                self.client.table(USERS_TABLE)
                .update(payload)
                .eq("id", user.id)
                .eq("count", user.count)
                .execute()
            )
        except APIError as exc:
            logger.exception("Failed to append exercise", extra={"user_id": user.id})
            raise StoreError("Failed to append exercise") from exc
        if not response.data:
            raise ConcurrentUpdateError(
                f"Exercise log for user {user.id} changed during the update"
            )
        return _parse_user_log(response.data[0])


def _require_uuid(user_id: str) -> None:
    try:
        UUID(user_id)
    except ValueError:
        raise MalformedIdError(f"Malformed user id: {user_id}") from None


def _serialize_entry(entry: ExerciseEntry) -> dict[str, object]:
    return {
        "description": entry.description,
        "duration": entry.duration,
        "date": entry.date.isoformat(),
    }


def _parse_entry(raw: object) -> ExerciseEntry:
    if not isinstance(raw, dict):
        raise StoreError("Corrupt log entry")
    description = raw.get("description")
    duration = raw.get("duration")
    raw_date = raw.get("date")
    if (
        not isinstance(description, str)
        or not isinstance(duration, int)
        or isinstance(duration, bool)
        or not isinstance(raw_date, str)
    ):
        raise StoreError("Corrupt log entry")
    try:
        entry_date = date.fromisoformat(raw_date[:10])
    except ValueError:
        raise StoreError("Corrupt log entry") from None
    return ExerciseEntry(description=description, duration=duration, date=entry_date)


def _parse_user_log(row: dict[str, object]) -> UserLog:
    raw_log = row.get("log") or []
    log = [_parse_entry(item) for item in raw_log]
    return UserLog(
        id=str(row["id"]),
        username=str(row["username"]),
        count=int(row.get("count") or 0),
        log=log,
    )
