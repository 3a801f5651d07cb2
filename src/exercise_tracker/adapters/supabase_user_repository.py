"""Supabase-backed user repository."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from exercise_tracker.domain.errors import StoreError
from exercise_tracker.domain.models import UserRecord
from exercise_tracker.services.users import UserRepository

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def create_user(self, username: str) -> UserRecord:
        """Insert a user row and return its id and username."""
        try:
            response = (
                self.client.table(USERS_TABLE).insert({"username": username}).execute()
            )
        except APIError as exc:
            logger.exception("Failed to create user")
            raise StoreError("Failed to create user") from exc
        if not response.data:
            raise StoreError("Failed to create user")
        return _parse_user(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return id and username for every user in creation order."""
        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("id, username")
                .order("created_at", desc=False)
                .execute()
            )
        except APIError as exc:
            logger.exception("Failed to list users")
            raise StoreError("Failed to list users") from exc
        return [_parse_user(row) for row in response.data or []]


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(id=str(row["id"]), username=str(row["username"]))
