"""User registration and listing."""

import logging
from dataclasses import dataclass
from typing import Protocol

from exercise_tracker.domain.errors import ValidationError
from exercise_tracker.domain.models import UserRecord

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user records."""

    def create_user(self, username: str) -> UserRecord:
        """Create and return a new user record."""

    def list_users(self) -> list[UserRecord]:
        """Return every user with only id and username."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def create_user(self, username: object) -> UserRecord:
        """Register a user; duplicate usernames are allowed."""
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("username", "username is required")
        created = self.repository.create_user(username)
        logger.info("Created user %s", created.id)
        return created

    def list_users(self) -> list[UserRecord]:
        """Return all registered users."""
        return self.repository.list_users()
