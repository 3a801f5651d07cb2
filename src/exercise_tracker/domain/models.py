"""Domain models for the exercise tracker."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class UserRecord:
    """Represents a user as returned by registration and listing."""

    id: str
    username: str


@dataclass(frozen=True)
class ExerciseEntry:
    """One exercise embedded in a user's log."""

    description: str
    duration: int
    date: date


@dataclass(frozen=True)
class UserLog:
    """A stored user together with its full exercise log."""

    id: str
    username: str
    count: int
    log: list[ExerciseEntry] = field(default_factory=list)


@dataclass(frozen=True)
class FormattedEntry:
    """Exercise entry with its date rendered for display."""

    description: str
    duration: int
    date: str


@dataclass(frozen=True)
class ExerciseLogView:
    """Filtered and limited log for a user."""

    id: str
    username: str
    count: int
    log: list[FormattedEntry]


@dataclass(frozen=True)
class AppendedExercise:
    """Updated user merged with the entry that was just appended."""

    id: str
    username: str
    count: int
    description: str
    duration: int
    date: str
