"""Pydantic response models for the HTTP API."""

from pydantic import BaseModel


class UserOut(BaseModel):
    """Registered user."""

    id: str
    username: str


class ExerciseOut(BaseModel):
    """User merged with the exercise that was just logged."""

    id: str
    username: str
    count: int
    description: str
    duration: int
    date: str


class LogEntryOut(BaseModel):
    """Exercise entry inside a log response."""

    description: str
    duration: int
    date: str


class UserLogOut(BaseModel):
    """Filtered exercise log for a user."""

    id: str
    username: str
    count: int
    log: list[LogEntryOut]


class ErrorDetail(BaseModel):
    """Body of the error envelope."""

    type: str
    message: str
    field: str | None = None


class ErrorOut(BaseModel):
    """Uniform error envelope returned for every failure."""

    error: ErrorDetail
