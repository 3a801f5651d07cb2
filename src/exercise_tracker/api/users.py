"""User and exercise log endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, status

from exercise_tracker.api.schemas import ErrorOut, ExerciseOut, UserLogOut, UserOut
from exercise_tracker.domain.errors import ValidationError

if TYPE_CHECKING:
    from exercise_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorOut},
        status.HTTP_404_NOT_FOUND: {"model": ErrorOut},
    },
)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(request: Request) -> object:
    """Register a new user from a JSON or form body."""
    container: AppContainer = request.app.state.container
    payload = await _read_payload(request)
    return container.user_service.create_user(payload.get("username"))


@router.get("", response_model=list[UserOut])
async def list_users(request: Request) -> object:
    """Return every user's id and username."""
    container: AppContainer = request.app.state.container
    return container.user_service.list_users()


@router.post("/{user_id}/exercises", response_model=ExerciseOut)
async def add_exercise(user_id: str, request: Request) -> object:
    """Append an exercise to the user's log."""
    container: AppContainer = request.app.state.container
    payload = await _read_payload(request)
    return container.exercise_service.append_exercise(
        user_id,
        description=payload.get("description"),
        duration=payload.get("duration"),
        date_value=payload.get("date"),
    )


@router.get("/{user_id}/logs", response_model=UserLogOut)
async def get_logs(
    user_id: str,
    request: Request,
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = None,
    limit: str | None = None,
) -> object:
    """Return the user's log, optionally filtered by date range and limit."""
    container: AppContainer = request.app.state.container
    return container.exercise_service.query_log(
        user_id, from_value=from_, to_value=to, limit_value=limit
    )


async def _read_payload(request: Request) -> dict[str, object]:
    """Read a POST body sent as JSON or as form data."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form.items())
    body = await request.body()
    if not body:
        return {}
    try:
        parsed = await request.json()
    except ValueError:
        raise ValidationError("body", "Request body is not valid JSON") from None
    if not isinstance(parsed, dict):
        raise ValidationError("body", "Request body must be a JSON object")
    return parsed
