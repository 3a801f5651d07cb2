"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exercise_tracker.api.users import router as users_router
from exercise_tracker.app_logging import configure_logging
from exercise_tracker.config import parse_cors_origins
from exercise_tracker.containers import AppContainer
from exercise_tracker.domain.errors import (
    ExerciseTrackerError,
    StoreError,
    ValidationError,
)

_HTTP_ERROR_TYPES = {404: "not_found", 405: "method_not_allowed"}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Exercise Tracker")
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(users_router)

    @app.exception_handler(ExerciseTrackerError)
    async def handle_tracker_error(
        request: Request, exc: ExerciseTrackerError
    ) -> JSONResponse:
        """Render domain errors with the uniform error envelope."""
        if isinstance(exc, StoreError):
            logger.warning(
                "Store error on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_envelope(container, exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render routing and framework HTTP errors in the same envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(
                _HTTP_ERROR_TYPES.get(exc.status_code, "http_error"), str(exc.detail)
            ),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report the first invalid request field as a validation error."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = first.get("loc") or ()
        field = str(location[-1]) if location else None
        message = str(first.get("msg") or "Invalid request")
        return JSONResponse(
            status_code=400,
            content=_envelope("validation_error", message, field),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        """Log unexpected failures and hide their details outside local runs."""
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        message = "Internal server error"
        if container.settings.environment == "local":
            message = f"{message} (debug: {type(exc).__name__}: {exc})"
        return JSONResponse(
            status_code=500, content=_envelope("internal_error", message)
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Landing page with forms for the POST endpoints."""
        return HTMLResponse(_INDEX_HTML)

    return app


def _envelope(
    error_type: str, message: str, field: str | None = None
) -> dict[str, object]:
    return {"error": {"type": error_type, "message": message, "field": field}}


def _error_envelope(
    container: AppContainer, exc: ExerciseTrackerError
) -> dict[str, object]:
    """Build the error body, adding store diagnostics only in local runs."""
    message = exc.message
    cause = exc.__cause__
    if (
        isinstance(exc, StoreError)
        and cause is not None
        and container.settings.environment == "local"
    ):
        message = f"{message} (debug: {type(cause).__name__}: {cause})"
    field = exc.field if isinstance(exc, ValidationError) else None
    return _envelope(exc.error_type, message, field)


_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Exercise Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      form { margin-bottom: 2rem; }
      input { display: block; padding: 0.4rem 0.6rem; margin: 0.3rem 0; width: 320px; }
      button { padding: 0.4rem 0.8rem; }
      code { background: #f6f6f6; padding: 0.1rem 0.3rem; }
    </style>
  </head>
  <body>
    <h1>Exercise Tracker</h1>
    <form action="/api/users" method="post">
      <h3>Create a new user</h3>
      <p><code>POST /api/users</code></p>
      <input name="username" type="text" placeholder="username" required />
      <button type="submit">Submit</button>
    </form>
    <form id="exercise-form" method="post">
      <h3>Add exercises</h3>
      <p><code>POST /api/users/:id/exercises</code></p>
      <input id="uid" type="text" placeholder=":id" required />
      <input name="description" type="text" placeholder="description*" required />
      <input name="duration" type="text" placeholder="duration* (mins.)" required />
      <input name="date" type="text" placeholder="date (yyyy-mm-dd)" />
      <button type="submit">Submit</button>
    </form>
    <p>
      <code>GET /api/users/:id/logs?[from][&amp;to][&amp;limit]</code><br />
      <code>from</code> and <code>to</code> are dates (yyyy-mm-dd);
      <code>limit</code> is an integer.
    </p>
    <script>
      const exerciseForm = document.getElementById('exercise-form');
      exerciseForm.addEventListener('submit', () => {
        const userId = document.getElementById('uid').value;
        exerciseForm.action = '/api/users/' + encodeURIComponent(userId) + '/exercises';
      });
    </script>
  </body>
</html>
"""
