"""Error types raised by services and store adapters."""


class ExerciseTrackerError(Exception):
    """Base class for errors surfaced to API clients."""

    error_type = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ExerciseTrackerError):
    """A required field is missing or a value cannot be parsed."""

    error_type = "validation_error"
    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(ExerciseTrackerError):
    """The requested user does not exist."""

    error_type = "not_found"
    status_code = 404


class StoreError(ExerciseTrackerError):
    """The underlying store failed to complete an operation."""

    error_type = "store_error"
    status_code = 500


class MalformedIdError(StoreError):
    """The identifier is not in the store's id format."""

    error_type = "malformed_id"
    status_code = 400


class ConcurrentUpdateError(StoreError):
    """The user's log changed between the read and the conditional write."""

    error_type = "concurrent_update"
    status_code = 409
