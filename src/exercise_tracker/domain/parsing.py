"""Parsing and formatting helpers for request values."""

from datetime import date, datetime

from exercise_tracker.domain.errors import ValidationError

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_date(value: object, field: str = "date") -> date:
    """Parse a YYYY-MM-DD string (or ISO datetime) into a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(field, f"Invalid {field}: {value!r}")
    cleaned = value.strip()
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        raise ValidationError(field, f"Invalid {field}: {value!r}") from None


def parse_duration(value: object) -> int:
    """Parse a duration into a positive integer."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("duration", "duration is required")
    if isinstance(value, bool):
        raise ValidationError("duration", f"Invalid duration: {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _is_ascii_digits(value.strip()):
        parsed = _to_int(value.strip(), "duration", value)
    else:
        raise ValidationError("duration", f"Invalid duration: {value!r}")
    if parsed <= 0:
        raise ValidationError("duration", "duration must be a positive integer")
    return parsed


def parse_limit(value: str | None) -> int | None:
    """Parse an optional non-negative result limit."""
    if value is None or not value.strip():
        return None
    cleaned = value.strip()
    if not _is_ascii_digits(cleaned):
        raise ValidationError("limit", f"Invalid limit: {value!r}")
    return _to_int(cleaned, "limit", value)


def parse_optional_date(value: str | None, field: str) -> date | None:
    """Parse an optional query date, treating empty values as absent."""
    if value is None or not value.strip():
        return None
    return parse_date(value, field)


def format_calendar_date(value: date) -> str:
    """Render a date like ``Thu Jan 05 2023`` regardless of locale."""
    weekday = _WEEKDAYS[value.weekday()]
    month = _MONTHS[value.month - 1]
    return f"{weekday} {month} {value.day:02d} {value.year:04d}"


def _is_ascii_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def _to_int(digits: str, field: str, original: object) -> int:
    # int() refuses digit strings past the interpreter's conversion limit.
    try:
        return int(digits)
    except ValueError:
        raise ValidationError(field, f"Invalid {field}: {original!r}") from None
