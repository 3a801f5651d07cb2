"""Tests for request value parsing."""

from datetime import date

import pytest

from exercise_tracker.domain.errors import ValidationError
from exercise_tracker.domain.parsing import (
    format_calendar_date,
    parse_date,
    parse_duration,
    parse_limit,
    parse_optional_date,
)


def test_parse_date_accepts_iso_date_and_datetime() -> None:
    assert parse_date("2023-01-05") == date(2023, 1, 5)
    assert parse_date("2023-01-05T10:30:00") == date(2023, 1, 5)


def test_parse_date_names_invalid_value() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_date("not-a-date")

    assert excinfo.value.field == "date"
    assert "not-a-date" in excinfo.value.message


def test_parse_optional_date_treats_empty_as_absent() -> None:
    assert parse_optional_date(None, "to") is None
    assert parse_optional_date("  ", "to") is None


@pytest.mark.parametrize(("raw", "expected"), [("30", 30), (" 45 ", 45), (12, 12)])
def test_parse_duration_valid(raw: object, expected: int) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize(
    "raw", [None, "", "abc", "3.5", "0", -5, True, 2.0, "²", "9" * 5000]
)
def test_parse_duration_invalid(raw: object) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_duration(raw)

    assert excinfo.value.field == "duration"


def test_parse_limit() -> None:
    assert parse_limit(None) is None
    assert parse_limit("") is None
    assert parse_limit("0") == 0
    assert parse_limit("7") == 7


@pytest.mark.parametrize("raw", ["ten", "-1", "1.5", "9" * 5000])
def test_parse_limit_rejects_non_integers(raw: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_limit(raw)

    assert excinfo.value.field == "limit"


def test_format_calendar_date() -> None:
    assert format_calendar_date(date(2023, 1, 5)) == "Thu Jan 05 2023"
    assert format_calendar_date(date(2024, 1, 1)) == "Mon Jan 01 2024"


def test_format_calendar_date_pads_early_years() -> None:
    assert format_calendar_date(date(999, 12, 31)) == "Tue Dec 31 0999"
