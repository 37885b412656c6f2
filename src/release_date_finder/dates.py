from __future__ import annotations

from datetime import date


def parse_calendar_date(value: str | None) -> date | None:
    """
    Parse a TMDb date string to a calendar date.

    Accepts YYYY-MM-DD and ISO timestamps (e.g., 1999-10-15T00:00:00.000Z).
    The calendar date is taken as written; no time zone conversion happens.

    Returns:
        date, or None if the value is empty or not a valid date
    """
    if not value:
        return None

    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


## Tests


def test_parse_calendar_date_plain():
    assert parse_calendar_date("2024-02-15") == date(2024, 2, 15)


def test_parse_calendar_date_timestamp():
    assert parse_calendar_date("1999-10-15T00:00:00.000Z") == date(1999, 10, 15)
    assert parse_calendar_date("2023-12-31T23:00:00.000Z") == date(2023, 12, 31)


def test_parse_calendar_date_invalid():
    assert parse_calendar_date(None) is None
    assert parse_calendar_date("") is None
    assert parse_calendar_date("not-a-date") is None
    assert parse_calendar_date("2024-13-01") is None
    assert parse_calendar_date("2024") is None
