from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.exceptions import InvalidDateError


def parse_iso_date(value: object) -> date:
    """Parse a YYYY-MM-DD string (or date/datetime) into a date.

    Raises InvalidDateError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid date: {value!r}")

    v = value.strip()
    # Accept timestamps like 2024-03-10T00:00:00Z, the date part is what matters.
    if len(v) > 10 and v[10] in "T ":
        v = v[:10]
    try:
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_optional_date(value: object) -> Optional[date]:
    """Like parse_iso_date but returns None for missing or unparseable values."""
    if value is None or value == "":
        return None
    try:
        return parse_iso_date(value)
    except InvalidDateError:
        return None


def require_range(start: date, end: date) -> None:
    if start > end:
        raise InvalidDateError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    if not 1 <= int(month) <= 12:
        raise InvalidDateError(f"Invalid month: {month!r}")
    try:
        last_day = calendar.monthrange(int(year), int(month))[1]
        return date(int(year), int(month), 1), date(int(year), int(month), last_day)
    except ValueError:
        raise InvalidDateError(f"Invalid year: {year!r}")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every day from start to end, both inclusive."""
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def is_weekend(day: date) -> bool:
    # Saturday=5, Sunday=6
    return day.weekday() >= 5


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
