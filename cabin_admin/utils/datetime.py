"""Calendar-day normalization and UTC timestamp helpers."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from cabin_admin.errors import ValidationError

DateLike = Union[str, date, datetime]

# "YYYY-MM-DD", optionally followed by an ISO time part ("T" or " " separator,
# optional seconds/fraction and a "Z" or numeric offset)
_ISO_DATE = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    Record timestamps (created_at, updated_at) use this instead of
    datetime.now() or datetime.utcnow() so they are always stored in UTC.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def _parse_date_string(value: str) -> date | None:
    match = _ISO_DATE.match(value.strip())
    if not match:
        return None
    year, month, day, hour, minute, second = match.groups()
    try:
        parsed = date(int(year), int(month), int(day))
        if hour is not None:
            time(int(hour), int(minute), int(second or 0))
    except ValueError:
        return None
    return parsed


def to_local_date(value: DateLike) -> date:
    """
    Collapse a date-like value to its calendar day.

    The day is always the wall-clock date the value was written with, so the
    same instant gives the same day whether it arrives as a string or as a
    datetime, and whatever the server's offset. ``2024-03-10T23:30:00+00:00``
    and ``datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)`` both map to
    March 10th. Strings must be an ISO date, optionally followed by a valid
    time part; anything else after the date is rejected.

    Args:
        value: date, datetime or ISO date string

    Returns:
        The calendar date

    Raises:
        ValidationError: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = _parse_date_string(value)
        if parsed is not None:
            return parsed
    raise ValidationError("Fecha inválida", details={"value": str(value)})


def start_of_day(value: DateLike) -> datetime:
    """
    Return the naive local-midnight instant of the given day.

    Example:
        >>> start_of_day("2024-03-10T18:45:00")
        datetime.datetime(2024, 3, 10, 0, 0)
    """
    day = to_local_date(value)
    return datetime(day.year, day.month, day.day)


def today() -> date:
    """Return the current local calendar day."""
    return datetime.now().date()


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)
