"""
Unit tests for utils/datetime.py calendar-day normalization.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from cabin_admin.errors import ValidationError
from cabin_admin.utils.datetime import add_days, start_of_day, to_local_date, utc_now


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-10", date(2024, 3, 10)),
        ("2024-3-9", date(2024, 3, 9)),
        ("2024-03-10T23:30:00+00:00", date(2024, 3, 10)),
        ("2024-03-10 08:00:00", date(2024, 3, 10)),
        ("  2024-03-10  ", date(2024, 3, 10)),
        ("2024-03-10T00:00:00.000Z", date(2024, 3, 10)),
        ("2024-03-10T23:30-0300", date(2024, 3, 10)),
        ("2024-03-10 08:15", date(2024, 3, 10)),
        (date(2024, 3, 10), date(2024, 3, 10)),
        (datetime(2024, 3, 10, 22, 15), date(2024, 3, 10)),
    ],
)
def test_to_local_date_accepts_date_like_values(value: object, expected: date) -> None:
    assert to_local_date(value) == expected  # type: ignore[arg-type]


@pytest.mark.unit
def test_aware_datetime_keeps_its_wall_clock_day() -> None:
    utc_late = datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)
    chile_early = datetime(2024, 3, 10, 0, 30, tzinfo=timezone(timedelta(hours=-3)))

    assert to_local_date(utc_late) == date(2024, 3, 10)
    assert to_local_date(chile_early) == date(2024, 3, 10)


@pytest.mark.unit
def test_string_and_datetime_for_same_instant_give_same_day() -> None:
    aware = datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)

    assert to_local_date(aware) == to_local_date(aware.isoformat())
    assert to_local_date(aware) == to_local_date("2024-03-10T23:30:00Z")


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    [
        "",
        "10/03/2024",
        "2024-02-30",
        "tomorrow",
        None,
        20240310,
        "2024-03-10 garbage",
        "2024-03-10Tnonsense",
        "2024-03-10 99:99",
        "2024-03-10T25:00:00",
        "2024-03-10T08:00:00 extra",
        "2024-03-10T",
    ],
)
def test_to_local_date_rejects_garbage(value: object) -> None:
    with pytest.raises(ValidationError) as exc_info:
        to_local_date(value)  # type: ignore[arg-type]

    assert exc_info.value.kind == "validation"


@pytest.mark.unit
def test_start_of_day_drops_time() -> None:
    assert start_of_day("2024-03-10T18:45:00") == datetime(2024, 3, 10)


@pytest.mark.unit
def test_add_days_crosses_month_end() -> None:
    assert add_days(date(2024, 2, 28), 2) == date(2024, 3, 1)


@pytest.mark.unit
def test_utc_now_is_timezone_aware() -> None:
    now = utc_now()

    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)
