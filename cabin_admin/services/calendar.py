"""
Monthly occupancy calendar.

The grid always has 6 weeks of 7 days starting on a Monday, so every month
renders with the same shape. A cabin shows up on each night it is occupied;
the first night carries the check-in flag and the last night the check-out
flag (the departure day itself is free).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Mapping, Optional
from uuid import UUID

from sqlalchemy.engine import Engine

from cabin_admin.core.availability import is_active
from cabin_admin.db.readers.reservations import list_reservations
from cabin_admin.errors import ValidationError
from cabin_admin.utils.datetime import to_local_date

WEEKS_PER_GRID = 6
UNKNOWN_CABIN = "Sin cabaña"


@dataclass
class CabinNight:
    name: str
    checkin: bool = False
    checkout: bool = False


@dataclass
class DayStatus:
    occupied: bool = False
    cabins: list[CabinNight] = field(default_factory=list)

    def cabin(self, name: str) -> CabinNight:
        for night in self.cabins:
            if night.name == name:
                return night
        night = CabinNight(name=name)
        self.cabins.append(night)
        return night


def month_grid(year: int, month: int) -> list[list[date]]:
    """
    Return 6 Monday-first weeks covering the given month.

    Raises:
        ValidationError: If the month is out of range
    """
    try:
        first = date(year, month, 1)
    except ValueError as exc:
        raise ValidationError("Mes inválido", details={"year": year, "month": month}) from exc

    start = first - timedelta(days=first.weekday())
    return [
        [start + timedelta(days=week * 7 + weekday) for weekday in range(7)]
        for week in range(WEEKS_PER_GRID)
    ]


def day_statuses(reservations: Iterable[Mapping[str, Any]]) -> dict[date, DayStatus]:
    """
    Map each occupied night to the cabins occupying it.

    Args:
        reservations: Rows with status, check_in, check_out and cabin_name
    """
    statuses: dict[date, DayStatus] = {}
    for reservation in reservations:
        if not is_active(reservation.get("status")):
            continue
        check_in = to_local_date(reservation["check_in"])
        check_out = to_local_date(reservation["check_out"])
        name = reservation.get("cabin_name") or UNKNOWN_CABIN

        night = check_in
        while night < check_out:
            status = statuses.setdefault(night, DayStatus())
            status.occupied = True
            cabin = status.cabin(name)
            if night == check_in:
                cabin.checkin = True
            if night + timedelta(days=1) == check_out:
                cabin.checkout = True
            night += timedelta(days=1)
    return statuses


def calendar_month(
    engine: Engine, year: int, month: int, cabin_id: Optional[UUID] = None
) -> dict[str, Any]:
    """
    Build the calendar view for one month.

    Args:
        engine: SQLAlchemy engine
        year: Calendar year
        month: Calendar month (1-12)
        cabin_id: Only show this cabin's reservations

    Returns:
        dict with year, month and ``weeks``: 6 lists of 7 day cells
    """
    grid = month_grid(year, month)

    with engine.connect() as conn:
        reservations = list_reservations(conn, cabin_id=cabin_id, include_cancelled=False)

    statuses = day_statuses(reservations)
    weeks = []
    for week in grid:
        cells = []
        for day in week:
            status = statuses.get(day, DayStatus())
            cells.append(
                {
                    "date": day,
                    "in_month": day.month == month,
                    "occupied": status.occupied,
                    "cabins": [
                        {"name": night.name, "checkin": night.checkin, "checkout": night.checkout}
                        for night in status.cabins
                    ],
                }
            )
        weeks.append(cells)

    return {"year": year, "month": month, "weeks": weeks}
