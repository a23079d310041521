"""
Reservation availability: half-open stay intervals and conflict detection.

A stay occupies the nights ``[check_in, check_out)``; the check-out day
itself is free, so a new guest may arrive the day the previous one leaves.
The same predicate backs the in-memory preview (``has_conflict`` over a
snapshot of reservations) and the authoritative SQL query in
``cabin_admin.db.readers.reservations.find_conflicting_reservation_ids``.

Example:
    >>> snapshot = [
    ...     {"id": "r1", "cabana_id": "c1", "check_in": "2024-03-10",
    ...      "check_out": "2024-03-15", "status": "confirmed"},
    ... ]
    >>> has_conflict(snapshot, "c1", "2024-03-15", "2024-03-18")
    False
    >>> has_conflict(snapshot, "c1", "2024-03-12", "2024-03-20")
    True
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from cabin_admin.errors import ValidationError
from cabin_admin.utils.datetime import DateLike, to_local_date

CANCELLED = "cancelled"


@dataclass(frozen=True)
class StayRange:
    """Half-open calendar-day interval ``[start, end)``."""

    start: date
    end: date

    @classmethod
    def from_values(cls, start: DateLike, end: DateLike) -> "StayRange":
        """
        Build a normalized range, rejecting empty or inverted ones.

        Raises:
            ValidationError: If either bound is not a date or end <= start
        """
        stay = cls(to_local_date(start), to_local_date(end))
        if stay.end <= stay.start:
            raise ValidationError(
                "La fecha de salida debe ser posterior al check-in",
                details={"check_in": stay.start.isoformat(), "check_out": stay.end.isoformat()},
            )
        return stay

    @property
    def nights(self) -> int:
        return (self.end - self.start).days


@dataclass(frozen=True)
class ReservationBlock:
    """An active reservation reduced to what the conflict check needs."""

    id: str
    cabin_id: str
    stay: StayRange


def overlaps(a: StayRange, b: StayRange) -> bool:
    """Return True if two half-open ranges share at least one night."""
    return a.start < b.end and b.start < a.end


def is_active(status: Optional[str]) -> bool:
    return status != CANCELLED


def _block_from_row(row: Mapping[str, Any]) -> ReservationBlock:
    # Stored rows already satisfy check_out > check_in, so no re-validation here
    return ReservationBlock(
        id=str(row["id"]),
        cabin_id=str(row["cabana_id"]),
        stay=StayRange(to_local_date(row["check_in"]), to_local_date(row["check_out"])),
    )


def build_cabin_blocks(
    reservations: Iterable[Mapping[str, Any]],
) -> dict[str, list[ReservationBlock]]:
    """
    Group active reservations by cabin, each list sorted by check-in.

    Args:
        reservations: Rows with id, cabana_id, check_in, check_out and status

    Returns:
        dict mapping cabin id (as str) to its active blocks
    """
    blocks: dict[str, list[ReservationBlock]] = defaultdict(list)
    for row in reservations:
        if not is_active(row.get("status")):
            continue
        block = _block_from_row(row)
        blocks[block.cabin_id].append(block)

    for cabin_blocks in blocks.values():
        cabin_blocks.sort(key=lambda block: (block.stay.start, block.stay.end))
    return dict(blocks)


def find_conflicts(
    reservations: Iterable[Mapping[str, Any]],
    cabin_id: Any,
    start: DateLike,
    end: DateLike,
    exclude_id: Optional[Any] = None,
) -> list[ReservationBlock]:
    """
    Return the active reservations of ``cabin_id`` that overlap ``[start, end)``.

    Args:
        reservations: Snapshot of reservation rows (any cabin, any status)
        cabin_id: Cabin the candidate stay belongs to
        start: Candidate check-in
        end: Candidate check-out
        exclude_id: Reservation being edited; never reported against itself

    Raises:
        ValidationError: If the candidate range is malformed
    """
    candidate = StayRange.from_values(start, end)
    excluded = str(exclude_id) if exclude_id is not None else None
    blocks = build_cabin_blocks(reservations).get(str(cabin_id), [])
    return [
        block
        for block in blocks
        if block.id != excluded and overlaps(candidate, block.stay)
    ]


def has_conflict(
    reservations: Iterable[Mapping[str, Any]],
    cabin_id: Any,
    start: DateLike,
    end: DateLike,
    exclude_id: Optional[Any] = None,
) -> bool:
    """Return True if the candidate stay collides with an active reservation."""
    return bool(find_conflicts(reservations, cabin_id, start, end, exclude_id=exclude_id))


def find_overlapping_pairs(
    reservations: Iterable[Mapping[str, Any]],
) -> list[tuple[ReservationBlock, ReservationBlock]]:
    """
    List every pair of active reservations on the same cabin that overlap.

    A healthy dataset returns an empty list. Used by the audit script.
    """
    pairs: list[tuple[ReservationBlock, ReservationBlock]] = []
    for cabin_blocks in build_cabin_blocks(reservations).values():
        for index, block in enumerate(cabin_blocks):
            for other in cabin_blocks[index + 1 :]:
                # Sorted by start: nothing later can overlap once other starts after block ends
                if other.stay.start >= block.stay.end:
                    break
                pairs.append((block, other))
    return pairs
