"""
Unit tests for core/availability.py conflict detection.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

import pytest

from cabin_admin.core.availability import (
    StayRange,
    build_cabin_blocks,
    find_conflicts,
    find_overlapping_pairs,
    has_conflict,
    overlaps,
)
from cabin_admin.errors import ValidationError


def _row(
    reservation_id: str,
    cabin_id: str,
    check_in: str,
    check_out: str,
    status: str = "confirmed",
) -> dict[str, Any]:
    return {
        "id": reservation_id,
        "cabana_id": cabin_id,
        "check_in": check_in,
        "check_out": check_out,
        "status": status,
    }


@pytest.fixture
def snapshot() -> list[dict[str, Any]]:
    return [_row("r1", "c1", "2024-03-10", "2024-03-15")]


@pytest.mark.unit
def test_back_to_back_stay_does_not_conflict(snapshot: list[dict[str, Any]]) -> None:
    """Arriving the day the previous guest leaves is allowed."""
    assert has_conflict(snapshot, "c1", "2024-03-15", "2024-03-18") is False


@pytest.mark.unit
def test_stay_ending_on_existing_check_in_does_not_conflict(
    snapshot: list[dict[str, Any]],
) -> None:
    assert has_conflict(snapshot, "c1", "2024-03-07", "2024-03-10") is False


@pytest.mark.unit
def test_partial_overlap_conflicts(snapshot: list[dict[str, Any]]) -> None:
    conflicts = find_conflicts(snapshot, "c1", "2024-03-12", "2024-03-20")

    assert [block.id for block in conflicts] == ["r1"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "check_in,check_out",
    [
        ("2024-03-11", "2024-03-12"),  # inside
        ("2024-03-01", "2024-03-30"),  # covering
        ("2024-03-10", "2024-03-15"),  # identical
        ("2024-03-14", "2024-03-16"),  # last night
    ],
)
def test_overlapping_ranges_conflict(
    snapshot: list[dict[str, Any]], check_in: str, check_out: str
) -> None:
    assert has_conflict(snapshot, "c1", check_in, check_out) is True


@pytest.mark.unit
def test_other_cabin_never_conflicts(snapshot: list[dict[str, Any]]) -> None:
    assert has_conflict(snapshot, "c2", "2024-03-12", "2024-03-20") is False


@pytest.mark.unit
def test_cancelled_reservations_do_not_block() -> None:
    rows = [_row("r1", "c1", "2024-03-10", "2024-03-15", status="cancelled")]

    assert has_conflict(rows, "c1", "2024-03-12", "2024-03-14") is False


@pytest.mark.unit
def test_edit_excludes_the_reservation_itself() -> None:
    """Shifting a reservation over its own dates is not a conflict."""
    rows = [_row("r1", "c2", "2024-04-01", "2024-04-05")]

    assert has_conflict(rows, "c2", "2024-04-03", "2024-04-07", exclude_id="r1") is False
    assert has_conflict(rows, "c2", "2024-04-03", "2024-04-07") is True


@pytest.mark.unit
def test_exclude_id_compares_as_string() -> None:
    reservation_id = uuid.uuid4()
    rows = [_row(reservation_id, "c2", "2024-04-01", "2024-04-05")]  # type: ignore[arg-type]

    assert has_conflict(rows, "c2", "2024-04-02", "2024-04-03", exclude_id=str(reservation_id)) is False


@pytest.mark.unit
def test_timestamps_collapse_to_calendar_day(snapshot: list[dict[str, Any]]) -> None:
    assert has_conflict(snapshot, "c1", "2024-03-15T09:00:00", "2024-03-18T11:00:00") is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "check_in,check_out",
    [("2024-03-15", "2024-03-15"), ("2024-03-18", "2024-03-15")],
)
def test_empty_or_inverted_range_is_rejected(
    snapshot: list[dict[str, Any]], check_in: str, check_out: str
) -> None:
    with pytest.raises(ValidationError):
        find_conflicts(snapshot, "c1", check_in, check_out)


@pytest.mark.unit
def test_unparseable_date_is_rejected(snapshot: list[dict[str, Any]]) -> None:
    with pytest.raises(ValidationError):
        find_conflicts(snapshot, "c1", "not-a-date", "2024-03-15")


@pytest.mark.unit
def test_overlaps_is_symmetric() -> None:
    ranges = [
        StayRange(date(2024, 1, 1), date(2024, 1, 5)),
        StayRange(date(2024, 1, 5), date(2024, 1, 8)),
        StayRange(date(2024, 1, 3), date(2024, 1, 4)),
        StayRange(date(2024, 1, 7), date(2024, 1, 20)),
    ]
    for a in ranges:
        for b in ranges:
            assert overlaps(a, b) == overlaps(b, a)


@pytest.mark.unit
def test_stay_range_counts_nights() -> None:
    stay = StayRange.from_values("2024-03-10", "2024-03-15")

    assert stay.nights == 5


@pytest.mark.unit
def test_build_cabin_blocks_groups_and_sorts_active_rows() -> None:
    rows = [
        _row("r2", "c1", "2024-05-10", "2024-05-12"),
        _row("r1", "c1", "2024-05-01", "2024-05-03"),
        _row("r3", "c2", "2024-05-01", "2024-05-03"),
        _row("r4", "c1", "2024-05-04", "2024-05-06", status="cancelled"),
    ]

    blocks = build_cabin_blocks(rows)

    assert [block.id for block in blocks["c1"]] == ["r1", "r2"]
    assert [block.id for block in blocks["c2"]] == ["r3"]


@pytest.mark.unit
def test_find_overlapping_pairs_reports_double_bookings() -> None:
    rows = [
        _row("r1", "c1", "2024-06-01", "2024-06-05"),
        _row("r2", "c1", "2024-06-04", "2024-06-08"),
        _row("r3", "c1", "2024-06-08", "2024-06-10"),
        _row("r4", "c2", "2024-06-01", "2024-06-05"),
    ]

    pairs = find_overlapping_pairs(rows)

    assert [(a.id, b.id) for a, b in pairs] == [("r1", "r2")]


@pytest.mark.unit
def test_find_overlapping_pairs_is_empty_for_consistent_data() -> None:
    rows = [
        _row("r1", "c1", "2024-06-01", "2024-06-05"),
        _row("r2", "c1", "2024-06-05", "2024-06-08"),
    ]

    assert find_overlapping_pairs(rows) == []
