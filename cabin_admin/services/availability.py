"""
Availability preview for the reservation form.

The form asks while staff pick dates. The answer comes from the same pure
check the UI would run on its own snapshot, fed with the cabin's current
reservations. Writes still go through ``services.reservations``, which
re-checks against the database.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

import structlog
from sqlalchemy.engine import Engine

from cabin_admin.core.availability import StayRange, build_cabin_blocks, find_conflicts
from cabin_admin.db.readers.reservations import list_reservations
from cabin_admin.metrics import availability_conflicts

logger = structlog.get_logger(__name__)


def preview_availability(
    engine: Engine,
    cabin_id: UUID,
    check_in: Any,
    check_out: Any,
    exclude_id: Optional[UUID] = None,
) -> dict[str, Any]:
    """
    Check a candidate stay against the cabin's active reservations.

    Args:
        engine: SQLAlchemy engine
        cabin_id: Cabin being booked
        check_in: Candidate check-in
        check_out: Candidate check-out (exclusive)
        exclude_id: Reservation being edited

    Returns:
        dict: ``available`` flag, the normalized range, conflicting
        reservations (id, check_in, check_out) and ``blocked``, every active
        stay of the cabin except the edited one, sorted by check-in, for the
        date picker

    Raises:
        ValidationError: If the range is malformed
    """
    stay = StayRange.from_values(check_in, check_out)

    with engine.connect() as conn:
        snapshot = list_reservations(conn, cabin_id=cabin_id, include_cancelled=False)

    conflicts = find_conflicts(snapshot, cabin_id, stay.start, stay.end, exclude_id=exclude_id)
    excluded = str(exclude_id) if exclude_id is not None else None
    blocked = [
        block
        for block in build_cabin_blocks(snapshot).get(str(cabin_id), [])
        if block.id != excluded
    ]
    if conflicts:
        availability_conflicts.labels(source="preview").inc()

    return {
        "available": not conflicts,
        "check_in": stay.start,
        "check_out": stay.end,
        "nights": stay.nights,
        "conflicts": [
            {
                "id": block.id,
                "check_in": block.stay.start,
                "check_out": block.stay.end,
            }
            for block in conflicts
        ],
        "blocked": [
            {"id": block.id, "check_in": block.stay.start, "check_out": block.stay.end}
            for block in blocked
        ],
    }
