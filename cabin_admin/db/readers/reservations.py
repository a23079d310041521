from datetime import date, timedelta
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.engine import Connection

from cabin_admin.core.availability import CANCELLED
from cabin_admin.models.cabins import Cabin
from cabin_admin.models.reservations import Reservation


def _contains_term(column: Any, term: str) -> Any:
    return func.lower(func.coalesce(column, "")).contains(term.lower(), autoescape=True)


def list_reservations(
    conn: Connection,
    cabin_id: Optional[UUID] = None,
    include_cancelled: bool = True,
    status: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    List reservations ordered by check-in, each with its cabin name.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        cabin_id (Optional[UUID]): Restrict to one cabin.
        include_cancelled (bool): If False, only active reservations are returned.
        status (Optional[str]): Only reservations in this status.
        date_from (Optional[date]): Only stays checking in on or after this day.
        date_to (Optional[date]): Only stays checking out by the end of this day
            (``check_out <= date_to + 1``).
        search (Optional[str]): Case-insensitive match on guest name, phone or e-mail.

    Returns:
        list[dict[str, Any]]: Reservation rows plus a ``cabin_name`` key.
    """
    stmt = (
        select(Reservation.__table__, Cabin.name.label("cabin_name"))
        .outerjoin(Cabin, Cabin.id == Reservation.cabana_id)
        .order_by(Reservation.check_in, Reservation.created_at)
    )
    if cabin_id is not None:
        stmt = stmt.where(Reservation.cabana_id == cabin_id)
    if not include_cancelled:
        stmt = stmt.where(Reservation.status != CANCELLED)
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    if date_from is not None:
        stmt = stmt.where(Reservation.check_in >= date_from)
    if date_to is not None:
        stmt = stmt.where(Reservation.check_out <= date_to + timedelta(days=1))
    if search and search.strip():
        term = search.strip()
        stmt = stmt.where(
            or_(
                _contains_term(Reservation.guest_name, term),
                _contains_term(Reservation.guest_phone, term),
                _contains_term(Reservation.guest_email, term),
            )
        )

    return [dict(row) for row in conn.execute(stmt).mappings()]


def get_reservation(conn: Connection, reservation_id: UUID) -> Optional[dict[str, Any]]:
    """
    Fetch one reservation by id.

    Returns:
        Optional[dict[str, Any]]: The reservation row or None if not found.
    """
    row = (
        conn.execute(select(Reservation.__table__).where(Reservation.id == reservation_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def find_conflicting_reservation_ids(
    conn: Connection,
    cabin_id: UUID,
    check_in: date,
    check_out: date,
    exclude_id: Optional[UUID] = None,
) -> list[UUID]:
    """
    Query active reservations of a cabin overlapping ``[check_in, check_out)``.

    This is the authoritative counterpart of
    ``cabin_admin.core.availability.find_conflicts``: an existing stay
    conflicts iff ``existing.check_out > check_in AND existing.check_in < check_out``.

    Args:
        conn (Connection): Connection of the transaction that will perform the write.
        cabin_id (UUID): Cabin of the candidate stay.
        check_in (date): Candidate check-in.
        check_out (date): Candidate check-out (exclusive).
        exclude_id (Optional[UUID]): Reservation being edited.

    Returns:
        list[UUID]: Ids of the conflicting reservations (empty when available).
    """
    stmt = select(Reservation.id).where(
        Reservation.cabana_id == cabin_id,
        Reservation.status != CANCELLED,
        Reservation.check_out > check_in,
        Reservation.check_in < check_out,
    )
    if exclude_id is not None:
        stmt = stmt.where(Reservation.id != exclude_id)

    return [row[0] for row in conn.execute(stmt)]


def count_reservations_with_status(conn: Connection, status: str) -> int:
    result = conn.execute(
        select(func.count()).select_from(Reservation).where(Reservation.status == status)
    )
    return int(result.scalar_one())


def list_occupied_cabin_ids(
    conn: Connection, day: date, statuses: Iterable[str]
) -> set[UUID]:
    """
    Return the cabins whose guests sleep there on the night of ``day``.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        day (date): Night to check.
        statuses (Iterable[str]): Reservation statuses that count as occupying.

    Returns:
        set[UUID]: Distinct cabin ids.
    """
    result = conn.execute(
        select(Reservation.cabana_id)
        .where(Reservation.status.in_(list(statuses)))
        .where(Reservation.check_in <= day)
        .where(Reservation.check_out > day)
        .distinct()
    )
    return {row[0] for row in result}
