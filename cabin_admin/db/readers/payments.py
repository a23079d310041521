from collections import defaultdict
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from cabin_admin.models.payments import Payment


def list_payments_for_reservation(conn: Connection, reservation_id: UUID) -> list[dict[str, Any]]:
    """
    List the payments of one reservation, oldest first.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (UUID): Owning reservation.

    Returns:
        list[dict[str, Any]]: Payment rows.
    """
    result = conn.execute(
        select(Payment.__table__)
        .where(Payment.reserva_id == reservation_id)
        .order_by(Payment.created_at)
    )
    return [dict(row) for row in result.mappings()]


def group_payments_by_reservation(
    conn: Connection, reservation_ids: Optional[Iterable[UUID]] = None
) -> dict[UUID, list[dict[str, Any]]]:
    """
    Load payments in one query and group them by reservation id.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_ids (Optional[Iterable[UUID]]): Restrict to these reservations.

    Returns:
        dict[UUID, list[dict[str, Any]]]: Payments per reservation, oldest first.
    """
    stmt = select(Payment.__table__).order_by(Payment.created_at)
    if reservation_ids is not None:
        stmt = stmt.where(Payment.reserva_id.in_(list(reservation_ids)))

    grouped: dict[UUID, list[dict[str, Any]]] = defaultdict(list)
    for row in conn.execute(stmt).mappings():
        grouped[row["reserva_id"]].append(dict(row))
    return dict(grouped)


def sum_payments_since(conn: Connection, since: datetime) -> float:
    """Sum the amount of every payment recorded at or after ``since``."""
    result = conn.execute(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.created_at >= since)
    )
    return float(result.scalar_one())
