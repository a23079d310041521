import uuid
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from cabin_admin.config import DEBUG
from cabin_admin.metrics import db_operations
from cabin_admin.models.reservations import Reservation
from cabin_admin.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

# Columns staff may set on create or edit; everything else is system-managed
EDITABLE_COLUMNS = (
    "cabana_id",
    "guest_name",
    "guest_phone",
    "guest_email",
    "guests_count",
    "check_in",
    "check_out",
    "status",
    "amount",
    "notes",
)


def _editable(data: dict[str, Any]) -> dict[str, Any]:
    return {column: data[column] for column in EDITABLE_COLUMNS if column in data}


def insert_reservation(conn: Connection, data: dict[str, Any], created_by: str) -> UUID:
    """
    Insert a new reservation.

    The caller is responsible for the availability check, ideally on the same
    connection right before this call.

    Args:
        conn (Connection): SQLAlchemy DB connection (within transaction).
        data (dict[str, Any]): Validated reservation fields.
        created_by (str): Identity provider id of the staff member.

    Returns:
        UUID: Id of the new reservation.
    """
    reservation_id = uuid.uuid4()
    now = utc_now()
    row = {
        **_editable(data),
        "id": reservation_id,
        "created_by": created_by,
        "created_at": now,
        "updated_at": now,
    }

    if DEBUG:
        logger.debug("reservation_insert_row", row={k: str(v) for k, v in row.items()})

    conn.execute(insert(Reservation).values(**row))
    db_operations.labels(operation="insert", table="reservas").inc()
    return reservation_id


def update_reservation(conn: Connection, reservation_id: UUID, data: dict[str, Any]) -> int:
    """
    Overwrite the editable fields of an existing reservation.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (UUID): Reservation to update.
        data (dict[str, Any]): Validated reservation fields.

    Returns:
        int: Number of rows updated (0 if the reservation does not exist).
    """
    values = _editable(data)
    values["updated_at"] = utc_now()

    result = conn.execute(
        update(Reservation).where(Reservation.id == reservation_id).values(**values)
    )
    db_operations.labels(operation="update", table="reservas").inc()
    return result.rowcount


def update_reservation_status(conn: Connection, reservation_id: UUID, status: str) -> int:
    """
    Move a reservation to a new status (``cancelled`` is the soft delete).

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (UUID): Reservation to update.
        status (str): New status.

    Returns:
        int: Number of rows updated.
    """
    result = conn.execute(
        update(Reservation)
        .where(Reservation.id == reservation_id)
        .values(status=status, updated_at=utc_now())
    )
    db_operations.labels(operation="update", table="reservas").inc()
    return result.rowcount
