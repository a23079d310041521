import uuid
from typing import Any
from uuid import UUID

from sqlalchemy import delete, insert
from sqlalchemy.engine import Connection

from cabin_admin.metrics import db_operations
from cabin_admin.models.payments import Payment
from cabin_admin.utils.datetime import utc_now

PAYMENT_COLUMNS = (
    "reserva_id",
    "amount",
    "currency",
    "payment_type",
    "method",
    "reference",
    "notes",
    "status",
)


def insert_payment(conn: Connection, data: dict[str, Any], created_by: str) -> UUID:
    """
    Record a payment against a reservation.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        data (dict[str, Any]): Validated payment fields.
        created_by (str): Identity provider id of the staff member.

    Returns:
        UUID: Id of the new payment.
    """
    payment_id = uuid.uuid4()
    row = {column: data[column] for column in PAYMENT_COLUMNS if column in data}
    row.update(id=payment_id, created_by=created_by, created_at=utc_now())

    conn.execute(insert(Payment).values(**row))
    db_operations.labels(operation="insert", table="pagos").inc()
    return payment_id


def delete_payment(conn: Connection, payment_id: UUID) -> int:
    """
    Permanently delete a payment.

    Returns:
        int: Number of rows deleted.
    """
    result = conn.execute(delete(Payment).where(Payment.id == payment_id))
    db_operations.labels(operation="delete", table="pagos").inc()
    return result.rowcount
