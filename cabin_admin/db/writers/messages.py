from uuid import UUID

from sqlalchemy import update
from sqlalchemy.engine import Connection

from cabin_admin.metrics import db_operations
from cabin_admin.models.messages import Message


def update_message_flags(conn: Connection, message_id: UUID, is_read: bool, archived: bool) -> int:
    """
    Set the read/archived flags of a guest message.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        message_id (UUID): Message to update.
        is_read (bool): New read flag.
        archived (bool): New archived flag.

    Returns:
        int: Number of rows updated.
    """
    result = conn.execute(
        update(Message)
        .where(Message.id == message_id)
        .values(is_read=is_read, archived=archived)
    )
    db_operations.labels(operation="update", table="mensajes").inc()
    return result.rowcount


def mark_message_read(conn: Connection, message_id: UUID) -> int:
    result = conn.execute(update(Message).where(Message.id == message_id).values(is_read=True))
    db_operations.labels(operation="update", table="mensajes").inc()
    return result.rowcount
