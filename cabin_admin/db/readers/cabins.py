from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from cabin_admin.models.cabins import Cabin


def cabin_exists(conn: Connection, cabin_id: UUID) -> bool:
    """
    Check if a cabin exists.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        cabin_id (UUID): Cabin id to check.

    Returns:
        bool: True if the cabin exists, False otherwise.
    """
    return conn.execute(select(Cabin.id).where(Cabin.id == cabin_id)).fetchone() is not None


def list_cabins(conn: Connection) -> list[dict[str, Any]]:
    result = conn.execute(select(Cabin.id, Cabin.name).order_by(Cabin.name))
    return [dict(row) for row in result.mappings()]


def count_cabins(conn: Connection) -> int:
    return int(conn.execute(select(func.count()).select_from(Cabin)).scalar_one())
