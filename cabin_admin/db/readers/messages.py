from typing import Any, Literal, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.engine import Connection

from cabin_admin.models.messages import Message

MessageFilter = Literal["all", "unread", "archived"]


def list_messages(
    conn: Connection,
    box: MessageFilter = "all",
    search: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    List guest messages, newest first.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        box (MessageFilter): ``all``, ``unread`` (unread and not archived)
            or ``archived``.
        search (Optional[str]): Case-insensitive match on guest name, e-mail,
            phone or message text.

    Returns:
        list[dict[str, Any]]: Message rows.
    """
    stmt = select(Message.__table__).order_by(Message.created_at.desc())
    if box == "unread":
        stmt = stmt.where(Message.is_read.is_(False), Message.archived.is_(False))
    elif box == "archived":
        stmt = stmt.where(Message.archived.is_(True))
    if search and search.strip():
        term = search.strip().lower()
        stmt = stmt.where(
            or_(
                *(
                    func.lower(func.coalesce(column, "")).contains(term, autoescape=True)
                    for column in (
                        Message.guest_name,
                        Message.guest_email,
                        Message.guest_phone,
                        Message.message,
                    )
                )
            )
        )
    return [dict(row) for row in conn.execute(stmt).mappings()]


def list_unread_messages(conn: Connection) -> list[dict[str, Any]]:
    """List unread, non-archived messages, newest first."""
    return list_messages(conn, box="unread")


def count_unread_messages(conn: Connection) -> int:
    result = conn.execute(
        select(func.count()).select_from(Message).where(Message.is_read.is_(False))
    )
    return int(result.scalar_one())
