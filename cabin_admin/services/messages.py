"""Guest message actions: mark read, archive, list."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog
from sqlalchemy.engine import Engine

from cabin_admin.db.readers.messages import MessageFilter, list_messages
from cabin_admin.db.writers.messages import mark_message_read as write_message_read
from cabin_admin.db.writers.messages import update_message_flags
from cabin_admin.errors import NotFoundError
from cabin_admin.schemas._parsing import parse_payload
from cabin_admin.schemas.messages import MessageFlagsPayload
from cabin_admin.schemas.payments import RecordIdPayload
from cabin_admin.schemas.results import ActionResult
from cabin_admin.services._actions import action
from cabin_admin.services.identity import SessionContext

logger = structlog.get_logger(__name__)

MESSAGE_NOT_FOUND_MESSAGE = "Mensaje no encontrado"


@action("mark_message_read", "No pudimos actualizar el mensaje")
def mark_message_read(engine: Engine, session: SessionContext, message_id: Any) -> ActionResult:
    target = parse_payload(RecordIdPayload, {"id": message_id})
    session.require_user_id()

    with engine.begin() as conn:
        if not write_message_read(conn, target.id):
            raise NotFoundError(MESSAGE_NOT_FOUND_MESSAGE)

    logger.info("message_marked_read", message_id=str(target.id))
    return ActionResult.success(target.id)


@action("archive_message", "No pudimos archivar el mensaje")
def archive_message(
    engine: Engine,
    session: SessionContext,
    message_id: Any,
    raw: Optional[Mapping[str, Any]] = None,
) -> ActionResult:
    """
    Archive a message. Unless told otherwise it is also marked read.

    Args:
        engine: SQLAlchemy engine
        session: Request-scoped session
        message_id: Message to archive
        raw: Optional ``is_read`` / ``archived`` overrides (both default to True)
    """
    payload = parse_payload(MessageFlagsPayload, {**(raw or {}), "id": message_id})
    session.require_user_id()

    is_read = True if payload.is_read is None else payload.is_read
    archived = True if payload.archived is None else payload.archived

    with engine.begin() as conn:
        if not update_message_flags(conn, payload.id, is_read=is_read, archived=archived):
            raise NotFoundError(MESSAGE_NOT_FOUND_MESSAGE)

    logger.info("message_archived", message_id=str(payload.id), is_read=is_read, archived=archived)
    return ActionResult.success(payload.id)


def inbox(
    engine: Engine, box: MessageFilter = "all", search: Optional[str] = None
) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_messages(conn, box=box, search=search)
