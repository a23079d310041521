from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from cabin_admin.db.readers.messages import MessageFilter
from cabin_admin.dependencies import get_db_engine, get_session_context, require_staff
from cabin_admin.routes._action_helpers import action_response
from cabin_admin.services.identity import SessionContext
from cabin_admin.services.messages import archive_message, inbox, mark_message_read

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/messages", dependencies=[Depends(require_staff)])
def list_messages_endpoint(
    box: MessageFilter = Query("all", alias="filter", description="all, unread or archived"),
    search: Optional[str] = Query(None, description="Guest name, e-mail, phone or text"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    try:
        return inbox(engine, box=box, search=search)
    except Exception as e:
        logger.exception("message_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/messages/{message_id}/read")
def mark_message_read_endpoint(
    message_id: str,
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    return action_response(mark_message_read(engine, session, message_id))


@router.post("/messages/{message_id}/archive")
def archive_message_endpoint(
    message_id: str,
    payload: Optional[dict[str, Any]] = Body(None),
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    """Archive a message; ``is_read`` and ``archived`` may be overridden in the body."""
    return action_response(archive_message(engine, session, message_id, payload))
