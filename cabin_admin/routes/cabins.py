from typing import Any, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Engine

from cabin_admin.db.readers.cabins import list_cabins
from cabin_admin.dependencies import get_db_engine, require_staff
from cabin_admin.errors import ValidationError
from cabin_admin.services.availability import preview_availability

logger = structlog.get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_staff)])


@router.get("/cabins")
def list_cabins_endpoint(engine: Engine = Depends(get_db_engine)) -> list[dict[str, Any]]:
    try:
        with engine.connect() as conn:
            return list_cabins(conn)
    except Exception as e:
        logger.exception("cabin_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/cabins/{cabin_id}/availability")
def availability_endpoint(
    cabin_id: UUID,
    check_in: str = Query(..., description="Candidate check-in (YYYY-MM-DD)"),
    check_out: str = Query(..., description="Candidate check-out (YYYY-MM-DD)"),
    exclude_id: Optional[UUID] = Query(None, description="Reservation being edited"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Preview whether a cabin is free for ``[check_in, check_out)``.

    Advisory only: create and update re-check inside their transaction.

    Raises:
        HTTPException: 422 for malformed dates or an empty range
    """
    try:
        return preview_availability(engine, cabin_id, check_in, check_out, exclude_id=exclude_id)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except Exception as e:
        logger.exception("availability_preview_failed", cabin_id=str(cabin_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
