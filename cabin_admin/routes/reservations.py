from datetime import date
from typing import Any, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from cabin_admin.db.readers.reservations import list_reservations
from cabin_admin.dependencies import get_db_engine, get_session_context, require_staff
from cabin_admin.routes._action_helpers import action_response
from cabin_admin.schemas.reservations import ReservationStatus
from cabin_admin.services.identity import SessionContext
from cabin_admin.services.reservations import (
    cancel_reservation,
    change_reservation_status,
    create_reservation,
    update_reservation,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/reservations", dependencies=[Depends(require_staff)])
def list_reservations_endpoint(
    cabin_id: Optional[UUID] = Query(None, description="Only this cabin"),
    include_cancelled: bool = Query(True, description="Include cancelled reservations"),
    status_filter: Optional[ReservationStatus] = Query(
        None, alias="status", description="Only this status"
    ),
    date_from: Optional[date] = Query(None, description="Check-in on or after this day"),
    date_to: Optional[date] = Query(None, description="Check-out by the end of this day"),
    search: Optional[str] = Query(None, description="Guest name, phone or e-mail"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    """
    List reservations ordered by check-in, with cabin names.

    All given filters must match.

    Returns:
        list: Reservation rows
    """
    try:
        with engine.connect() as conn:
            return list_reservations(
                conn,
                cabin_id=cabin_id,
                include_cancelled=include_cancelled,
                status=status_filter,
                date_from=date_from,
                date_to=date_to,
                search=search,
            )
    except Exception as e:
        logger.exception("reservation_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/reservations")
def create_reservation_endpoint(
    payload: dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    """
    Create a reservation.

    Responds 201 with the new id, 409 when the cabin is already booked for
    those dates, 422 for invalid input and 401 without a valid session.
    """
    result = create_reservation(engine, session, payload)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/reservations/{reservation_id}")
def update_reservation_endpoint(
    reservation_id: str,
    payload: dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    """Replace the editable fields of a reservation (its own dates never conflict)."""
    result = update_reservation(engine, session, {**payload, "id": reservation_id})
    return action_response(result)


@router.patch("/reservations/{reservation_id}/status")
def change_reservation_status_endpoint(
    reservation_id: str,
    payload: dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    result = change_reservation_status(engine, session, reservation_id, payload)
    return action_response(result)


@router.post("/reservations/{reservation_id}/cancel")
def cancel_reservation_endpoint(
    reservation_id: str,
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    """Cancel a reservation (soft delete)."""
    result = cancel_reservation(engine, session, reservation_id)
    return action_response(result)
