from typing import Any, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from cabin_admin.dependencies import get_db_engine, get_session_context, require_staff
from cabin_admin.routes._action_helpers import action_response
from cabin_admin.services.identity import SessionContext
from cabin_admin.services.payments import (
    create_payment,
    delete_payment,
    payments_summary,
    reservation_payments,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/payments", dependencies=[Depends(require_staff)])
def payments_summary_endpoint(
    search: Optional[str] = Query(None, description="Filter by guest or cabin"),
    confirmed_only: bool = Query(False, description="Only count confirmed payments"),
    engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    """
    Reservations with their payments, total paid and remaining balance.
    """
    try:
        return payments_summary(engine, search=search, confirmed_only=confirmed_only)
    except Exception as e:
        logger.exception("payments_summary_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/reservations/{reservation_id}/payments", dependencies=[Depends(require_staff)])
def reservation_payments_endpoint(
    reservation_id: UUID,
    confirmed_only: bool = Query(False, description="Only count confirmed payments"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Payments of one reservation with its total paid and remaining balance.

    Raises:
        HTTPException: 404 if the reservation does not exist
    """
    try:
        summary = reservation_payments(engine, reservation_id, confirmed_only=confirmed_only)
    except Exception as e:
        logger.exception(
            "reservation_payments_failed", reservation_id=str(reservation_id), error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    if summary is None:
        raise HTTPException(status_code=404, detail="Reserva no encontrada")
    return summary


@router.post("/payments")
def create_payment_endpoint(
    payload: dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    result = create_payment(engine, session, payload)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.delete("/payments/{payment_id}")
def delete_payment_endpoint(
    payment_id: str,
    session: SessionContext = Depends(get_session_context),
    engine: Engine = Depends(get_db_engine),
) -> JSONResponse:
    result = delete_payment(engine, session, payment_id)
    return action_response(result)
