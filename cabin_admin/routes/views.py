"""
Read-only admin views: dashboard figures, alerts and the monthly calendar.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Engine

from cabin_admin.config import ALERT_WINDOW_DAYS
from cabin_admin.dependencies import get_db_engine, require_staff
from cabin_admin.errors import ValidationError
from cabin_admin.services.alerts import build_alerts
from cabin_admin.services.calendar import calendar_month
from cabin_admin.services.dashboard import dashboard_stats
from cabin_admin.utils.datetime import today as local_today

logger = structlog.get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_staff)])


@router.get("/dashboard")
def dashboard_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """
    Occupancy, pending reservations, last week's payments and unread messages.
    """
    try:
        return dashboard_stats(engine)
    except Exception as e:
        logger.exception("dashboard_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/alerts")
def alerts_endpoint(
    window_days: int = Query(ALERT_WINDOW_DAYS, ge=0, le=31),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Upcoming check-ins and check-outs, pending balances and unread messages.
    """
    try:
        return build_alerts(engine, window_days=window_days)
    except Exception as e:
        logger.exception("alerts_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/calendar")
def calendar_endpoint(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    cabin_id: Optional[UUID] = Query(None),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Six-week occupancy grid for a month (defaults to the current one).

    Raises:
        HTTPException: 422 for an invalid month
    """
    current: date = local_today()
    try:
        return calendar_month(
            engine,
            year if year is not None else current.year,
            month if month is not None else current.month,
            cabin_id=cabin_id,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except Exception as e:
        logger.exception("calendar_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
