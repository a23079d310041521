"""Dashboard figures for the admin landing page."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Engine

from cabin_admin.config import RECENT_PAYMENTS_DAYS
from cabin_admin.db.readers.cabins import count_cabins
from cabin_admin.db.readers.messages import count_unread_messages
from cabin_admin.db.readers.payments import sum_payments_since
from cabin_admin.db.readers.reservations import (
    count_reservations_with_status,
    list_occupied_cabin_ids,
)
from cabin_admin.utils.datetime import today as local_today
from cabin_admin.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

# Statuses that mean a guest is (or will be) sleeping in the cabin
OCCUPYING_STATUSES = ("confirmed", "checked_in")


def occupancy_rate(occupied_cabins: int, total_cabins: int) -> float:
    return occupied_cabins / total_cabins if total_cabins > 0 else 0.0


def dashboard_stats(
    engine: Engine,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Compute the four dashboard figures.

    Args:
        engine: SQLAlchemy engine
        today: Night used for occupancy (defaults to the local day)
        now: Reference instant for the recent-payments window (defaults to UTC now)

    Returns:
        dict: occupancy_rate (0..1), occupied_cabins, total_cabins,
        pending_reservations, recent_payments, unread_messages
    """
    reference_day = today or local_today()
    since = (now or utc_now()) - timedelta(days=RECENT_PAYMENTS_DAYS)

    with engine.connect() as conn:
        total_cabins = count_cabins(conn)
        occupied = list_occupied_cabin_ids(conn, reference_day, OCCUPYING_STATUSES)
        pending = count_reservations_with_status(conn, "pending")
        recent_payments = sum_payments_since(conn, since)
        unread = count_unread_messages(conn)

    stats = {
        "occupancy_rate": occupancy_rate(len(occupied), total_cabins),
        "occupied_cabins": len(occupied),
        "total_cabins": total_cabins,
        "pending_reservations": pending,
        "recent_payments": recent_payments,
        "unread_messages": unread,
    }
    logger.debug("dashboard_stats_computed", **stats)
    return stats
