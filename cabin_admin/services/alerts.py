"""
Alerts view: what needs staff attention in the next few days.

- Guests arriving within the alert window
- Guests leaving within the alert window
- Reservations that still owe money
- Unread, non-archived guest messages
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.engine import Engine

from cabin_admin.config import ALERT_WINDOW_DAYS
from cabin_admin.core.availability import is_active
from cabin_admin.core.balance import compute_balance, has_pending_balance
from cabin_admin.db.readers.messages import list_unread_messages
from cabin_admin.db.readers.payments import group_payments_by_reservation
from cabin_admin.db.readers.reservations import list_reservations
from cabin_admin.utils.datetime import add_days, to_local_date
from cabin_admin.utils.datetime import today as local_today


def _within(day: Any, start: date, end: date) -> bool:
    return start <= to_local_date(day) <= end


def classify_alerts(
    reservations: Iterable[Mapping[str, Any]],
    today: date,
    window_days: int = ALERT_WINDOW_DAYS,
) -> dict[str, list[dict[str, Any]]]:
    """
    Split reservations into the alert sections.

    Args:
        reservations: Rows with status, check_in, check_out, amount and a
            ``payments`` list
        today: Reference day (window start, inclusive)
        window_days: Days ahead to look (window end, inclusive)

    Returns:
        dict with ``checkins``, ``checkouts`` and ``pending_balances`` lists;
        every row gains ``total_booking``, ``total_paid`` and ``balance``
    """
    window_end = add_days(today, window_days)
    sections: dict[str, list[dict[str, Any]]] = {
        "checkins": [],
        "checkouts": [],
        "pending_balances": [],
    }

    for reservation in reservations:
        if not is_active(reservation.get("status")):
            continue
        balance = compute_balance(reservation.get("amount"), reservation.get("payments", []))
        row = {
            **reservation,
            "total_booking": balance.total_booking,
            "total_paid": balance.total_paid,
            "balance": balance.balance,
        }
        if _within(reservation["check_in"], today, window_end):
            sections["checkins"].append(row)
        if _within(reservation["check_out"], today, window_end):
            sections["checkouts"].append(row)
        if has_pending_balance(balance.balance, reservation.get("status")):
            sections["pending_balances"].append(row)

    return sections


def build_alerts(
    engine: Engine,
    today: Optional[date] = None,
    window_days: int = ALERT_WINDOW_DAYS,
) -> dict[str, Any]:
    """Load reservations, payments and unread messages and build the alerts view."""
    reference_day = today or local_today()

    with engine.connect() as conn:
        reservations = list_reservations(conn)
        payments = group_payments_by_reservation(conn)
        unread = list_unread_messages(conn)

    enriched = [
        {**reservation, "payments": payments.get(reservation["id"], [])}
        for reservation in reservations
    ]
    alerts: dict[str, Any] = classify_alerts(enriched, reference_day, window_days)
    alerts["unread_messages"] = unread
    alerts["today"] = reference_day
    alerts["window_days"] = window_days
    return alerts
