"""Payment write actions and the per-reservation payments summary."""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

import structlog
from sqlalchemy.engine import Engine

from cabin_admin.core.balance import compute_balance, has_pending_balance
from cabin_admin.db.readers.payments import (
    group_payments_by_reservation,
    list_payments_for_reservation,
)
from cabin_admin.db.readers.reservations import get_reservation, list_reservations
from cabin_admin.db.writers.payments import delete_payment as write_payment_delete
from cabin_admin.db.writers.payments import insert_payment
from cabin_admin.errors import NotFoundError
from cabin_admin.schemas._parsing import parse_payload
from cabin_admin.schemas.payments import PaymentPayload, RecordIdPayload
from cabin_admin.schemas.results import ActionResult
from cabin_admin.services._actions import action
from cabin_admin.services.identity import SessionContext

logger = structlog.get_logger(__name__)


@action("create_payment", "Error al registrar el pago")
def create_payment(
    engine: Engine, session: SessionContext, raw: Optional[Mapping[str, Any]]
) -> ActionResult:
    """
    Record a payment for an existing reservation.

    Args:
        engine: SQLAlchemy engine
        session: Request-scoped session
        raw: Untrusted form input

    Returns:
        ActionResult: ok with the new payment id, or the failure kind/message
    """
    payload = parse_payload(PaymentPayload, raw)
    user_id = session.require_user_id()

    with engine.begin() as conn:
        if get_reservation(conn, payload.reserva_id) is None:
            raise NotFoundError("Reserva no encontrada")
        payment_id = insert_payment(conn, payload.model_dump(), created_by=user_id)

    logger.info(
        "payment_created",
        payment_id=str(payment_id),
        reservation_id=str(payload.reserva_id),
        amount=payload.amount,
        method=payload.method,
        status=payload.status,
    )
    return ActionResult.success(payment_id)


@action("delete_payment", "No pudimos eliminar el pago")
def delete_payment(engine: Engine, session: SessionContext, payment_id: Any) -> ActionResult:
    target = parse_payload(RecordIdPayload, {"id": payment_id})
    user_id = session.require_user_id()

    with engine.begin() as conn:
        if not write_payment_delete(conn, target.id):
            raise NotFoundError("Pago no encontrado")

    logger.info("payment_deleted", payment_id=str(target.id), deleted_by=user_id)
    return ActionResult.success(target.id)


def _matches(reservation: Mapping[str, Any], search: str) -> bool:
    haystack = " ".join(
        str(reservation.get(key) or "")
        for key in ("guest_name", "guest_email", "guest_phone", "cabin_name")
    )
    return search.lower() in haystack.lower()


def _with_balance(
    reservation: Mapping[str, Any],
    reservation_payments: list[dict[str, Any]],
    confirmed_only: bool,
) -> dict[str, Any]:
    balance = compute_balance(
        reservation["amount"], reservation_payments, confirmed_only=confirmed_only
    )
    return {
        **reservation,
        "payments": reservation_payments,
        "total_booking": balance.total_booking,
        "total_paid": balance.total_paid,
        "balance": balance.balance,
        "pending_balance": has_pending_balance(balance.balance, reservation["status"]),
    }


def payments_summary(
    engine: Engine,
    search: Optional[str] = None,
    confirmed_only: bool = False,
) -> list[dict[str, Any]]:
    """
    Build the payments screen: every reservation with its payments and balance.

    Args:
        engine: SQLAlchemy engine
        search: Case-insensitive filter on guest name, e-mail, phone or cabin name
        confirmed_only: Only count confirmed payments toward ``total_paid``

    Returns:
        list[dict]: Reservations ordered by check-in, each with ``payments``,
        ``total_booking``, ``total_paid``, ``balance`` and ``pending_balance``
    """
    with engine.connect() as conn:
        reservations = list_reservations(conn)
        payments = group_payments_by_reservation(conn)

    summary = [
        _with_balance(reservation, payments.get(reservation["id"], []), confirmed_only)
        for reservation in reservations
    ]

    if search and search.strip():
        summary = [row for row in summary if _matches(row, search.strip())]
    return summary


def reservation_payments(
    engine: Engine, reservation_id: UUID, confirmed_only: bool = False
) -> Optional[dict[str, Any]]:
    """
    One reservation with its payments (oldest first) and balance.

    Returns:
        Same shape as a ``payments_summary`` row, or None if the reservation
        does not exist
    """
    with engine.connect() as conn:
        reservation = get_reservation(conn, reservation_id)
        if reservation is None:
            return None
        payments = list_payments_for_reservation(conn, reservation_id)

    return _with_balance(reservation, payments, confirmed_only)
