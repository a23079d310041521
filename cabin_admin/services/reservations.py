"""
Reservation write actions.

Each action runs the same sequence:

1. Parse and validate the raw input (no backend call on failure)
2. Require an authenticated staff member
3. Re-check availability against a fresh query, inside the transaction
   that performs the write
4. Write

The check in step 3 repeats the in-memory preview on purpose: the page's
snapshot may be stale. A concurrent request can still slip in between the
query and the write; for a single-property booking tool that race is
accepted and left to staff to correct.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

import structlog
from sqlalchemy.engine import Connection, Engine

from cabin_admin.core.availability import CANCELLED
from cabin_admin.db.readers.cabins import cabin_exists
from cabin_admin.db.readers.reservations import (
    find_conflicting_reservation_ids,
    get_reservation,
)
from cabin_admin.db.writers.reservations import (
    insert_reservation,
    update_reservation_status,
)
from cabin_admin.db.writers.reservations import update_reservation as write_reservation_update
from cabin_admin.errors import ConflictError, NotFoundError
from cabin_admin.metrics import availability_conflicts
from cabin_admin.schemas._parsing import parse_payload
from cabin_admin.schemas.payments import RecordIdPayload
from cabin_admin.schemas.reservations import (
    ReservationPayload,
    ReservationStatusPayload,
    ReservationUpdatePayload,
)
from cabin_admin.schemas.results import ActionResult
from cabin_admin.services._actions import action
from cabin_admin.services.identity import SessionContext

logger = structlog.get_logger(__name__)

CONFLICT_MESSAGES = {
    "es": "Esa cabaña ya tiene reservas en esas fechas.",
    "en": "This cabin already has a reservation for those dates.",
}
CABIN_NOT_FOUND_MESSAGE = "Cabaña no encontrada"
RESERVATION_NOT_FOUND_MESSAGE = "Reserva no encontrada"


def conflict_message(locale: str) -> str:
    return CONFLICT_MESSAGES.get(locale, CONFLICT_MESSAGES["es"])


def ensure_available(
    conn: Connection,
    cabin_id: UUID,
    check_in: Any,
    check_out: Any,
    locale: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    """
    Authoritative availability gate run right before a write.

    Raises:
        ConflictError: If an active reservation of the cabin overlaps the stay
    """
    conflicts = find_conflicting_reservation_ids(
        conn, cabin_id, check_in, check_out, exclude_id=exclude_id
    )
    if conflicts:
        availability_conflicts.labels(source="authoritative").inc()
        logger.info(
            "reservation_conflict",
            cabin_id=str(cabin_id),
            check_in=str(check_in),
            check_out=str(check_out),
            conflicting_ids=[str(conflict) for conflict in conflicts],
        )
        raise ConflictError(
            conflict_message(locale),
            details={"conflicting_ids": [str(conflict) for conflict in conflicts]},
        )


@action("create_reservation", "Error al crear la reserva")
def create_reservation(
    engine: Engine, session: SessionContext, raw: Optional[Mapping[str, Any]]
) -> ActionResult:
    """
    Create a reservation after validating it and checking availability.

    Args:
        engine: SQLAlchemy engine
        session: Request-scoped session (identity + locale)
        raw: Untrusted form input

    Returns:
        ActionResult: ok with the new reservation id, or the failure kind/message
    """
    payload = parse_payload(ReservationPayload, raw)
    user_id = session.require_user_id()

    with engine.begin() as conn:
        if not cabin_exists(conn, payload.cabana_id):
            raise NotFoundError(CABIN_NOT_FOUND_MESSAGE)
        ensure_available(
            conn, payload.cabana_id, payload.check_in, payload.check_out, session.locale
        )
        reservation_id = insert_reservation(conn, payload.to_row(), created_by=user_id)

    logger.info(
        "reservation_created",
        reservation_id=str(reservation_id),
        cabin_id=str(payload.cabana_id),
        check_in=payload.check_in.isoformat(),
        check_out=payload.check_out.isoformat(),
        status=payload.status,
    )
    return ActionResult.success(reservation_id)


@action("update_reservation", "Error al actualizar la reserva")
def update_reservation(
    engine: Engine, session: SessionContext, raw: Optional[Mapping[str, Any]]
) -> ActionResult:
    """
    Edit a reservation; the availability check ignores the reservation itself.

    A reservation edited into the ``cancelled`` status skips the check, since
    it no longer occupies the cabin.
    """
    payload = parse_payload(ReservationUpdatePayload, raw)
    user_id = session.require_user_id()

    with engine.begin() as conn:
        if not cabin_exists(conn, payload.cabana_id):
            raise NotFoundError(CABIN_NOT_FOUND_MESSAGE)
        if payload.status != CANCELLED:
            ensure_available(
                conn,
                payload.cabana_id,
                payload.check_in,
                payload.check_out,
                session.locale,
                exclude_id=payload.id,
            )
        updated = write_reservation_update(conn, payload.id, payload.to_row())
        if not updated:
            raise NotFoundError(RESERVATION_NOT_FOUND_MESSAGE)

    logger.info(
        "reservation_updated",
        reservation_id=str(payload.id),
        cabin_id=str(payload.cabana_id),
        status=payload.status,
        updated_by=user_id,
    )
    return ActionResult.success(payload.id)


@action("change_reservation_status", "Error al actualizar la reserva")
def change_reservation_status(
    engine: Engine,
    session: SessionContext,
    reservation_id: Any,
    raw: Optional[Mapping[str, Any]],
) -> ActionResult:
    """
    Move a reservation to another status.

    Leaving ``cancelled`` puts the stay back on the calendar, so that
    transition is re-checked for conflicts like an edit.
    """
    target = parse_payload(RecordIdPayload, {"id": reservation_id})
    payload = parse_payload(ReservationStatusPayload, raw)
    user_id = session.require_user_id()

    with engine.begin() as conn:
        current = get_reservation(conn, target.id)
        if current is None:
            raise NotFoundError(RESERVATION_NOT_FOUND_MESSAGE)
        if current["status"] == CANCELLED and payload.status != CANCELLED:
            ensure_available(
                conn,
                current["cabana_id"],
                current["check_in"],
                current["check_out"],
                session.locale,
                exclude_id=target.id,
            )
        update_reservation_status(conn, target.id, payload.status)

    logger.info(
        "reservation_status_changed",
        reservation_id=str(target.id),
        previous_status=current["status"],
        status=payload.status,
        updated_by=user_id,
    )
    return ActionResult.success(target.id)


@action("cancel_reservation", "Error al cancelar la reserva")
def cancel_reservation(engine: Engine, session: SessionContext, reservation_id: Any) -> ActionResult:
    """
    Soft-remove a reservation by moving it to ``cancelled``.

    Cancelled reservations stay in the table for history but no longer
    block their dates.
    """
    target = parse_payload(RecordIdPayload, {"id": reservation_id})
    user_id = session.require_user_id()

    with engine.begin() as conn:
        if not update_reservation_status(conn, target.id, CANCELLED):
            raise NotFoundError(RESERVATION_NOT_FOUND_MESSAGE)

    logger.info("reservation_cancelled", reservation_id=str(target.id), cancelled_by=user_id)
    return ActionResult.success(target.id)
