"""
Integration tests for payment and message services on SQLite.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Callable

import pytest
from sqlalchemy import select
from sqlalchemy.engine import Engine

from cabin_admin.db.readers.payments import list_payments_for_reservation
from cabin_admin.models.messages import Message
from cabin_admin.models.payments import Payment
from cabin_admin.services.identity import SessionContext
from cabin_admin.services.messages import archive_message, inbox, mark_message_read
from cabin_admin.services.payments import create_payment, delete_payment, payments_summary


@pytest.fixture
def reservation_id(
    cabins: dict[str, uuid.UUID], make_reservation: Callable[..., uuid.UUID]
) -> uuid.UUID:
    return make_reservation(cabins["Coihue"], date(2024, 3, 10), date(2024, 3, 15), amount=100000)


@pytest.mark.integration
def test_payments_summary_computes_balance(
    test_engine: Engine,
    staff_session: SessionContext,
    reservation_id: uuid.UUID,
) -> None:
    assert create_payment(test_engine, staff_session, {"reserva_id": str(reservation_id), "amount": 30000}).ok
    assert create_payment(
        test_engine,
        staff_session,
        {"reserva_id": str(reservation_id), "amount": "20000", "method": "cash", "reference": ""},
    ).ok

    [row] = payments_summary(test_engine)

    assert row["id"] == reservation_id
    assert row["cabin_name"] == "Coihue"
    assert len(row["payments"]) == 2
    assert row["total_booking"] == 100000
    assert row["total_paid"] == 50000
    assert row["balance"] == 50000
    assert row["pending_balance"] is True


@pytest.mark.integration
def test_fully_paid_reservation_is_not_pending(
    test_engine: Engine,
    reservation_id: uuid.UUID,
    make_payment: Callable[..., uuid.UUID],
) -> None:
    make_payment(reservation_id, 100000)

    [row] = payments_summary(test_engine)

    assert row["balance"] == 0
    assert row["pending_balance"] is False


@pytest.mark.integration
def test_confirmed_only_ignores_failed_payments(
    test_engine: Engine,
    reservation_id: uuid.UUID,
    make_payment: Callable[..., uuid.UUID],
) -> None:
    make_payment(reservation_id, 40000)
    make_payment(reservation_id, 60000, status="failed")

    assert payments_summary(test_engine)[0]["balance"] == 0
    assert payments_summary(test_engine, confirmed_only=True)[0]["balance"] == 60000


@pytest.mark.integration
def test_payments_summary_search(
    test_engine: Engine,
    cabins: dict[str, uuid.UUID],
    make_reservation: Callable[..., uuid.UUID],
) -> None:
    make_reservation(cabins["Coihue"], date(2024, 3, 1), date(2024, 3, 3), guest_name="Ana Pérez")
    make_reservation(cabins["Lenga"], date(2024, 3, 5), date(2024, 3, 7), guest_name="Luis Mora")

    assert [row["guest_name"] for row in payments_summary(test_engine, search="ana")] == ["Ana Pérez"]
    assert [row["guest_name"] for row in payments_summary(test_engine, search="LENGA")] == ["Luis Mora"]
    assert len(payments_summary(test_engine, search="  ")) == 2


@pytest.mark.integration
def test_payment_for_missing_reservation(test_engine: Engine, staff_session: SessionContext) -> None:
    result = create_payment(test_engine, staff_session, {"reserva_id": str(uuid.uuid4()), "amount": 1000})

    assert result.kind == "not_found"


@pytest.mark.integration
def test_delete_payment(
    test_engine: Engine,
    staff_session: SessionContext,
    reservation_id: uuid.UUID,
    make_payment: Callable[..., uuid.UUID],
) -> None:
    payment_id = make_payment(reservation_id, 5000)

    assert delete_payment(test_engine, staff_session, str(payment_id)).ok
    with test_engine.connect() as conn:
        assert conn.execute(select(Payment.id)).fetchall() == []

    again = delete_payment(test_engine, staff_session, str(payment_id))
    assert again.kind == "not_found"
    assert again.error == "Pago no encontrado"


@pytest.mark.integration
def test_list_payments_for_reservation_oldest_first(
    test_engine: Engine,
    reservation_id: uuid.UUID,
    make_payment: Callable[..., uuid.UUID],
) -> None:
    base = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    later = make_payment(reservation_id, 20000, created_at=base + timedelta(days=2))
    earlier = make_payment(reservation_id, 30000, created_at=base)

    with test_engine.connect() as conn:
        rows = list_payments_for_reservation(conn, reservation_id)
        other = list_payments_for_reservation(conn, uuid.uuid4())

    assert [row["id"] for row in rows] == [earlier, later]
    assert other == []


@pytest.mark.integration
def test_mark_message_read(
    test_engine: Engine, staff_session: SessionContext, make_message: Callable[..., uuid.UUID]
) -> None:
    message_id = make_message()

    assert mark_message_read(test_engine, staff_session, str(message_id)).ok
    with test_engine.connect() as conn:
        is_read, archived = conn.execute(
            select(Message.is_read, Message.archived).where(Message.id == message_id)
        ).one()
    assert (is_read, archived) == (True, False)


@pytest.mark.integration
def test_archive_message_defaults_and_overrides(
    test_engine: Engine, staff_session: SessionContext, make_message: Callable[..., uuid.UUID]
) -> None:
    archived_id = make_message(guest_name="A")
    kept_unread_id = make_message(guest_name="B")

    assert archive_message(test_engine, staff_session, str(archived_id)).ok
    assert archive_message(test_engine, staff_session, str(kept_unread_id), {"is_read": False}).ok

    with test_engine.connect() as conn:
        flags = {
            row.guest_name: (row.is_read, row.archived)
            for row in conn.execute(select(Message.guest_name, Message.is_read, Message.archived))
        }
    assert flags == {"A": (True, True), "B": (False, True)}


@pytest.mark.integration
def test_message_actions_on_missing_message(test_engine: Engine, staff_session: SessionContext) -> None:
    missing = str(uuid.uuid4())

    assert mark_message_read(test_engine, staff_session, missing).kind == "not_found"
    assert archive_message(test_engine, staff_session, missing).kind == "not_found"


@pytest.mark.integration
def test_inbox_is_newest_first(test_engine: Engine, make_message: Callable[..., uuid.UUID]) -> None:
    now = datetime.now(timezone.utc)
    make_message(guest_name="old", created_at=now - timedelta(days=2))
    make_message(guest_name="new", created_at=now)
    make_message(guest_name="gone", created_at=now - timedelta(days=1), archived=True)

    assert [row["guest_name"] for row in inbox(test_engine)] == ["new", "gone", "old"]
    assert [row["guest_name"] for row in inbox(test_engine, box="archived")] == ["gone"]


@pytest.mark.integration
def test_inbox_unread_filter_skips_read_and_archived(
    test_engine: Engine, make_message: Callable[..., uuid.UUID]
) -> None:
    make_message(guest_name="nuevo")
    make_message(guest_name="leido", is_read=True)
    make_message(guest_name="archivado", archived=True)

    assert [row["guest_name"] for row in inbox(test_engine, box="unread")] == ["nuevo"]


@pytest.mark.integration
def test_inbox_search_matches_contact_fields_and_text(
    test_engine: Engine, make_message: Callable[..., uuid.UUID]
) -> None:
    make_message(guest_name="Marta Rojas", guest_email="marta@correo.cl")
    make_message(guest_name="Luis", guest_phone="+56 9 8765 4321", message="Consulta por tinaja")
    make_message(guest_name="Otro", archived=True, message="Pregunta sobre TINAJA caliente")

    assert [row["guest_name"] for row in inbox(test_engine, search="MARTA")] == ["Marta Rojas"]
    assert [row["guest_name"] for row in inbox(test_engine, search="8765")] == ["Luis"]
    assert {row["guest_name"] for row in inbox(test_engine, search=" tinaja ")} == {"Luis", "Otro"}
    assert [row["guest_name"] for row in inbox(test_engine, box="archived", search="tinaja")] == ["Otro"]
    assert inbox(test_engine, search="100%") == []
