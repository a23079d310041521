"""
Shared fixtures: an in-memory SQLite database and a FastAPI client wired to it.

Environment variables are set before anything from ``cabin_admin`` is
imported, since ``cabin_admin.config`` reads them at import time.
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["DB_SCHEMA"] = ""
os.environ.setdefault("ALLOWED_ORIGINS", "*")

import uuid  # noqa: E402
from datetime import date, datetime, timezone  # noqa: E402
from typing import Any, Callable, Generator, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi import Query  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, insert  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cabin_admin.cache import session_cache  # noqa: E402
from cabin_admin.dependencies import get_db_engine, get_session_context  # noqa: E402
from cabin_admin.main import app  # noqa: E402
from cabin_admin.models.base import Base  # noqa: E402
from cabin_admin.models.cabins import Cabin  # noqa: E402
from cabin_admin.models.messages import Message  # noqa: E402
from cabin_admin.models.payments import Payment  # noqa: E402
from cabin_admin.models.reservations import Reservation  # noqa: E402
from cabin_admin.services.identity import SessionContext  # noqa: E402

STAFF_USER_ID = "staff-user-1"


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with every booking table created."""
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def cabins(test_engine: Engine) -> dict[str, uuid.UUID]:
    """Two cabins, returned as name -> id."""
    ids = {"Coihue": uuid.uuid4(), "Lenga": uuid.uuid4()}
    with test_engine.begin() as conn:
        for name, cabin_id in ids.items():
            conn.execute(
                insert(Cabin).values(
                    id=cabin_id, name=name, created_at=datetime.now(timezone.utc)
                )
            )
    return ids


@pytest.fixture
def make_reservation(test_engine: Engine) -> Callable[..., uuid.UUID]:
    """Factory inserting a reservation row directly, bypassing the services."""

    def _make(
        cabin_id: uuid.UUID,
        check_in: date,
        check_out: date,
        status: str = "confirmed",
        amount: Optional[float] = None,
        guest_name: str = "Ana Pérez",
        **extra: Any,
    ) -> uuid.UUID:
        reservation_id = uuid.uuid4()
        now = datetime.now(timezone.utc)
        with test_engine.begin() as conn:
            conn.execute(
                insert(Reservation).values(
                    id=reservation_id,
                    cabana_id=cabin_id,
                    guest_name=guest_name,
                    guests_count=extra.pop("guests_count", 2),
                    check_in=check_in,
                    check_out=check_out,
                    status=status,
                    amount=amount,
                    created_at=now,
                    updated_at=now,
                    **extra,
                )
            )
        return reservation_id

    return _make


@pytest.fixture
def make_payment(test_engine: Engine) -> Callable[..., uuid.UUID]:
    def _make(
        reservation_id: uuid.UUID,
        amount: float,
        status: str = "confirmed",
        created_at: Optional[datetime] = None,
    ) -> uuid.UUID:
        payment_id = uuid.uuid4()
        with test_engine.begin() as conn:
            conn.execute(
                insert(Payment).values(
                    id=payment_id,
                    reserva_id=reservation_id,
                    amount=amount,
                    currency="CLP",
                    payment_type="partial",
                    method="transfer",
                    status=status,
                    created_at=created_at or datetime.now(timezone.utc),
                )
            )
        return payment_id

    return _make


@pytest.fixture
def make_message(test_engine: Engine) -> Callable[..., uuid.UUID]:
    def _make(
        guest_name: str = "Pedro Soto",
        is_read: bool = False,
        archived: bool = False,
        created_at: Optional[datetime] = None,
        message: str = "¿Tienen disponibilidad para el fin de semana?",
        **extra: Any,
    ) -> uuid.UUID:
        message_id = uuid.uuid4()
        with test_engine.begin() as conn:
            conn.execute(
                insert(Message).values(
                    id=message_id,
                    guest_name=guest_name,
                    message=message,
                    is_read=is_read,
                    archived=archived,
                    created_at=created_at or datetime.now(timezone.utc),
                    **extra,
                )
            )
        return message_id

    return _make


@pytest.fixture
def staff_session() -> SessionContext:
    return SessionContext.for_user(STAFF_USER_ID)


@pytest.fixture(autouse=True)
def clear_session_cache() -> Generator[None, None, None]:
    session_cache.clear()
    yield
    session_cache.clear()


def _staff_session(locale: Optional[str] = Query(None)) -> SessionContext:
    return SessionContext.for_user(STAFF_USER_ID, locale=locale or "es")


@pytest.fixture
def client(test_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client on the in-memory database, signed in as staff."""
    app.dependency_overrides[get_db_engine] = lambda: test_engine
    app.dependency_overrides[get_session_context] = _staff_session

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(test_engine: Engine) -> Generator[TestClient, None, None]:
    """Client on the in-memory database with no session override."""
    app.dependency_overrides[get_db_engine] = lambda: test_engine

    yield TestClient(app)

    app.dependency_overrides.clear()
