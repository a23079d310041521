# models/reservations.py

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)

from cabin_admin.config import SCHEMA
from cabin_admin.models.base import Base, qualified
from cabin_admin.utils.datetime import utc_now

RESERVATION_STATUSES = ("pending", "confirmed", "checked_in", "checked_out", "cancelled")


class Reservation(Base):
    """
    ORM model for cabin reservations (``reservas``).

    A reservation occupies its cabin for the nights [check_in, check_out).
    Reservations are never deleted: cancelling one moves it to the
    ``cancelled`` status, which takes it out of the availability check.
    The quoted ``amount`` is nullable; balances are derived from ``pagos``.
    """

    __tablename__ = "reservas"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="reservas_check_out_after_check_in"),
        CheckConstraint("guests_count > 0", name="reservas_guests_count_positive"),
        {"schema": SCHEMA},
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cabana_id = Column(
        Uuid,
        ForeignKey(qualified("cabanas.id"), ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    guest_name = Column(String, nullable=False)
    guest_phone = Column(String, nullable=True)
    guest_email = Column(String, nullable=True)
    guests_count = Column(Integer, nullable=False, default=1)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="pending", index=True)
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    notes = Column(Text, nullable=True)
    created_by = Column(String, nullable=True)  # Identity provider user id
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
