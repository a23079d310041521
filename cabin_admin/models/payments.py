import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, Uuid

from cabin_admin.config import DEFAULT_CURRENCY, SCHEMA
from cabin_admin.models.base import Base, qualified
from cabin_admin.utils.datetime import utc_now

PAYMENT_TYPES = ("partial", "full")
PAYMENT_METHODS = ("transfer", "cash", "debit", "credit")
PAYMENT_STATUSES = ("pending", "confirmed", "failed")


class Payment(Base):
    """
    ORM model for payments recorded against a reservation (``pagos``).

    Payments are append-only from the back office: they are created or
    deleted, never edited. Totals and balances are computed on read.
    """

    __tablename__ = "pagos"
    __table_args__ = {"schema": SCHEMA}

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reserva_id = Column(
        Uuid,
        ForeignKey(qualified("reservas.id"), ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    currency = Column(String, nullable=False, default=DEFAULT_CURRENCY)
    payment_type = Column(String, nullable=False, default="partial")
    method = Column(String, nullable=False, default="transfer")
    reference = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="confirmed")
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
