"""SQLAlchemy model for rentable cabins."""

import uuid

from sqlalchemy import Column, DateTime, String, Uuid

from cabin_admin.config import SCHEMA
from cabin_admin.models.base import Base
from cabin_admin.utils.datetime import utc_now


class Cabin(Base):
    """
    ORM model for cabins (``cabanas``).

    Reference data for the back office: reservations point at a cabin and
    the availability check is always scoped to one cabin.
    """

    __tablename__ = "cabanas"
    __table_args__ = {"schema": SCHEMA}

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
