import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Text, Uuid

from cabin_admin.config import SCHEMA
from cabin_admin.models.base import Base
from cabin_admin.utils.datetime import utc_now


class Message(Base):
    """
    ORM model for guest contact messages (``mensajes``).

    Messages arrive from the public contact form; staff mark them read or
    archive them. Unread, non-archived messages feed the alerts view.
    """

    __tablename__ = "mensajes"
    __table_args__ = {"schema": SCHEMA}

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    guest_name = Column(String, nullable=False)
    guest_email = Column(String, nullable=True)
    guest_phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    source = Column(String, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
