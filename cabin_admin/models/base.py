from sqlalchemy.orm import DeclarativeBase

from cabin_admin.config import SCHEMA


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All booking tables inherit from this base so they share one metadata
    object, used by Alembic autogenerate and by the test fixtures.
    """

    pass


def qualified(target: str) -> str:
    """Prefix a ``table.column`` foreign key target with the configured schema."""
    return f"{SCHEMA}.{target}" if SCHEMA else target
