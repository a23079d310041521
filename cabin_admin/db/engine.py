"""
SQLAlchemy engine singleton with production-ready connection pooling.

The pool settings target the hosted Postgres backend. SQLite URLs (local
development, tests) get SQLAlchemy's default pool instead, since the
sizing options do not apply there.
"""

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from cabin_admin.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

_pool_options: dict[str, Any] = (
    {}
    if DATABASE_URL.startswith("sqlite")
    else {
        "pool_size": 5,  # Low-traffic back office
        "max_overflow": 10,
        "pool_pre_ping": True,  # Detect connections dropped by the hosted backend
        "pool_recycle": 1800,
    }
)

engine: Engine = create_engine(DATABASE_URL, echo=False, **_pool_options)


def check_engine_health(target: Engine = engine) -> bool:
    """
    Check if the database is reachable.

    Used by the /ready endpoint before the service receives traffic.

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with target.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
