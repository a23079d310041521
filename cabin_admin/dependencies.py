"""
FastAPI dependency injection providers.

Routes receive the database engine and the request-scoped session through
these providers. Tests override them with ``app.dependency_overrides`` to
inject an in-memory database and a fixed staff user.
"""

from __future__ import annotations

from typing import Generator, Optional

import structlog
from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.engine import Engine

from cabin_admin.db.engine import engine
from cabin_admin.errors import AuthorizationError
from cabin_admin.services.identity import SessionContext, normalize_locale

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> app.dependency_overrides[get_db_engine] = lambda: sqlite_engine
    """
    yield engine


def get_session_context(
    authorization: Optional[str] = Header(None),
    locale: Optional[str] = Query(None, description="Message language (es or en)"),
) -> SessionContext:
    """
    Build the request-scoped session from the Authorization header.

    The token is not verified here: write actions resolve it only after
    their input has been validated.
    """
    token = None
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip() or None
    return SessionContext(access_token=token, locale=normalize_locale(locale))


def require_staff(session: SessionContext = Depends(get_session_context)) -> str:
    """
    Resolve the staff user id for read-only admin endpoints.

    Raises:
        HTTPException: 401 if there is no valid session
    """
    try:
        return session.require_user_id()
    except AuthorizationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
