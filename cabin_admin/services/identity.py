"""
Identity collaborator: resolves the staff member behind a request.

Authentication itself (login, refresh) lives in the external identity
provider. This module only asks it who owns a bearer token, the same way
``supabase.auth.getUser()`` does, and carries the answer through a
request-scoped ``SessionContext`` instead of global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urljoin

import requests
import structlog

from cabin_admin.cache import session_cache
from cabin_admin.config import AUTH_API_KEY, AUTH_URL, DEFAULT_LOCALE, SUPPORTED_LOCALES
from cabin_admin.errors import AuthorizationError

logger = structlog.get_logger(__name__)

USER_ENDPOINT = "auth/v1/user"
INVALID_SESSION_MESSAGE = "Sesión inválida"
REQUEST_TIMEOUT_SECONDS = 5


def fetch_user_id(access_token: Optional[str]) -> str:
    """
    Ask the identity provider which user owns ``access_token``.

    Args:
        access_token: Bearer token from the Authorization header

    Returns:
        str: The provider's user id

    Raises:
        AuthorizationError: If the token is missing, rejected or the
            provider cannot be reached
    """
    if not access_token:
        raise AuthorizationError(INVALID_SESSION_MESSAGE)

    cached = session_cache.get(access_token)
    if cached:
        return cached

    url = urljoin(AUTH_URL, USER_ENDPOINT)
    headers = {"Authorization": f"Bearer {access_token}", "apikey": AUTH_API_KEY}

    try:
        res = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as err:
        logger.warning("identity_provider_unreachable", error=str(err))
        raise AuthorizationError(INVALID_SESSION_MESSAGE) from err

    if res.status_code != 200:
        logger.info("session_rejected", status_code=res.status_code)
        raise AuthorizationError(INVALID_SESSION_MESSAGE)

    try:
        user_id = res.json().get("id")
    except ValueError as err:
        logger.warning("identity_provider_bad_payload", error=str(err))
        raise AuthorizationError(INVALID_SESSION_MESSAGE) from err

    if not isinstance(user_id, str) or not user_id:
        logger.warning("identity_provider_missing_user_id")
        raise AuthorizationError(INVALID_SESSION_MESSAGE)

    session_cache.set(access_token, user_id)
    return user_id


def normalize_locale(locale: Optional[str]) -> str:
    if locale and locale.lower()[:2] in SUPPORTED_LOCALES:
        return locale.lower()[:2]
    return DEFAULT_LOCALE


@dataclass
class SessionContext:
    """
    Request-scoped state handed to every action service.

    The user id is resolved lazily so that input validation always runs, and
    can fail, before the identity provider is contacted.

    Example:
        >>> session = SessionContext.for_user("user-1", locale="en")
        >>> session.require_user_id()
        'user-1'
    """

    access_token: Optional[str] = None
    locale: str = DEFAULT_LOCALE
    _user_id: Optional[str] = field(default=None, repr=False)

    @classmethod
    def for_user(cls, user_id: str, locale: str = DEFAULT_LOCALE) -> "SessionContext":
        return cls(locale=normalize_locale(locale), _user_id=user_id)

    def require_user_id(self) -> str:
        """
        Return the authenticated user id.

        Raises:
            AuthorizationError: If there is no valid session
        """
        if self._user_id is None:
            self._user_id = fetch_user_id(self.access_token)
        return self._user_id
