"""
In-memory session cache with TTL.

Resolving a bearer token to a user id costs a round trip to the identity
provider. Admin pages fire several requests in a row with the same token,
so resolved sessions are cached for a short TTL. Tokens are stored hashed.

For deployments with multiple instances each instance keeps its own cache.
"""

import hashlib
import threading
from datetime import datetime, timedelta

from cabin_admin.config import SESSION_CACHE_TTL_SECONDS
from cabin_admin.utils.datetime import utc_now


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionCache:
    """
    In-memory map of access token -> user id with time-to-live expiration.

    Attributes:
        ttl: Time-to-live for cached sessions
        _cache: Internal storage mapping token hash to (user_id, expires_at) tuples

    Example:
        >>> cache = SessionCache(ttl_seconds=60)
        >>> cache.set("token-abc", "user-1")
        >>> cache.get("token-abc")
        'user-1'
    """

    def __init__(self, ttl_seconds: int = 60):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._cache: dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> str | None:
        """
        Get the cached user id if the entry has not expired.

        Args:
            token: Bearer access token

        Returns:
            User id if found and not expired, None otherwise
        """
        key = _token_key(token)
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            user_id, expires_at = entry
            if utc_now() < expires_at:
                return user_id
            # Expired - remove from cache
            del self._cache[key]
        return None

    def set(self, token: str, user_id: str) -> None:
        """
        Cache a resolved session, dropping every expired entry first.

        Sweeping on write bounds the map to the sessions seen within one TTL.
        """
        now = utc_now()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._cache.items() if expires_at <= now]
            for key in expired:
                del self._cache[key]
            self._cache[_token_key(token)] = (user_id, now + self.ttl)

    def clear(self) -> None:
        """
        Clear all cached sessions.

        Useful for testing or after rotating the identity provider keys.
        """
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Number of entries held, expired ones included until the next sweep."""
        with self._lock:
            return len(self._cache)


session_cache = SessionCache(ttl_seconds=SESSION_CACHE_TTL_SECONDS)
