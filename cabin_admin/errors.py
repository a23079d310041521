"""
Error kinds raised by the booking core and action services.

Services never let these escape to the HTTP layer: each one is converted into
a failed ``ActionResult`` carrying ``kind`` and a user-facing ``message``.
"""

from __future__ import annotations

from typing import Any, Optional


class CabinAdminError(Exception):
    """Base class for all expected failures of a back-office action."""

    kind = "error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(CabinAdminError):
    """Malformed input: bad date, end before start, negative amount, missing field."""

    kind = "validation"


class ConflictError(CabinAdminError):
    """The requested stay overlaps an active reservation of the same cabin."""

    kind = "conflict"


class AuthorizationError(CabinAdminError):
    """No valid authenticated session at write time."""

    kind = "authorization"


class NotFoundError(CabinAdminError):
    """The targeted reservation, payment, message or cabin does not exist."""

    kind = "not_found"


class BackendError(CabinAdminError):
    """The database or another backing service failed."""

    kind = "backend"
