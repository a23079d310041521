"""
Internal helpers shared by the write-action route handlers.
"""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse

from cabin_admin.errors import (
    AuthorizationError,
    BackendError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from cabin_admin.schemas.results import ActionResult

KIND_STATUS_CODES = {
    ValidationError.kind: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConflictError.kind: status.HTTP_409_CONFLICT,
    AuthorizationError.kind: status.HTTP_401_UNAUTHORIZED,
    NotFoundError.kind: status.HTTP_404_NOT_FOUND,
    BackendError.kind: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def action_response(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Render an ActionResult with the HTTP status matching its outcome.

    Args:
        result: Outcome returned by an action service
        success_status: Status code used when ``result.ok`` is True

    Returns:
        JSONResponse: The result body with 2xx on success, 4xx/5xx by failure kind
    """
    if result.ok:
        status_code = success_status
    else:
        status_code = KIND_STATUS_CODES.get(result.kind or "", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
