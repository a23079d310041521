from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from cabin_admin.errors import CabinAdminError


class ActionResult(BaseModel):
    """
    Outcome of a back-office write action.

    Failures carry the error ``kind`` (validation, conflict, authorization,
    not_found, backend) and a message meant to be shown to staff as-is.
    """

    ok: bool
    error: Optional[str] = None
    kind: Optional[str] = None
    id: Optional[str] = Field(None, description="Id of the created record, when any")
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def success(cls, record_id: Optional[Any] = None) -> "ActionResult":
        return cls(ok=True, id=str(record_id) if record_id is not None else None)

    @classmethod
    def failure(cls, exc: CabinAdminError) -> "ActionResult":
        return cls(ok=False, error=exc.message, kind=exc.kind, details=exc.details)
