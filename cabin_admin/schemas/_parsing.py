"""
Conversion of raw request dictionaries into validated payloads.

Pydantic failures become a single ``ValidationError`` so callers never see
pydantic types and validation always finishes before any backend call.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar

import pydantic

from cabin_admin.errors import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

INVALID_DATA_MESSAGE = "Datos inválidos"


def _field_errors(exc: pydantic.ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        ctx_error = error.get("ctx", {}).get("error")
        errors[field] = str(ctx_error) if ctx_error else error["msg"]
    return errors


def parse_payload(model: type[ModelT], raw: Optional[Mapping[str, Any]]) -> ModelT:
    """
    Validate ``raw`` against ``model``.

    Args:
        model: Pydantic payload class
        raw: Untrusted input (request body)

    Returns:
        The validated payload instance

    Raises:
        ValidationError: With per-field messages in ``details``
    """
    try:
        return model.model_validate(dict(raw or {}))
    except pydantic.ValidationError as exc:
        raise ValidationError(INVALID_DATA_MESSAGE, details=_field_errors(exc)) from exc


def blank_to_none(value: Any) -> Any:
    """Trim strings; empty or whitespace-only strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
