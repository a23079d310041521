from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from cabin_admin.config import DEFAULT_CURRENCY
from cabin_admin.schemas._parsing import blank_to_none

PaymentMethod = Literal["transfer", "cash", "debit", "credit"]


class PaymentPayload(BaseModel):
    """
    Schema for recording a payment against a reservation.
    """

    reserva_id: UUID = Field(..., description="Reservation being paid")
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Amount paid")
    currency: str = Field(DEFAULT_CURRENCY, min_length=1, description="ISO currency code")
    payment_type: Literal["partial", "full"] = Field("partial")
    method: PaymentMethod = Field("transfer")
    reference: Optional[str] = Field(None, description="Bank or voucher reference")
    notes: Optional[str] = Field(None)
    status: Literal["pending", "confirmed", "failed"] = Field("confirmed")

    @field_validator("reference", "notes", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return blank_to_none(value)


class RecordIdPayload(BaseModel):
    """Schema for actions that only target a record by id."""

    id: UUID
