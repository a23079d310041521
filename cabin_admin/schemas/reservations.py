from __future__ import annotations

from datetime import date
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from cabin_admin.errors import ValidationError
from cabin_admin.schemas._parsing import blank_to_none
from cabin_admin.utils.datetime import to_local_date

ReservationStatus = Literal["pending", "confirmed", "checked_in", "checked_out", "cancelled"]


class ReservationPayload(BaseModel):
    """
    Schema for creating a reservation from the back-office form.

    Blank optional fields are normalized the way the form sends them:
    an empty guest count means 1 guest, an empty status means ``pending``,
    an empty amount means "not quoted yet".
    """

    cabana_id: UUID = Field(..., description="Cabin being booked")
    guest_name: str = Field(..., min_length=1, description="Guest full name")
    guest_phone: Optional[str] = Field(None, description="Guest phone")
    guest_email: Optional[EmailStr] = Field(None, description="Guest e-mail")
    guests_count: int = Field(1, gt=0, description="Number of guests")
    check_in: date = Field(..., description="First night")
    check_out: date = Field(..., description="Departure day (not occupied)")
    status: ReservationStatus = Field("pending", description="Reservation status")
    amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Quoted amount")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("guest_phone", "guest_email", "notes", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("guests_count", mode="before")
    @classmethod
    def _default_guests(cls, value: Any) -> Any:
        return 1 if value is None or value == "" else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or "pending"

    @field_validator("amount", mode="before")
    @classmethod
    def _blank_amount(cls, value: Any) -> Any:
        return None if value is None or value == "" else value

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> date:
        if value is None or value == "":
            raise ValueError("Fecha obligatoria")
        try:
            return to_local_date(value)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc

    @model_validator(mode="after")
    def _check_out_after_check_in(self) -> "ReservationPayload":
        if self.check_out <= self.check_in:
            raise ValueError("La fecha de salida debe ser posterior al check-in")
        return self

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id"})


class ReservationUpdatePayload(ReservationPayload):
    """Schema for editing an existing reservation. Same rules plus its id."""

    id: UUID = Field(..., description="Reservation being edited")


class ReservationStatusPayload(BaseModel):
    status: ReservationStatus
