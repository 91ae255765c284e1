from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from agentbook.schemas.common import RequestModel, as_date, as_money


class BookingRequest(RequestModel):
    """Body of ``POST /bookings``. The booking agent comes from the session."""

    property_id: int = Field(..., gt=0)
    client_name: str = Field(..., min_length=1, max_length=160)
    client_email: EmailStr
    client_phone: Optional[str] = Field(None, max_length=32)
    check_in: date
    check_out: date
    total_amount: Decimal = Field(..., gt=0)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def normalize_dates(cls, value):
        return as_date(value)

    @field_validator("total_amount")
    @classmethod
    def round_amount(cls, value):
        return as_money(value)

    @model_validator(mode="after")
    def check_dates_ordered(self):
        if self.check_in >= self.check_out:
            raise ValueError("Check-in must be before check-out.")
        return self


class BookingListQuery(RequestModel):
    status: Optional[str] = None
    property_id: Optional[int] = None
