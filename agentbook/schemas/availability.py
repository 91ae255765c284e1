from datetime import date
from typing import Optional

from pydantic import Field, field_validator, model_validator

from agentbook.schemas.common import RequestModel, as_date


class DateRange(RequestModel):
    """Inclusive day range, as used by the availability calendar."""

    start_date: date
    end_date: date

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, value):
        return as_date(value)

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date must not be after end date.")
        return self


class AvailabilityChange(DateRange):
    is_available: int = Field(0, ge=0, le=1)
    notes: Optional[str] = Field(None, max_length=500)
