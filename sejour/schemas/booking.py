"""
Pydantic schemas for booking requests and responses.
"""

from pydantic import Field, model_validator
from datetime import date

from sejour.schemas.base import CamelModel


class BookingCreate(CamelModel):
    """Schema for booking a property. Property and guest come from the request context."""

    start_date: date = Field(..., examples=["2026-07-01"])

    end_date: date = Field(..., examples=["2026-07-05"])

    @model_validator(mode="after")
    def validate_date_range(self):
        """The stay must end after it starts."""
        if self.end_date <= self.start_date:
            raise ValueError("endDate must be after startDate")
        return self


class BookingResponse(CamelModel):
    id: int
    start_date: date
    end_date: date
    property_id: int
    guest_id: int


class BookingEnvelope(CamelModel):
    booking: BookingResponse
