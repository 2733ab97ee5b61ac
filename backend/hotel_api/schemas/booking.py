"""Pydantic schemas for stay bookings."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hotel_api.models.booking import BookingStatus


class BookingCreate(BaseModel):
    """Payload for booking a room."""

    hotel_id: uuid.UUID
    room_number: str = Field(min_length=1, max_length=10)
    check_in_date: date
    check_out_date: date

    @model_validator(mode="after")
    def _check_dates(self) -> "BookingCreate":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("Check-out date must be after check-in date")
        return self


class BookingRead(BaseModel):
    """Serialized booking."""

    id: uuid.UUID
    user_id: uuid.UUID
    hotel_id: uuid.UUID
    room_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    total_nights: int
    grand_total: Decimal
    status: BookingStatus
    booked_at: datetime

    model_config = ConfigDict(from_attributes=True)
