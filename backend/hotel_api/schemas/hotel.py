"""Schemas for hotels, room types, and rooms."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hotel_api.models.hotel import RoomStatus


class HotelBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    location: str = Field(min_length=1, max_length=100)
    address: str | None = None
    rating: Decimal = Field(default=Decimal("0.0"), ge=0, le=5)


class HotelCreate(HotelBase):
    base_price_per_night: Decimal = Field(ge=0)


class HotelUpdate(BaseModel):
    """Descriptive hotel fields; the nightly rate changes through pricing."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    location: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = None
    rating: Decimal | None = Field(default=None, ge=0, le=5)


class HotelRead(HotelBase):
    id: uuid.UUID
    base_price_per_night: Decimal

    model_config = ConfigDict(from_attributes=True)


class RoomTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    max_capacity: int = Field(ge=1)
    price_multiplier: Decimal = Field(default=Decimal("1.00"), gt=0)


class RoomTypeRead(RoomTypeCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class RoomCreate(BaseModel):
    room_number: str = Field(min_length=1, max_length=10)
    room_type_id: uuid.UUID
    status: RoomStatus = RoomStatus.VACANT


class RoomRead(BaseModel):
    id: uuid.UUID
    hotel_id: uuid.UUID
    room_type_id: uuid.UUID
    room_number: str
    status: RoomStatus

    model_config = ConfigDict(from_attributes=True)


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class AvailabilityRequest(BaseModel):
    check_in_date: date
    check_out_date: date
    room_type_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "AvailabilityRequest":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("Check-out date must be after check-in date")
        return self


class AvailabilityRead(BaseModel):
    available: bool
    rooms: list[RoomRead]
