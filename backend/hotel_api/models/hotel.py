"""Hotel, room type, and room models."""

from __future__ import annotations

import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_api.db.base import Base
from hotel_api.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from hotel_api.models.booking import Booking


class RoomStatus(str, enum.Enum):
    """Housekeeping state of a room."""

    VACANT = "vacant"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"


class Hotel(TimestampMixin, Base):
    """A property whose nightly base rate drives every stay total."""

    __tablename__ = "hotels"
    __table_args__ = (
        CheckConstraint("base_price_per_night >= 0", name="ck_hotel_rate_nonneg"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_hotel_rating_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(Text)
    rating: Mapped[Decimal] = mapped_column(
        Numeric(2, 1), default=Decimal("0.0"), nullable=False
    )
    base_price_per_night: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False
    )

    rooms: Mapped[list["Room"]] = relationship(
        "Room", back_populates="hotel", cascade="all, delete-orphan"
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="hotel"
    )


class RoomType(TimestampMixin, Base):
    """Room category with a multiplier applied to the hotel base rate."""

    __tablename__ = "room_types"
    __table_args__ = (
        CheckConstraint("max_capacity >= 1", name="ck_room_type_capacity"),
        CheckConstraint("price_multiplier > 0", name="ck_room_type_multiplier"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(4, 2), default=Decimal("1.00"), nullable=False
    )

    rooms: Mapped[list["Room"]] = relationship("Room", back_populates="room_type")


class Room(TimestampMixin, Base):
    """A bookable room within a hotel."""

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_room_hotel_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False
    )
    room_type_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("room_types.id", ondelete="RESTRICT"), nullable=False
    )
    room_number: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus), default=RoomStatus.VACANT, nullable=False
    )

    hotel: Mapped[Hotel] = relationship("Hotel", back_populates="rooms")
    room_type: Mapped[RoomType] = relationship("RoomType", back_populates="rooms")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="room")
