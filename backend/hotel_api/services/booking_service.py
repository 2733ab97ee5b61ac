"""Stay booking service helpers."""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_api.models import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
    Hotel,
    Room,
    RoomStatus,
    User,
)
from hotel_api.services.totals import stay_grand_total


def _base_booking_query():
    return select(Booking).order_by(Booking.booked_at.desc())


async def list_bookings(
    session: AsyncSession,
    *,
    user: User,
    hotel_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Booking]:
    stmt = _base_booking_query()
    if not user.is_staff:
        stmt = stmt.where(Booking.user_id == user.id)
    if hotel_id is not None:
        stmt = stmt.where(Booking.hotel_id == hotel_id)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def get_booking(
    session: AsyncSession, *, booking_id: uuid.UUID
) -> Booking | None:
    result = await session.execute(
        _base_booking_query().where(Booking.id == booking_id)
    )
    return result.scalar_one_or_none()


def count_nights(check_in_date: date, check_out_date: date) -> int:
    nights = (check_out_date - check_in_date).days
    if nights < 1:
        raise ValueError("Check-out date must be after check-in date")
    return nights


def _overlapping_bookings(room_ids, check_in_date: date, check_out_date: date):
    """Active bookings of ``room_ids`` whose stay intersects the given dates."""
    return select(Booking.room_id).where(
        Booking.room_id.in_(room_ids),
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        Booking.check_in_date < check_out_date,
        Booking.check_out_date > check_in_date,
    )


async def find_available_rooms(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
    check_in_date: date,
    check_out_date: date,
    room_type_id: uuid.UUID | None = None,
) -> list[Room]:
    """Rooms of a hotel with no active booking overlapping the stay."""
    count_nights(check_in_date, check_out_date)
    stmt = (
        select(Room)
        .options(selectinload(Room.room_type))
        .where(Room.hotel_id == hotel_id)
        .order_by(Room.room_number)
    )
    if room_type_id is not None:
        stmt = stmt.where(Room.room_type_id == room_type_id)
    rooms = list((await session.execute(stmt)).scalars().all())
    if not rooms:
        return []
    taken = set(
        (
            await session.execute(
                _overlapping_bookings(
                    [room.id for room in rooms], check_in_date, check_out_date
                )
            )
        ).scalars()
    )
    return [room for room in rooms if room.id not in taken]


async def create_booking(
    session: AsyncSession,
    *,
    user: User,
    hotel_id: uuid.UUID,
    room_number: str,
    check_in_date: date,
    check_out_date: date,
) -> Booking:
    """Book a room that is free for the stay at the hotel's current nightly rate.

    The hotel row is locked while the total is priced so a concurrent room
    rate change either sees this booking or finishes before it is priced.
    The room row lock serializes two bookings of the same room.
    """
    nights = count_nights(check_in_date, check_out_date)

    hotel = (
        await session.execute(
            select(Hotel)
            .where(Hotel.id == hotel_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
    ).scalar_one_or_none()
    if hotel is None:
        await session.rollback()
        raise ValueError("Hotel not found")

    room = (
        await session.execute(
            select(Room)
            .options(selectinload(Room.room_type))
            .where(Room.hotel_id == hotel.id, Room.room_number == room_number)
            .with_for_update(of=Room)
        )
    ).scalar_one_or_none()
    if room is None:
        await session.rollback()
        raise ValueError("Room not available")
    clash = await session.scalar(
        _overlapping_bookings([room.id], check_in_date, check_out_date).limit(1)
    )
    if clash is not None:
        await session.rollback()
        raise ValueError("Room not available")

    booking = Booking(
        user_id=user.id,
        hotel_id=hotel.id,
        room_id=room.id,
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        total_nights=nights,
        grand_total=stay_grand_total(
            hotel.base_price_per_night, room.room_type.price_multiplier, nights
        ),
        status=BookingStatus.CONFIRMED,
    )
    session.add(booking)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(booking)
    return booking


_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.CONFIRMED: {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_IN: {BookingStatus.CHECKED_OUT},
    BookingStatus.CHECKED_OUT: set(),
    BookingStatus.CANCELLED: set(),
}

_ROOM_STATUS_FOR_BOOKING: dict[BookingStatus, RoomStatus] = {
    BookingStatus.CHECKED_IN: RoomStatus.OCCUPIED,
    BookingStatus.CHECKED_OUT: RoomStatus.VACANT,
}


async def transition_booking(
    session: AsyncSession, *, booking: Booking, status: BookingStatus
) -> Booking:
    """Move a booking along its lifecycle, keeping the room status in step."""
    if status not in _ALLOWED_STATUS_TRANSITIONS[booking.status]:
        raise ValueError(
            f"Invalid status transition from {booking.status.value} to {status.value}"
        )
    booking.status = status
    room_status = _ROOM_STATUS_FOR_BOOKING.get(status)
    if room_status is not None:
        room = await session.get(Room, booking.room_id)
        if room is None:
            raise LookupError("Room not found")
        room.status = room_status
    await session.commit()
    await session.refresh(booking)
    return booking
