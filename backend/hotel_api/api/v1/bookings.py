"""Stay booking endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.api import deps
from hotel_api.models.booking import BookingStatus
from hotel_api.models.user import User
from hotel_api.schemas.booking import BookingCreate, BookingRead
from hotel_api.security.permissions import STAFF_ROLES, require_roles
from hotel_api.services import booking_service, catalog_service

router = APIRouter(prefix="/bookings")


@router.get("", response_model=list[BookingRead], summary="List bookings")
async def list_bookings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
    hotel_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
) -> list[BookingRead]:
    bookings = await booking_service.list_bookings(
        session, user=current_user, hotel_id=hotel_id, skip=skip, limit=limit
    )
    return [BookingRead.model_validate(booking) for booking in bookings]


@router.post(
    "",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book a room",
)
async def create_booking(
    payload: BookingCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingRead:
    if await catalog_service.get_hotel(session, hotel_id=payload.hotel_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Hotel not found"
        )
    try:
        booking = await booking_service.create_booking(
            session,
            user=current_user,
            hotel_id=payload.hotel_id,
            room_number=payload.room_number,
            check_in_date=payload.check_in_date,
            check_out_date=payload.check_out_date,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Booking conflict"
        ) from exc
    return BookingRead.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking")
async def get_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingRead:
    booking = await booking_service.get_booking(session, booking_id=booking_id)
    if booking is None or (
        not current_user.is_staff and booking.user_id != current_user.id
    ):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found"
        )
    return BookingRead.model_validate(booking)


async def _transition(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    current_user: User,
    target: BookingStatus,
) -> BookingRead:
    booking = await booking_service.get_booking(session, booking_id=booking_id)
    if booking is None or (
        not current_user.is_staff and booking.user_id != current_user.id
    ):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found"
        )
    try:
        updated = await booking_service.transition_booking(
            session, booking=booking, status=target
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return BookingRead.model_validate(updated)


@router.post(
    "/{booking_id}/check-in", response_model=BookingRead, summary="Check a guest in"
)
async def check_in(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingRead:
    require_roles(current_user, STAFF_ROLES)
    return await _transition(
        session,
        booking_id=booking_id,
        current_user=current_user,
        target=BookingStatus.CHECKED_IN,
    )


@router.post(
    "/{booking_id}/check-out", response_model=BookingRead, summary="Check a guest out"
)
async def check_out(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingRead:
    require_roles(current_user, STAFF_ROLES)
    return await _transition(
        session,
        booking_id=booking_id,
        current_user=current_user,
        target=BookingStatus.CHECKED_OUT,
    )


@router.post(
    "/{booking_id}/cancel", response_model=BookingRead, summary="Cancel a booking"
)
async def cancel_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingRead:
    return await _transition(
        session,
        booking_id=booking_id,
        current_user=current_user,
        target=BookingStatus.CANCELLED,
    )
