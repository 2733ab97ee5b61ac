"""Hotel, room type, and room endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.api import deps
from hotel_api.models.hotel import Hotel
from hotel_api.models.user import User
from hotel_api.schemas.hotel import (
    AvailabilityRead,
    AvailabilityRequest,
    HotelCreate,
    HotelRead,
    HotelUpdate,
    RoomCreate,
    RoomRead,
    RoomStatusUpdate,
    RoomTypeCreate,
    RoomTypeRead,
)
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.security.permissions import PRICING_ROLES, STAFF_ROLES, require_roles
from hotel_api.services import booking_service, catalog_service, price_cache

router = APIRouter()


async def _get_hotel_or_404(session: AsyncSession, hotel_id: uuid.UUID) -> Hotel:
    hotel = await catalog_service.get_hotel(session, hotel_id=hotel_id)
    if hotel is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Hotel not found"
        )
    return hotel


@router.get("/hotels", response_model=list[HotelRead], summary="List hotels")
async def list_hotels(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    location: str | None = Query(default=None),
) -> list[HotelRead]:
    hotels = await catalog_service.list_hotels(session, location=location)
    return [HotelRead.model_validate(hotel) for hotel in hotels]


@router.post(
    "/hotels",
    response_model=HotelRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create hotel",
)
async def create_hotel(
    payload: HotelCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> HotelRead:
    require_roles(current_user, PRICING_ROLES)
    try:
        hotel = await catalog_service.create_hotel(session, payload=payload)
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate hotel name"
        ) from exc
    return HotelRead.model_validate(hotel)


@router.get("/hotels/{hotel_id}", response_model=HotelRead, summary="Get hotel")
async def get_hotel(
    hotel_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelRead:
    hotel = await _get_hotel_or_404(session, hotel_id)
    return HotelRead.model_validate(hotel)


@router.patch("/hotels/{hotel_id}", response_model=HotelRead, summary="Update hotel")
async def update_hotel(
    hotel_id: uuid.UUID,
    payload: HotelUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> HotelRead:
    require_roles(current_user, PRICING_ROLES)
    hotel = await _get_hotel_or_404(session, hotel_id)
    try:
        updated = await catalog_service.update_hotel(
            session, hotel=hotel, payload=payload
        )
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate hotel name"
        ) from exc
    return HotelRead.model_validate(updated)


@router.delete(
    "/hotels/{hotel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete hotel",
)
async def delete_hotel(
    hotel_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> None:
    require_roles(current_user, PRICING_ROLES)
    hotel = await _get_hotel_or_404(session, hotel_id)
    try:
        await catalog_service.delete_hotel(session, hotel=hotel)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    price_cache.invalidate(PricedEntityKind.ROOM_RATE, hotel_id)
    return None


@router.get(
    "/hotels/{hotel_id}/rooms", response_model=list[RoomRead], summary="List rooms"
)
async def list_rooms(
    hotel_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[RoomRead]:
    await _get_hotel_or_404(session, hotel_id)
    rooms = await catalog_service.list_rooms(session, hotel_id=hotel_id)
    return [RoomRead.model_validate(room) for room in rooms]


@router.post(
    "/hotels/{hotel_id}/rooms",
    response_model=RoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add room",
)
async def create_room(
    hotel_id: uuid.UUID,
    payload: RoomCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> RoomRead:
    require_roles(current_user, PRICING_ROLES)
    hotel = await _get_hotel_or_404(session, hotel_id)
    try:
        room = await catalog_service.create_room(session, hotel=hotel, payload=payload)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate room number"
        ) from exc
    return RoomRead.model_validate(room)


@router.post(
    "/hotels/{hotel_id}/rooms/check-availability",
    response_model=AvailabilityRead,
    summary="Rooms free for a stay",
)
async def check_availability(
    hotel_id: uuid.UUID,
    payload: AvailabilityRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AvailabilityRead:
    await _get_hotel_or_404(session, hotel_id)
    rooms = await booking_service.find_available_rooms(
        session,
        hotel_id=hotel_id,
        check_in_date=payload.check_in_date,
        check_out_date=payload.check_out_date,
        room_type_id=payload.room_type_id,
    )
    return AvailabilityRead(
        available=bool(rooms),
        rooms=[RoomRead.model_validate(room) for room in rooms],
    )


@router.patch(
    "/hotels/{hotel_id}/rooms/{room_id}",
    response_model=RoomRead,
    summary="Set room housekeeping status",
)
async def update_room_status(
    hotel_id: uuid.UUID,
    room_id: uuid.UUID,
    payload: RoomStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> RoomRead:
    require_roles(current_user, STAFF_ROLES)
    room = await catalog_service.get_room(session, hotel_id=hotel_id, room_id=room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Room not found"
        )
    updated = await catalog_service.update_room_status(
        session, room=room, status=payload.status
    )
    return RoomRead.model_validate(updated)


@router.get(
    "/room-types", response_model=list[RoomTypeRead], summary="List room types"
)
async def list_room_types(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[RoomTypeRead]:
    room_types = await catalog_service.list_room_types(session)
    return [RoomTypeRead.model_validate(room_type) for room_type in room_types]


@router.post(
    "/room-types",
    response_model=RoomTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create room type",
)
async def create_room_type(
    payload: RoomTypeCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> RoomTypeRead:
    require_roles(current_user, PRICING_ROLES)
    try:
        room_type = await catalog_service.create_room_type(session, payload=payload)
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate room type"
        ) from exc
    return RoomTypeRead.model_validate(room_type)
