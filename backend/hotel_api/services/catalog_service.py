"""Catalog store for hotels, rooms, and menu items.

Hotels and menu items are the two priced entities: a hotel's
``base_price_per_night`` is the room rate every stay booking is derived from,
and a menu item's ``price`` is the unit price of every order line. Price
changes go through :mod:`hotel_api.services.price_propagation_service`; the
helpers here only read and write the authoritative price column.
"""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.models import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    FoodOrder,
    Hotel,
    MenuCategory,
    MenuItem,
    OrderLine,
    Room,
    RoomStatus,
    RoomType,
)
from hotel_api.schemas.hotel import HotelCreate, HotelUpdate, RoomCreate, RoomTypeCreate
from hotel_api.schemas.menu import MenuItemCreate
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services.totals import to_money

PricedEntity = Hotel | MenuItem

_PRICE_COLUMNS: dict[PricedEntityKind, tuple[type[PricedEntity], str]] = {
    PricedEntityKind.MENU_ITEM: (MenuItem, "price"),
    PricedEntityKind.ROOM_RATE: (Hotel, "base_price_per_night"),
}


def entity_label(kind: PricedEntityKind) -> str:
    return "Menu item" if kind is PricedEntityKind.MENU_ITEM else "Hotel"


async def get_priced_entity(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    lock: bool = False,
) -> PricedEntity | None:
    """Load a priced entity, optionally holding a row lock until commit."""
    model, _ = _PRICE_COLUMNS[kind]
    stmt = select(model).where(model.id == entity_id)
    if lock:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


def current_price(kind: PricedEntityKind, entity: PricedEntity) -> Decimal:
    _, column = _PRICE_COLUMNS[kind]
    return to_money(getattr(entity, column))


async def set_price(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity: PricedEntity,
    price: Decimal,
) -> None:
    _, column = _PRICE_COLUMNS[kind]
    setattr(entity, column, price)
    await session.flush()


async def list_hotels(
    session: AsyncSession, *, location: str | None = None
) -> list[Hotel]:
    stmt: Select[tuple[Hotel]] = select(Hotel)
    if location:
        stmt = stmt.where(func.lower(Hotel.location) == location.lower())
    stmt = stmt.order_by(Hotel.name.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_hotel(session: AsyncSession, *, hotel_id: uuid.UUID) -> Hotel | None:
    return await session.get(Hotel, hotel_id)


async def create_hotel(session: AsyncSession, *, payload: HotelCreate) -> Hotel:
    hotel = Hotel(
        name=payload.name,
        location=payload.location,
        address=payload.address,
        rating=payload.rating,
        base_price_per_night=to_money(payload.base_price_per_night),
    )
    session.add(hotel)
    await session.commit()
    await session.refresh(hotel)
    return hotel


async def update_hotel(
    session: AsyncSession, *, hotel: Hotel, payload: HotelUpdate
) -> Hotel:
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(hotel, key, value)
    await session.commit()
    await session.refresh(hotel)
    return hotel


async def update_room_status(
    session: AsyncSession, *, room: Room, status: RoomStatus
) -> Room:
    room.status = status
    await session.commit()
    await session.refresh(room)
    return room


async def get_room(
    session: AsyncSession, *, hotel_id: uuid.UUID, room_id: uuid.UUID
) -> Room | None:
    room = await session.get(Room, room_id)
    if room is None or room.hotel_id != hotel_id:
        return None
    return room


async def delete_hotel(session: AsyncSession, *, hotel: Hotel) -> None:
    """Remove a hotel with its rooms and finished stays.

    Refused while any booking still holds one of its rooms.
    """
    active = await session.scalar(
        select(func.count()).select_from(Booking).where(
            Booking.hotel_id == hotel.id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
    )
    if active:
        raise ValueError("Hotel has active bookings")
    booking_ids = select(Booking.id).where(Booking.hotel_id == hotel.id)
    order_ids = select(FoodOrder.id).where(FoodOrder.booking_id.in_(booking_ids))
    await session.execute(delete(OrderLine).where(OrderLine.order_id.in_(order_ids)))
    await session.execute(delete(FoodOrder).where(FoodOrder.booking_id.in_(booking_ids)))
    await session.execute(delete(Booking).where(Booking.hotel_id == hotel.id))
    await session.execute(delete(Room).where(Room.hotel_id == hotel.id))
    await session.execute(delete(Hotel).where(Hotel.id == hotel.id))
    await session.commit()



async def list_room_types(session: AsyncSession) -> list[RoomType]:
    result = await session.execute(select(RoomType).order_by(RoomType.price_multiplier))
    return list(result.scalars().all())


async def create_room_type(
    session: AsyncSession, *, payload: RoomTypeCreate
) -> RoomType:
    room_type = RoomType(
        name=payload.name,
        max_capacity=payload.max_capacity,
        price_multiplier=payload.price_multiplier,
    )
    session.add(room_type)
    await session.commit()
    await session.refresh(room_type)
    return room_type


async def list_rooms(session: AsyncSession, *, hotel_id: uuid.UUID) -> list[Room]:
    result = await session.execute(
        select(Room).where(Room.hotel_id == hotel_id).order_by(Room.room_number)
    )
    return list(result.scalars().all())


async def create_room(
    session: AsyncSession, *, hotel: Hotel, payload: RoomCreate
) -> Room:
    room_type = await session.get(RoomType, payload.room_type_id)
    if room_type is None:
        raise ValueError("Room type not found")
    room = Room(
        hotel_id=hotel.id,
        room_type_id=room_type.id,
        room_number=payload.room_number,
        status=payload.status,
    )
    session.add(room)
    await session.commit()
    await session.refresh(room)
    return room


async def list_menu_items(
    session: AsyncSession, *, category: MenuCategory | None = None
) -> list[MenuItem]:
    stmt: Select[tuple[MenuItem]] = select(MenuItem)
    if category is not None:
        stmt = stmt.where(MenuItem.category == category)
    stmt = stmt.order_by(MenuItem.category, MenuItem.name)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_menu_item(
    session: AsyncSession, *, item_id: uuid.UUID
) -> MenuItem | None:
    return await session.get(MenuItem, item_id)


async def create_menu_item(
    session: AsyncSession, *, payload: MenuItemCreate
) -> MenuItem:
    item = MenuItem(
        name=payload.name,
        price=to_money(payload.price),
        category=payload.category,
        food_type=payload.food_type,
        is_available=payload.is_available,
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)
    return item


async def stage_menu_item_details(
    session: AsyncSession, *, item: MenuItem, data: dict[str, Any]
) -> None:
    """Flush non-price changes without committing; price goes through propagation."""
    data.pop("price", None)
    for key, value in data.items():
        setattr(item, key, value)
    await session.flush()


async def set_menu_item_availability(
    session: AsyncSession, *, item: MenuItem, is_available: bool
) -> MenuItem:
    item.is_available = is_available
    await session.commit()
    await session.refresh(item)
    return item


async def search_menu_items(
    session: AsyncSession,
    *,
    query: str | None = None,
    category: MenuCategory | None = None,
    skip: int = 0,
    limit: int = 20,
) -> list[MenuItem]:
    """Available items whose name contains ``query``, case-insensitively."""
    stmt: Select[tuple[MenuItem]] = select(MenuItem).where(
        MenuItem.is_available.is_(True)
    )
    if query:
        stmt = stmt.where(MenuItem.name.ilike(f"%{query.strip()}%"))
    if category is not None:
        stmt = stmt.where(MenuItem.category == category)
    stmt = stmt.order_by(MenuItem.name).offset(skip).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def delete_menu_item(session: AsyncSession, *, item: MenuItem) -> None:
    referencing = await session.scalar(
        select(func.count()).select_from(OrderLine).where(
            OrderLine.menu_item_id == item.id
        )
    )
    if referencing:
        raise ValueError("Menu item is referenced by existing orders")
    await session.delete(item)
    await session.commit()
