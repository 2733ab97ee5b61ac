"""Tests for food order service helpers."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import select

from hotel_api.db.session import get_sessionmaker
from hotel_api.models import FoodOrder, FoodOrderStatus, User, UserRole, UserStatus
from hotel_api.schemas.order import OrderItemRequest
from hotel_api.services import booking_service, order_service

pytestmark = pytest.mark.asyncio


async def _placed_order(session, catalog) -> FoodOrder:
    guest = User(
        email=f"guest-{uuid.uuid4().hex[:6]}@example.com",
        hashed_password="x",
        first_name="Meena",
        last_name="Guest",
        role=UserRole.GUEST,
        status=UserStatus.ACTIVE,
    )
    session.add(guest)
    await session.commit()
    booking = await booking_service.create_booking(
        session,
        user=guest,
        hotel_id=catalog["hotel_id"],
        room_number="101",
        check_in_date=date(2026, 11, 1),
        check_out_date=date(2026, 11, 2),
    )
    return await order_service.create_food_order(
        session,
        user=guest,
        booking_id=booking.id,
        items=[OrderItemRequest(menu_item_id=catalog["coffee_id"], quantity=1)],
    )


async def test_status_update_reports_vanished_order(
    catalog, db_url: str, monkeypatch
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        order = await _placed_order(session, catalog)

        async def vanished(session, *, order_id):
            return None

        monkeypatch.setattr(order_service, "get_order", vanished)
        with pytest.raises(LookupError, match="Order not found"):
            await order_service.update_order_status(
                session, order=order, status=FoodOrderStatus.IN_PROGRESS
            )


async def test_status_update_follows_transition_table(catalog, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        order = await _placed_order(session, catalog)
        delivered = await order_service.update_order_status(
            session, order=order, status=FoodOrderStatus.IN_PROGRESS
        )
        delivered = await order_service.update_order_status(
            session, order=delivered, status=FoodOrderStatus.DELIVERED
        )
        with pytest.raises(ValueError, match="Invalid status transition"):
            await order_service.update_order_status(
                session, order=delivered, status=FoodOrderStatus.CANCELLED
            )

    async with sessionmaker() as session:
        stored = await session.scalar(
            select(FoodOrder.status).where(FoodOrder.id == order.id)
        )
    assert stored is FoodOrderStatus.DELIVERED
