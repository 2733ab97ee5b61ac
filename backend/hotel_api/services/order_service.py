"""Room-service food order helpers."""
from __future__ import annotations

import uuid
from collections import Counter
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_api.models import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    FoodOrder,
    FoodOrderStatus,
    MenuItem,
    OrderLine,
    User,
)
from hotel_api.schemas.order import OrderItemRequest
from hotel_api.services.totals import order_line_subtotal

_ALLOWED_STATUS_TRANSITIONS: dict[FoodOrderStatus, set[FoodOrderStatus]] = {
    FoodOrderStatus.PENDING: {FoodOrderStatus.IN_PROGRESS, FoodOrderStatus.CANCELLED},
    FoodOrderStatus.IN_PROGRESS: {
        FoodOrderStatus.DELIVERED,
        FoodOrderStatus.CANCELLED,
    },
    FoodOrderStatus.DELIVERED: set(),
    FoodOrderStatus.CANCELLED: set(),
}


def _order_query():
    return select(FoodOrder).options(
        selectinload(FoodOrder.lines), selectinload(FoodOrder.booking)
    )


async def get_order(session: AsyncSession, *, order_id: uuid.UUID) -> FoodOrder | None:
    result = await session.execute(
        _order_query()
        .where(FoodOrder.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def _merge_quantities(items: Iterable[OrderItemRequest]) -> Counter[uuid.UUID]:
    quantities: Counter[uuid.UUID] = Counter()
    for item in items:
        quantities[item.menu_item_id] += item.quantity
    return quantities


async def create_food_order(
    session: AsyncSession,
    *,
    user: User,
    booking_id: uuid.UUID,
    items: Iterable[OrderItemRequest],
) -> FoodOrder:
    """Place the single food order for a booking at current menu prices."""
    booking = await session.get(Booking, booking_id)
    if booking is None or (not user.is_staff and booking.user_id != user.id):
        raise LookupError("Booking not found")
    if booking.status not in ACTIVE_BOOKING_STATUSES:
        raise ValueError("Booking is not active")

    existing = await session.scalar(
        select(FoodOrder.id).where(FoodOrder.booking_id == booking_id)
    )
    if existing is not None:
        raise ValueError("Order already exists for this booking")

    quantities = _merge_quantities(items)
    if not quantities:
        raise ValueError("Order must contain at least one item")
    # serialized against in-flight menu price propagation
    result = await session.execute(
        select(MenuItem)
        .where(MenuItem.id.in_(list(quantities)))
        .order_by(MenuItem.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    menu_items = {item.id: item for item in result.scalars().all()}
    missing = [item_id for item_id in quantities if item_id not in menu_items]
    if missing:
        await session.rollback()
        raise ValueError(f"Menu item {missing[0]} not found")
    unavailable = [item for item in menu_items.values() if not item.is_available]
    if unavailable:
        await session.rollback()
        raise ValueError(f"Menu item {unavailable[0].name} is not available")

    order = FoodOrder(booking_id=booking_id, status=FoodOrderStatus.PENDING)
    order.lines = [
        OrderLine(
            menu_item_id=item_id,
            quantity=quantity,
            subtotal=order_line_subtotal(menu_items[item_id].price, quantity),
        )
        for item_id, quantity in quantities.items()
    ]
    session.add(order)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    refreshed = await get_order(session, order_id=order.id)
    if refreshed is None:
        raise LookupError("Order not found")
    return refreshed


async def update_order_status(
    session: AsyncSession, *, order: FoodOrder, status: FoodOrderStatus
) -> FoodOrder:
    if status != order.status and status not in _ALLOWED_STATUS_TRANSITIONS[order.status]:
        raise ValueError(
            f"Invalid status transition from {order.status.value} to {status.value}"
        )
    order.status = status
    await session.commit()
    refreshed = await get_order(session, order_id=order.id)
    if refreshed is None:
        raise LookupError("Order not found")
    return refreshed
