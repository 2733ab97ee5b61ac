"""Index of records whose cached totals derive from a catalog price."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_api.models import Booking, OrderLine, Room
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services.totals import to_money


class DerivedRecordKind(str, enum.Enum):
    """Kinds of records holding a denormalized total."""

    ORDER_LINE = "order_line"
    STAY_BOOKING = "stay_booking"


@dataclass(slots=True)
class DependentRecord:
    """A derived record with the factors frozen when it was created.

    ``quantity`` is the line quantity or the number of nights and
    ``multiplier`` is the room type multiplier (1 for order lines).
    """

    kind: DerivedRecordKind
    record: OrderLine | Booking
    quantity: int
    multiplier: Decimal

    @property
    def id(self) -> uuid.UUID:
        return self.record.id

    @property
    def derived_total(self) -> Decimal:
        if isinstance(self.record, Booking):
            return self.record.grand_total
        return self.record.subtotal

    def recompute(self, unit_price: Decimal) -> Decimal:
        return to_money(Decimal(unit_price) * self.multiplier * self.quantity)


async def find_all_referencing(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
) -> list[DependentRecord]:
    """Return every record derived from the given entity's price."""
    if kind is PricedEntityKind.MENU_ITEM:
        return await _order_lines_for_item(session, entity_id)
    return await _bookings_for_hotel(session, entity_id)


async def _order_lines_for_item(
    session: AsyncSession, menu_item_id: uuid.UUID
) -> list[DependentRecord]:
    result = await session.execute(
        select(OrderLine)
        .where(OrderLine.menu_item_id == menu_item_id)
        .order_by(OrderLine.created_at, OrderLine.id)
        .execution_options(populate_existing=True)
    )
    return [
        DependentRecord(
            kind=DerivedRecordKind.ORDER_LINE,
            record=line,
            quantity=line.quantity,
            multiplier=Decimal("1"),
        )
        for line in result.scalars().all()
    ]


async def _bookings_for_hotel(
    session: AsyncSession, hotel_id: uuid.UUID
) -> list[DependentRecord]:
    result = await session.execute(
        select(Booking)
        .options(selectinload(Booking.room).selectinload(Room.room_type))
        .where(Booking.hotel_id == hotel_id)
        .order_by(Booking.booked_at, Booking.id)
        .execution_options(populate_existing=True)
    )
    return [
        DependentRecord(
            kind=DerivedRecordKind.STAY_BOOKING,
            record=booking,
            quantity=booking.total_nights,
            multiplier=Decimal(booking.room.room_type.price_multiplier),
        )
        for booking in result.scalars().unique().all()
    ]


async def set_derived_total(
    session: AsyncSession, dependent: DependentRecord, total: Decimal
) -> None:
    if isinstance(dependent.record, Booking):
        dependent.record.grand_total = total
    else:
        dependent.record.subtotal = total
    await session.flush()
