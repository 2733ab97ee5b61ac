"""Restaurant menu, food order, and order line models."""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_api.db.base import Base
from hotel_api.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from hotel_api.models.booking import Booking


class MenuCategory(str, enum.Enum):
    """Meal service a menu item belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    BEVERAGES = "beverages"


class FoodType(str, enum.Enum):
    """Dietary classification of a menu item."""

    VEG = "veg"
    NON_VEG = "non_veg"
    GENERAL = "general"


class FoodOrderStatus(str, enum.Enum):
    """Kitchen lifecycle of a food order."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class MenuItem(TimestampMixin, Base):
    """A priced dish or drink."""

    __tablename__ = "menu_items"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_menu_item_price_nonneg"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[MenuCategory] = mapped_column(Enum(MenuCategory), nullable=False)
    food_type: Mapped[FoodType] = mapped_column(Enum(FoodType), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    order_lines: Mapped[list["OrderLine"]] = relationship(
        "OrderLine", back_populates="menu_item"
    )


class FoodOrder(TimestampMixin, Base):
    """Room-service order attached to a single booking."""

    __tablename__ = "food_orders"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    booking_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    status: Mapped[FoodOrderStatus] = mapped_column(
        Enum(FoodOrderStatus), default=FoodOrderStatus.PENDING, nullable=False
    )
    ordered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="food_order")
    lines: Mapped[list["OrderLine"]] = relationship(
        "OrderLine", back_populates="order", cascade="all, delete-orphan"
    )

    @property
    def total_amount(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0.00"))


class OrderLine(TimestampMixin, Base):
    """One menu item within an order; ``subtotal`` caches quantity x price."""

    __tablename__ = "order_lines"
    __table_args__ = (
        UniqueConstraint("order_id", "menu_item_id", name="uq_order_line_item"),
        CheckConstraint("quantity >= 1", name="ck_order_line_quantity"),
        CheckConstraint("subtotal >= 0", name="ck_order_line_subtotal_nonneg"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("food_orders.id", ondelete="CASCADE"), nullable=False
    )
    menu_item_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("menu_items.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    order: Mapped[FoodOrder] = relationship("FoodOrder", back_populates="lines")
    menu_item: Mapped[MenuItem] = relationship(
        "MenuItem", back_populates="order_lines"
    )
