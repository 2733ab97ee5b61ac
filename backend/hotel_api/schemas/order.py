"""Pydantic schemas for food orders."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hotel_api.models.menu import FoodOrderStatus


class OrderItemRequest(BaseModel):
    menu_item_id: uuid.UUID
    quantity: int = Field(ge=1)


class FoodOrderCreate(BaseModel):
    """Payload for placing a room-service order."""

    booking_id: uuid.UUID
    items: list[OrderItemRequest] = Field(min_length=1)


class FoodOrderStatusUpdate(BaseModel):
    status: FoodOrderStatus


class OrderLineRead(BaseModel):
    id: uuid.UUID
    menu_item_id: uuid.UUID
    quantity: int
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class FoodOrderRead(BaseModel):
    """Serialized order with its lines."""

    id: uuid.UUID
    booking_id: uuid.UUID
    status: FoodOrderStatus
    ordered_at: datetime
    total_amount: Decimal
    lines: list[OrderLineRead]

    model_config = ConfigDict(from_attributes=True)
