"""Pricing schema definitions."""

from __future__ import annotations

import enum
import uuid
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict


class PricedEntityKind(str, enum.Enum):
    """Catalog rows whose price can be changed by a manager."""

    MENU_ITEM = "menu_item"
    ROOM_RATE = "room_rate"


class PriceUpdateRequest(BaseModel):
    """New unit price; range checks happen in the propagation service."""

    price: Any


class PriceUpdateRead(BaseModel):
    """Outcome of a price change and its propagation."""

    kind: PricedEntityKind
    entity_id: uuid.UUID
    old_price: Decimal
    new_price: Decimal
    updated_count: int

    model_config = ConfigDict(from_attributes=True)


class UnitPriceRead(BaseModel):
    kind: PricedEntityKind
    entity_id: uuid.UUID
    unit_price: Decimal
