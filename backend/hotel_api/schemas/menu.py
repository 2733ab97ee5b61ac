"""Schemas for menu items."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hotel_api.models.menu import FoodType, MenuCategory


class MenuItemBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0)
    category: MenuCategory
    food_type: FoodType


class MenuItemCreate(MenuItemBase):
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    # validated by the propagation service so bad values surface as InvalidArgument
    price: Any = None
    category: MenuCategory | None = None
    food_type: FoodType | None = None


class MenuItemRead(MenuItemBase):
    id: uuid.UUID
    is_available: bool

    model_config = ConfigDict(from_attributes=True)


class MenuAvailabilityUpdate(BaseModel):
    is_available: bool
