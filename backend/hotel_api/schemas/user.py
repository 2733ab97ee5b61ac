"""User-related schemas."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hotel_api.models.user import UserRole, UserStatus


class UserBase(BaseModel):
    """Shared user fields."""

    email: EmailStr
    first_name: str
    last_name: str
    phone_number: str | None = None
    role: UserRole = Field(default=UserRole.GUEST)


class UserCreate(UserBase):
    """Payload for creating a user."""

    password: str = Field(min_length=8)
    status: UserStatus = UserStatus.ACTIVE


class UserRead(UserBase):
    """Serialized user response."""

    id: uuid.UUID
    status: UserStatus

    model_config = ConfigDict(from_attributes=True)
