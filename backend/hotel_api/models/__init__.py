"""ORM models package export."""

from hotel_api.models.audit_event import AuditEvent
from hotel_api.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from hotel_api.models.hotel import Hotel, Room, RoomStatus, RoomType
from hotel_api.models.menu import (
    FoodOrder,
    FoodOrderStatus,
    FoodType,
    MenuCategory,
    MenuItem,
    OrderLine,
)
from hotel_api.models.user import User, UserRole, UserStatus

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "AuditEvent",
    "Booking",
    "BookingStatus",
    "FoodOrder",
    "FoodOrderStatus",
    "FoodType",
    "Hotel",
    "MenuCategory",
    "MenuItem",
    "OrderLine",
    "Room",
    "RoomStatus",
    "RoomType",
    "User",
    "UserRole",
    "UserStatus",
]
