"""Schema exports."""

from hotel_api.schemas.auth import RegistrationRequest, RegistrationResponse, Token
from hotel_api.schemas.booking import BookingCreate, BookingRead
from hotel_api.schemas.hotel import (
    HotelCreate,
    HotelRead,
    HotelUpdate,
    RoomCreate,
    RoomRead,
    RoomTypeCreate,
    RoomTypeRead,
)
from hotel_api.schemas.menu import MenuItemCreate, MenuItemRead, MenuItemUpdate
from hotel_api.schemas.order import (
    FoodOrderCreate,
    FoodOrderRead,
    FoodOrderStatusUpdate,
    OrderItemRequest,
    OrderLineRead,
)
from hotel_api.schemas.pricing import (
    PricedEntityKind,
    PriceUpdateRead,
    PriceUpdateRequest,
    UnitPriceRead,
)
from hotel_api.schemas.user import UserCreate, UserRead

__all__ = [
    "BookingCreate",
    "BookingRead",
    "FoodOrderCreate",
    "FoodOrderRead",
    "FoodOrderStatusUpdate",
    "HotelCreate",
    "HotelRead",
    "HotelUpdate",
    "MenuItemCreate",
    "MenuItemRead",
    "MenuItemUpdate",
    "OrderItemRequest",
    "OrderLineRead",
    "PriceUpdateRead",
    "PriceUpdateRequest",
    "PricedEntityKind",
    "RegistrationRequest",
    "RegistrationResponse",
    "RoomCreate",
    "RoomRead",
    "RoomTypeCreate",
    "RoomTypeRead",
    "Token",
    "UnitPriceRead",
    "UserCreate",
    "UserRead",
]
