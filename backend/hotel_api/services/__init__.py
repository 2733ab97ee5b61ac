"""Service layer exports."""
from hotel_api.services import (
    audit_service,
    auth_service,
    booking_service,
    catalog_service,
    dependent_record_service,
    order_service,
    price_cache,
    price_propagation_service,
    user_service,
)

__all__ = [
    "audit_service",
    "auth_service",
    "booking_service",
    "catalog_service",
    "dependent_record_service",
    "order_service",
    "price_cache",
    "price_propagation_service",
    "user_service",
]
