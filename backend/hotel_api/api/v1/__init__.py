"""Versioned API router."""

from fastapi import APIRouter

from . import auth, bookings, health, hotels, menu, orders, pricing

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(hotels.router, tags=["hotels"])
router.include_router(menu.router, tags=["menu"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(orders.router, tags=["orders"])
router.include_router(pricing.router)

__all__ = ["router"]
