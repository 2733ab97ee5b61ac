"""Restaurant menu endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.api import deps
from hotel_api.api.v1.pricing import apply_price_update
from hotel_api.core.errors import PricingError
from hotel_api.models.menu import MenuCategory, MenuItem
from hotel_api.models.user import User
from hotel_api.schemas.menu import (
    MenuAvailabilityUpdate,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
)
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.security.permissions import PRICING_ROLES, require_roles
from hotel_api.services import catalog_service, price_cache, price_propagation_service
from hotel_api.services.totals import to_money

router = APIRouter(prefix="/menu-items")


async def _get_item_or_404(session: AsyncSession, item_id: uuid.UUID) -> MenuItem:
    item = await catalog_service.get_menu_item(session, item_id=item_id)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found"
        )
    return item


@router.get("", response_model=list[MenuItemRead], summary="List menu items")
async def list_menu_items(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    category: MenuCategory | None = Query(default=None),
) -> list[MenuItemRead]:
    items = await catalog_service.list_menu_items(session, category=category)
    return [MenuItemRead.model_validate(item) for item in items]


@router.post(
    "",
    response_model=MenuItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create menu item",
)
async def create_menu_item(
    payload: MenuItemCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MenuItemRead:
    require_roles(current_user, PRICING_ROLES)
    try:
        item = await catalog_service.create_menu_item(session, payload=payload)
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate menu item name"
        ) from exc
    return MenuItemRead.model_validate(item)


@router.get(
    "/search", response_model=list[MenuItemRead], summary="Search available items"
)
async def search_menu_items(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    q: str | None = Query(default=None, max_length=100),
    category: MenuCategory | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> list[MenuItemRead]:
    items = await catalog_service.search_menu_items(
        session, query=q, category=category, skip=skip, limit=limit
    )
    return [MenuItemRead.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=MenuItemRead, summary="Get menu item")
async def get_menu_item(
    item_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MenuItemRead:
    item = await _get_item_or_404(session, item_id)
    return MenuItemRead.model_validate(item)


@router.patch("/{item_id}", response_model=MenuItemRead, summary="Update menu item")
async def update_menu_item(
    item_id: uuid.UUID,
    payload: MenuItemUpdate,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MenuItemRead:
    """Apply descriptive changes and any price change as one unit.

    The price is validated before anything is written, and descriptive fields
    are only flushed so the propagation run commits them together with the
    new price, or not at all.
    """
    require_roles(current_user, PRICING_ROLES)
    item = await _get_item_or_404(session, item_id)
    user_id = current_user.id
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    raw_price = data.pop("price", None)
    new_price = (
        price_propagation_service.coerce_price(raw_price)
        if raw_price is not None
        else None
    )
    try:
        await catalog_service.stage_menu_item_details(session, item=item, data=data)
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate menu item name"
        ) from exc

    if new_price is not None and new_price != to_money(item.price):
        try:
            await apply_price_update(
                session,
                kind=PricedEntityKind.MENU_ITEM,
                entity_id=item_id,
                new_price=new_price,
                user_id=user_id,
                ip_address=deps.client_ip(request),
            )
        except PricingError:
            await session.rollback()
            raise
    else:
        await session.commit()
    await session.refresh(item)
    return MenuItemRead.model_validate(item)


@router.put(
    "/{item_id}/availability",
    response_model=MenuItemRead,
    summary="Toggle menu item availability",
)
async def set_menu_item_availability(
    item_id: uuid.UUID,
    payload: MenuAvailabilityUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MenuItemRead:
    require_roles(current_user, PRICING_ROLES)
    item = await _get_item_or_404(session, item_id)
    updated = await catalog_service.set_menu_item_availability(
        session, item=item, is_available=payload.is_available
    )
    return MenuItemRead.model_validate(updated)


@router.delete(
    "/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete menu item"
)
async def delete_menu_item(
    item_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> None:
    require_roles(current_user, PRICING_ROLES)
    item = await _get_item_or_404(session, item_id)
    try:
        await catalog_service.delete_menu_item(session, item=item)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    price_cache.invalidate(PricedEntityKind.MENU_ITEM, item_id)
    return None
