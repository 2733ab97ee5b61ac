"""Pricing-related API endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.api import deps
from hotel_api.core.errors import DependentWriteError
from hotel_api.models.user import User
from hotel_api.schemas.pricing import (
    PricedEntityKind,
    PriceUpdateRead,
    PriceUpdateRequest,
    UnitPriceRead,
)
from hotel_api.security.permissions import PRICING_ROLES, require_roles
from hotel_api.services import audit_service, price_cache, price_propagation_service
from hotel_api.services.price_propagation_service import PriceUpdateResult

router = APIRouter(prefix="/pricing", tags=["pricing"])


async def apply_price_update(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    new_price: Any,
    user_id: uuid.UUID,
    ip_address: str | None,
) -> PriceUpdateResult:
    """Run a propagation and audit its outcome, including partial failures."""
    try:
        result = await price_propagation_service.update_price(
            session, kind=kind, entity_id=entity_id, new_price=new_price
        )
    except DependentWriteError as exc:
        if not exc.rolled_back:
            await audit_service.record_partial_price_change(
                session,
                kind=kind,
                entity_id=entity_id,
                error=exc,
                user_id=user_id,
                ip_address=ip_address,
            )
        raise
    await audit_service.record_price_change(
        session, result=result, user_id=user_id, ip_address=ip_address
    )
    return result


async def _apply_price_update(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    payload: PriceUpdateRequest,
    current_user: User,
    request: Request,
) -> PriceUpdateRead:
    require_roles(current_user, PRICING_ROLES)
    result = await apply_price_update(
        session,
        kind=kind,
        entity_id=entity_id,
        new_price=payload.price,
        user_id=current_user.id,
        ip_address=deps.client_ip(request),
    )
    return PriceUpdateRead.model_validate(result)


@router.put(
    "/menu-items/{item_id}/price",
    response_model=PriceUpdateRead,
    summary="Change a menu item price",
)
async def update_menu_item_price(
    item_id: uuid.UUID,
    payload: PriceUpdateRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> PriceUpdateRead:
    return await _apply_price_update(
        session,
        kind=PricedEntityKind.MENU_ITEM,
        entity_id=item_id,
        payload=payload,
        current_user=current_user,
        request=request,
    )


@router.put(
    "/hotels/{hotel_id}/room-rate",
    response_model=PriceUpdateRead,
    summary="Change a hotel's nightly room rate",
)
async def update_hotel_room_rate(
    hotel_id: uuid.UUID,
    payload: PriceUpdateRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> PriceUpdateRead:
    return await _apply_price_update(
        session,
        kind=PricedEntityKind.ROOM_RATE,
        entity_id=hotel_id,
        payload=payload,
        current_user=current_user,
        request=request,
    )


@router.get(
    "/{kind}/{entity_id}",
    response_model=UnitPriceRead,
    summary="Current unit price",
)
async def get_unit_price(
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> UnitPriceRead:
    price = await price_cache.get_unit_price(session, kind=kind, entity_id=entity_id)
    return UnitPriceRead(kind=kind, entity_id=entity_id, unit_price=price)
