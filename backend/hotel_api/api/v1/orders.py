"""Room-service order endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.api import deps
from hotel_api.models.menu import FoodOrder
from hotel_api.models.user import User
from hotel_api.schemas.order import (
    FoodOrderCreate,
    FoodOrderRead,
    FoodOrderStatusUpdate,
)
from hotel_api.security.permissions import STAFF_ROLES, require_roles
from hotel_api.services import order_service

router = APIRouter(prefix="/orders")


async def _get_order_or_404(
    session: AsyncSession, order_id: uuid.UUID, current_user: User
) -> FoodOrder:
    order = await order_service.get_order(session, order_id=order_id)
    if order is None or (
        not current_user.is_staff and order.booking.user_id != current_user.id
    ):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        )
    return order


@router.post(
    "",
    response_model=FoodOrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Place food order",
)
async def create_food_order(
    payload: FoodOrderCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> FoodOrderRead:
    try:
        order = await order_service.create_food_order(
            session,
            user=current_user,
            booking_id=payload.booking_id,
            items=payload.items,
        )
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order already exists for this booking",
        ) from exc
    return FoodOrderRead.model_validate(order)


@router.get("/{order_id}", response_model=FoodOrderRead, summary="Get food order")
async def get_food_order(
    order_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> FoodOrderRead:
    order = await _get_order_or_404(session, order_id, current_user)
    return FoodOrderRead.model_validate(order)


@router.patch(
    "/{order_id}/status",
    response_model=FoodOrderRead,
    summary="Update food order status",
)
async def update_food_order_status(
    order_id: uuid.UUID,
    payload: FoodOrderStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> FoodOrderRead:
    require_roles(current_user, STAFF_ROLES)
    order = await _get_order_or_404(session, order_id, current_user)
    try:
        updated = await order_service.update_order_status(
            session, order=order, status=payload.status
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return FoodOrderRead.model_validate(updated)
