"""Helper utilities for recording audit events."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.core.errors import DependentWriteError
from hotel_api.models.audit_event import AuditEvent
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services.price_propagation_service import PriceUpdateResult


async def record_event(
    session: AsyncSession,
    *,
    event_type: str,
    user_id: uuid.UUID | None = None,
    description: str | None = None,
    payload: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> AuditEvent:
    """Persist an audit event and return it."""
    event = AuditEvent(
        user_id=user_id,
        event_type=event_type,
        description=description,
        payload=payload,
        ip_address=ip_address,
    )
    session.add(event)
    await session.commit()
    await session.refresh(event)
    return event


async def record_price_change(
    session: AsyncSession,
    *,
    result: PriceUpdateResult,
    user_id: uuid.UUID | None,
    ip_address: str | None = None,
) -> AuditEvent:
    """Audit a completed price propagation run."""
    return await record_event(
        session,
        user_id=user_id,
        event_type=f"pricing.{result.kind.value}.updated",
        description="Catalog price changed and propagated",
        payload=result.to_dict(),
        ip_address=ip_address,
    )


async def record_partial_price_change(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    error: DependentWriteError,
    user_id: uuid.UUID | None,
    ip_address: str | None = None,
) -> AuditEvent:
    """Audit a best-effort run that committed the price but not every total."""
    payload = error.to_dict()
    payload["entity_id"] = str(entity_id)
    return await record_event(
        session,
        user_id=user_id,
        event_type=f"pricing.{kind.value}.partially_updated",
        description="Catalog price changed; some derived totals are stale",
        payload=payload,
        ip_address=ip_address,
    )
