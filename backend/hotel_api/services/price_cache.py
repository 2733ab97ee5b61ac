"""Read-through cache of current unit prices.

The database stays the only source of truth: entries are filled from the
catalog store on a miss, expire after ``PRICE_CACHE_TTL_SECONDS``, and are
dropped explicitly whenever a price change is written.
"""

from __future__ import annotations

import time
import uuid
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.core.config import get_settings
from hotel_api.core.errors import NotFoundError
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services import catalog_service

_CacheKey = tuple[PricedEntityKind, uuid.UUID]

_entries: dict[_CacheKey, tuple[Decimal, float]] = {}


async def get_unit_price(
    session: AsyncSession, *, kind: PricedEntityKind, entity_id: uuid.UUID
) -> Decimal:
    key = (kind, entity_id)
    cached = _entries.get(key)
    now = time.monotonic()
    if cached is not None and cached[1] > now:
        return cached[0]

    entity = await catalog_service.get_priced_entity(
        session, kind=kind, entity_id=entity_id
    )
    if entity is None:
        _entries.pop(key, None)
        raise NotFoundError(f"{catalog_service.entity_label(kind)} not found")
    price = catalog_service.current_price(kind, entity)
    ttl = get_settings().price_cache_ttl_seconds
    if ttl > 0:
        _entries[key] = (price, now + ttl)
    return price


def invalidate(kind: PricedEntityKind, entity_id: uuid.UUID) -> None:
    _entries.pop((kind, entity_id), None)


def clear() -> None:
    _entries.clear()


__all__ = ["clear", "get_unit_price", "invalidate"]
