"""Tests for the read-through unit price cache."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from sqlalchemy import update

from hotel_api.core.config import get_settings
from hotel_api.core.errors import NotFoundError
from hotel_api.db.session import get_sessionmaker
from hotel_api.models import MenuItem
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services import price_cache

pytestmark = pytest.mark.asyncio


async def _set_price_behind_cache(session, item_id, price: str) -> None:
    await session.execute(
        update(MenuItem).where(MenuItem.id == item_id).values(price=Decimal(price))
    )
    await session.commit()


async def test_hit_serves_cached_value_until_invalidated(catalog, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        first = await price_cache.get_unit_price(
            session, kind=PricedEntityKind.MENU_ITEM, entity_id=catalog["coffee_id"]
        )
        await _set_price_behind_cache(session, catalog["coffee_id"], "90.00")
        cached = await price_cache.get_unit_price(
            session, kind=PricedEntityKind.MENU_ITEM, entity_id=catalog["coffee_id"]
        )
        price_cache.invalidate(PricedEntityKind.MENU_ITEM, catalog["coffee_id"])
        fresh = await price_cache.get_unit_price(
            session, kind=PricedEntityKind.MENU_ITEM, entity_id=catalog["coffee_id"]
        )

    assert first == cached == Decimal("80.00")
    assert fresh == Decimal("90.00")


async def test_zero_ttl_always_reads_through(catalog, db_url: str, monkeypatch) -> None:
    monkeypatch.setenv("PRICE_CACHE_TTL_SECONDS", "0")
    get_settings.cache_clear()
    try:
        sessionmaker = get_sessionmaker(db_url)
        async with sessionmaker() as session:
            await price_cache.get_unit_price(
                session, kind=PricedEntityKind.MENU_ITEM, entity_id=catalog["coffee_id"]
            )
            await _set_price_behind_cache(session, catalog["coffee_id"], "85.00")
            price = await price_cache.get_unit_price(
                session, kind=PricedEntityKind.MENU_ITEM, entity_id=catalog["coffee_id"]
            )
    finally:
        get_settings.cache_clear()
    assert price == Decimal("85.00")


async def test_room_rate_lookup(catalog, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        rate = await price_cache.get_unit_price(
            session, kind=PricedEntityKind.ROOM_RATE, entity_id=catalog["hotel_id"]
        )
    assert rate == Decimal("10000.00")


async def test_missing_entity_raises_not_found(catalog, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(NotFoundError):
            await price_cache.get_unit_price(
                session, kind=PricedEntityKind.ROOM_RATE, entity_id=uuid.uuid4()
            )
