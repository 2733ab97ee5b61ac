"""Apply catalog price changes and recompute every derived total.

A run loads the priced entity, writes the new price, enumerates every record
derived from it, and rewrites each cached total from its own frozen quantity.
How the writes are grouped is chosen by :class:`PropagationMode`:

``atomic``
    The entity row is locked for the whole run and everything commits once.
    Any dependent write failure rolls the price change back too, so readers
    never observe a half-propagated price. Booking and order creation lock the
    same row, which serializes them against an in-flight run.

``best_effort``
    The price commits first and every dependent commits on its own. A failure
    part way through leaves the records already processed updated and
    reports the rest as pending.
"""

from __future__ import annotations

import enum
import logging
import math
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_api.core.config import get_settings
from hotel_api.core.errors import (
    DependentWriteError,
    InvalidArgumentError,
    NotFoundError,
    StorageUnavailableError,
)
from hotel_api.schemas.pricing import PricedEntityKind
from hotel_api.services import catalog_service, dependent_record_service, price_cache
from hotel_api.services.dependent_record_service import DependentRecord
from hotel_api.services.totals import to_money

logger = logging.getLogger(__name__)

# Numeric(10, 2)
MAX_PRICE = Decimal("100000000")


class PropagationMode(str, enum.Enum):
    """Transaction grouping for a propagation run."""

    ATOMIC = "atomic"
    BEST_EFFORT = "best_effort"


@dataclass(slots=True)
class PriceUpdateResult:
    """Summary returned by a successful price change."""

    kind: PricedEntityKind
    entity_id: uuid.UUID
    old_price: Decimal
    new_price: Decimal
    updated_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "entity_id": str(self.entity_id),
            "old_price": f"{self.old_price:.2f}",
            "new_price": f"{self.new_price:.2f}",
            "updated_count": self.updated_count,
        }


def coerce_price(value: Any) -> Decimal:
    """Validate a requested price and normalize it to cents."""
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError("Price must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidArgumentError("Price must be a finite number")
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidArgumentError("Price must be a number") from exc
    if not price.is_finite():
        raise InvalidArgumentError("Price must be a finite number")
    if price <= 0:
        raise InvalidArgumentError("Price must be greater than 0")
    if price >= MAX_PRICE:
        raise InvalidArgumentError(f"Price must be below {MAX_PRICE}")
    price = to_money(price)
    if price <= 0:
        raise InvalidArgumentError("Price must be at least 0.01")
    return price


def _resolve_mode(mode: PropagationMode | str | None) -> PropagationMode:
    if mode is None:
        return PropagationMode(get_settings().price_propagation_mode)
    return PropagationMode(mode)


async def update_price(
    session: AsyncSession,
    *,
    kind: PricedEntityKind,
    entity_id: uuid.UUID,
    new_price: Any,
    mode: PropagationMode | str | None = None,
) -> PriceUpdateResult:
    """Set a new unit price and rewrite every total derived from it."""
    price = coerce_price(new_price)
    mode = _resolve_mode(mode)
    atomic = mode is PropagationMode.ATOMIC
    label = catalog_service.entity_label(kind)

    try:
        entity = await catalog_service.get_priced_entity(
            session, kind=kind, entity_id=entity_id, lock=True
        )
        if entity is None:
            await session.rollback()
            raise NotFoundError(f"{label} not found")

        old_price = catalog_service.current_price(kind, entity)
        await catalog_service.set_price(
            session, kind=kind, entity=entity, price=price
        )
        dependents = await dependent_record_service.find_all_referencing(
            session, kind=kind, entity_id=entity_id
        )
        if not atomic:
            await session.commit()
            price_cache.invalidate(kind, entity_id)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Storage failure updating %s %s price", label, entity_id)
        raise StorageUnavailableError(f"Could not update {label.lower()} price") from exc

    updated_count = await _rewrite_totals(session, dependents, price, atomic=atomic)

    if atomic:
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception("Commit failed propagating %s %s price", label, entity_id)
            raise StorageUnavailableError(
                f"Could not commit {label.lower()} price change"
            ) from exc
        price_cache.invalidate(kind, entity_id)

    logger.info(
        "%s %s price %s -> %s propagated to %d record(s) (%s)",
        label,
        entity_id,
        old_price,
        price,
        updated_count,
        mode.value,
    )
    return PriceUpdateResult(
        kind=kind,
        entity_id=entity_id,
        old_price=old_price,
        new_price=price,
        updated_count=updated_count,
    )


async def _rewrite_totals(
    session: AsyncSession,
    dependents: Sequence[DependentRecord],
    price: Decimal,
    *,
    atomic: bool,
) -> int:
    record_ids = [dependent.id for dependent in dependents]
    updated = 0
    for record_id, dependent in zip(record_ids, dependents):
        total = dependent.recompute(price)
        try:
            await dependent_record_service.set_derived_total(session, dependent, total)
            if not atomic:
                await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            if atomic:
                logger.warning(
                    "Rolled back price change: %s %s failed to persist",
                    dependent.kind.value,
                    record_id,
                )
                raise DependentWriteError(
                    f"Failed to update {dependent.kind.value} {record_id}; "
                    "price change rolled back",
                    updated_count=0,
                    pending_ids=record_ids,
                    rolled_back=True,
                ) from exc
            pending = record_ids[updated:]
            logger.warning(
                "Partial price propagation: %d updated, %d pending",
                updated,
                len(pending),
            )
            raise DependentWriteError(
                f"Failed to update {dependent.kind.value} {record_id}; "
                f"{len(pending)} record(s) still carry the previous total",
                updated_count=updated,
                pending_ids=pending,
                rolled_back=False,
            ) from exc
        updated += 1
    return updated


__all__ = [
    "PriceUpdateResult",
    "PropagationMode",
    "coerce_price",
    "update_price",
]
