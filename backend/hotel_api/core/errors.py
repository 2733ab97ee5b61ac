"""Error taxonomy for catalog price changes."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import status


class PricingError(Exception):
    """Base class for failures surfaced by the pricing workflow."""

    kind = "PricingError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class InvalidArgumentError(PricingError):
    """The requested price is non-numeric, non-finite, or not positive."""

    kind = "InvalidArgument"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PricingError):
    """The priced entity does not exist."""

    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class DependentWriteError(PricingError):
    """A dependent record failed to persist while totals were being recomputed.

    ``updated_count`` is how many dependents hold the new total and
    ``pending_ids`` lists the ones still carrying a stale total, so a caller
    can retry just the remainder. When ``rolled_back`` is true the price change
    itself was undone as well.
    """

    kind = "DependentWriteFailure"

    def __init__(
        self,
        message: str,
        *,
        updated_count: int,
        pending_ids: list[uuid.UUID],
        rolled_back: bool,
    ) -> None:
        super().__init__(message)
        self.updated_count = updated_count
        self.pending_ids = pending_ids
        self.rolled_back = rolled_back

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "updated_count": self.updated_count,
                "pending_ids": [str(record_id) for record_id in self.pending_ids],
                "rolled_back": self.rolled_back,
            }
        )
        return data


class StorageUnavailableError(PricingError):
    """The underlying store rejected a read or write."""

    kind = "StorageUnavailable"


__all__ = [
    "DependentWriteError",
    "InvalidArgumentError",
    "NotFoundError",
    "PricingError",
    "StorageUnavailableError",
]
