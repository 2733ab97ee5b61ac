"""Role helpers for explicit authorization checks."""

from __future__ import annotations

from fastapi import HTTPException, status

from hotel_api.models.user import User, UserRole

PRICING_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER})
STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF})


def require_roles(user: User, allowed: frozenset[UserRole] | set[UserRole]) -> None:
    """Raise HTTP 403 if a user is not a member of the allowed role set."""

    if user.role not in allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


__all__ = ["PRICING_ROLES", "STAFF_ROLES", "require_roles"]
