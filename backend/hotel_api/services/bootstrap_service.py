"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from hotel_api.core.config import get_settings
from hotel_api.db.session import get_sessionmaker
from hotel_api.models import UserRole, UserStatus
from hotel_api.schemas.user import UserCreate
from hotel_api.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> None:
    """Create the configured admin user if one does not yet exist."""

    settings = get_settings()
    email = settings.bootstrap_admin_email
    password = settings.bootstrap_admin_password
    if not email or not password:
        logger.debug("No bootstrap admin configured; skipping")
        return

    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        if await get_user_by_email(session, email=email.lower()) is not None:
            return
        payload = UserCreate(
            email=email,
            password=password,
            first_name="Hotel",
            last_name="Admin",
            role=UserRole.ADMIN,
            status=UserStatus.ACTIVE,
        )
        await create_user(session, payload)
        logger.info("Created bootstrap admin %s", email)
