from __future__ import annotations

import asyncio

from hotel_api.core.config import get_settings
from hotel_api.db.session import get_sessionmaker
from hotel_api.models import UserRole, UserStatus
from hotel_api.schemas.user import UserCreate
from hotel_api.services.user_service import create_user, get_user_by_email

EMAIL = "manager@example.com"
PASSWORD = "manager123"


async def main() -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        if await get_user_by_email(session, email=EMAIL) is not None:
            print(f"User {EMAIL} already exists")
            return

        await create_user(
            session,
            UserCreate(
                email=EMAIL,
                password=PASSWORD,
                first_name="Dev",
                last_name="Manager",
                role=UserRole.MANAGER,
                status=UserStatus.ACTIVE,
            ),
        )
        print(f"Created manager {EMAIL} / {PASSWORD}")


if __name__ == "__main__":
    asyncio.run(main())
