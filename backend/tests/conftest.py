"""Test fixtures for the hotel pricing backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from hotel_api.core.config import get_settings
from hotel_api.core.security import hash_password
from hotel_api.db.base import Base
from hotel_api.db.session import dispose_engine, get_sessionmaker
from hotel_api.main import app
from hotel_api.models import (
    FoodType,
    Hotel,
    MenuCategory,
    MenuItem,
    Room,
    RoomType,
    User,
    UserRole,
    UserStatus,
)
from hotel_api.services import price_cache


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()
    price_cache.clear()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    price_cache.clear()
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def catalog(reset_database: None, db_url: str) -> dict[str, object]:
    """Seed one hotel with standard and deluxe rooms plus a small menu."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        standard = RoomType(
            name="Standard", max_capacity=2, price_multiplier=Decimal("1.00")
        )
        deluxe = RoomType(name="Deluxe", max_capacity=3, price_multiplier=Decimal("1.50"))
        hotel = Hotel(
            name="Trident Hotel",
            location="Chennai",
            address="37, Mahatma Gandhi Road, Nungambakkam, Chennai",
            rating=Decimal("4.8"),
            base_price_per_night=Decimal("10000.00"),
        )
        session.add_all([standard, deluxe, hotel])
        await session.flush()

        for number, room_type in (
            ("101", standard),
            ("102", standard),
            ("201", deluxe),
            ("202", deluxe),
        ):
            session.add(
                Room(hotel_id=hotel.id, room_type_id=room_type.id, room_number=number)
            )

        idli = MenuItem(
            name="Idli Sambar (2pcs)",
            price=Decimal("100.00"),
            category=MenuCategory.BREAKFAST,
            food_type=FoodType.VEG,
        )
        coffee = MenuItem(
            name="Coffee",
            price=Decimal("80.00"),
            category=MenuCategory.BEVERAGES,
            food_type=FoodType.GENERAL,
        )
        session.add_all([idli, coffee])
        await session.commit()

        return {
            "hotel_id": hotel.id,
            "standard_id": standard.id,
            "deluxe_id": deluxe.id,
            "idli_id": idli.id,
            "coffee_id": coffee.id,
        }


@pytest_asyncio.fixture()
async def app_context(
    catalog: dict[str, object], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client, seeded users, and the seeded catalog ids."""
    sessionmaker = get_sessionmaker(db_url)
    passwords = {
        "manager": "Passw0rd!",
        "staff": "St4ffPass!",
        "guest": "Gu3stPass!",
        "other_guest": "0therPass!",
    }
    roles = {
        "manager": UserRole.MANAGER,
        "staff": UserRole.STAFF,
        "guest": UserRole.GUEST,
        "other_guest": UserRole.GUEST,
    }

    context: dict[str, object] = dict(catalog)
    async with sessionmaker() as session:
        for key, role in roles.items():
            user = User(
                email=f"{key.replace('_', '.')}@example.com",
                hashed_password=hash_password(passwords[key]),
                first_name=key.split("_")[0].title(),
                last_name="Tester",
                role=role,
                status=UserStatus.ACTIVE,
            )
            session.add(user)
            await session.flush()
            context[f"{key}_id"] = user.id
            context[f"{key}_email"] = user.email
            context[f"{key}_password"] = passwords[key]
        await session.commit()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
