"""Seed room types, hotels, rooms, and the restaurant menu."""

from __future__ import annotations

import asyncio
import math
from decimal import Decimal

from sqlalchemy import select

from hotel_api.db.session import get_sessionmaker
from hotel_api.models import (
    FoodType,
    Hotel,
    MenuCategory,
    MenuItem,
    Room,
    RoomStatus,
    RoomType,
)

ROOM_TYPES = [
    ("Standard", 2, "1.00"),
    ("Deluxe", 3, "1.50"),
    ("Suite", 4, "2.00"),
    ("Presidential", 6, "3.00"),
]

# name, location, address, rating, nightly rate, room count
HOTELS = [
    ("Trident Hotel", "Chennai", "37, Mahatma Gandhi Road, Nungambakkam, Chennai", "4.8", "15000.00", 8),
    ("Woodlands Inn", "Chennai", "72, Dr. Radhakrishnan Salai, Mylapore, Chennai", "3.5", "7500.00", 5),
    ("The Leela Palace", "Bangalore", "23, Old Airport Road, Bangalore", "4.9", "22000.00", 10),
    ("Taj Coromandel", "Chennai", "37, Mahatma Gandhi Road, Nungambakkam, Chennai", "4.5", "17000.00", 7),
    ("Novotel", "Chennai", "457, Anna Salai, Teynampet, Chennai", "4.0", "10000.00", 6),
    ("Taz Kamar Inn", "Chennai", "15, Cathedral Road, Chennai", "3.0", "5000.00", 4),
    ("Benzz Park", "Chennai", "123, Mount Road, Chennai", "4.2", "11000.00", 9),
    ("Sheraton Grand", "Chennai", "234, Anna Salai, Chennai", "4.5", "14000.00", 8),
    ("Ramada Plaza", "Chennai", "345, OMR, Chennai", "3.8", "7500.00", 5),
    ("ITC Grand Chola", "Chennai", "63, Mount Road, Guindy, Chennai", "4.7", "25000.00", 10),
]

# share of a hotel's rooms per room type, and the floor its numbers start on
ROOM_MIX = [("Standard", 0.5, 1), ("Deluxe", 0.3, 2), ("Suite", 0.15, 3), ("Presidential", 0.05, 4)]

MENU = [
    ("Idli Sambar (2pcs)", "100.00", MenuCategory.BREAKFAST, FoodType.VEG),
    ("Masala Dosa", "120.00", MenuCategory.BREAKFAST, FoodType.VEG),
    ("Bread Omelette (2 Eggs)", "200.00", MenuCategory.BREAKFAST, FoodType.NON_VEG),
    ("Pongal", "80.00", MenuCategory.BREAKFAST, FoodType.VEG),
    ("Upma", "60.00", MenuCategory.BREAKFAST, FoodType.VEG),
    ("Puri with Curry", "90.00", MenuCategory.BREAKFAST, FoodType.VEG),
    ("Chicken Biryani", "450.00", MenuCategory.LUNCH, FoodType.NON_VEG),
    ("Paneer Tikka Masala", "380.00", MenuCategory.LUNCH, FoodType.VEG),
    ("Fish Curry", "420.00", MenuCategory.LUNCH, FoodType.NON_VEG),
    ("Dal Makhani", "180.00", MenuCategory.LUNCH, FoodType.VEG),
    ("Mutton Biryani", "500.00", MenuCategory.LUNCH, FoodType.NON_VEG),
    ("Veg Biryani", "250.00", MenuCategory.LUNCH, FoodType.VEG),
    ("Butter Chicken", "550.00", MenuCategory.DINNER, FoodType.NON_VEG),
    ("Paneer Butter Masala", "350.00", MenuCategory.DINNER, FoodType.VEG),
    ("Tandoori Chicken", "480.00", MenuCategory.DINNER, FoodType.NON_VEG),
    ("Dal Tadka", "150.00", MenuCategory.DINNER, FoodType.VEG),
    ("Mutton Curry", "520.00", MenuCategory.DINNER, FoodType.NON_VEG),
    ("Malai Kofta", "320.00", MenuCategory.DINNER, FoodType.VEG),
    ("Coffee", "80.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
    ("Tea", "60.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
    ("Fresh Juice", "120.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
    ("Lassi", "100.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
    ("Soft Drink", "50.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
    ("Mineral Water", "30.00", MenuCategory.BEVERAGES, FoodType.GENERAL),
]


async def seed_catalog() -> None:
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        room_types = {
            room_type.name: room_type
            for room_type in (await session.execute(select(RoomType))).scalars().all()
        }
        types_created = 0
        for name, capacity, multiplier in ROOM_TYPES:
            if name not in room_types:
                room_type = RoomType(
                    name=name,
                    max_capacity=capacity,
                    price_multiplier=Decimal(multiplier),
                )
                session.add(room_type)
                room_types[name] = room_type
                types_created += 1
        await session.flush()

        existing_hotels = set(
            (await session.execute(select(Hotel.name))).scalars().all()
        )
        hotels_created = 0
        rooms_created = 0
        for name, location, address, rating, rate, room_count in HOTELS:
            if name in existing_hotels:
                continue
            hotel = Hotel(
                name=name,
                location=location,
                address=address,
                rating=Decimal(rating),
                base_price_per_night=Decimal(rate),
            )
            session.add(hotel)
            await session.flush()
            hotels_created += 1
            for type_name, share, floor in ROOM_MIX:
                for number in range(1, math.ceil(room_count * share) + 1):
                    session.add(
                        Room(
                            hotel_id=hotel.id,
                            room_type_id=room_types[type_name].id,
                            room_number=f"{floor}0{number}",
                            status=RoomStatus.VACANT,
                        )
                    )
                    rooms_created += 1

        existing_items = set(
            (await session.execute(select(MenuItem.name))).scalars().all()
        )
        items_created = 0
        for name, price, category, food_type in MENU:
            if name in existing_items:
                continue
            session.add(
                MenuItem(
                    name=name,
                    price=Decimal(price),
                    category=category,
                    food_type=food_type,
                )
            )
            items_created += 1

        await session.commit()
        print(
            f"Seeded {types_created} room type(s), {hotels_created} hotel(s), "
            f"{rooms_created} room(s) and {items_created} menu item(s)."
        )


def main() -> None:
    asyncio.run(seed_catalog())


if __name__ == "__main__":
    main()
