"""Seed the database with demo listings."""

import asyncio

from app.db import crud
from app.db.engine import async_session_factory, create_tables

DEMO_LISTINGS = [
    {
        "title": "Modern Family Home",
        "description": "Open-plan four-bedroom house with a large backyard.",
        "price": 785000, "type": "house", "bedrooms": 4, "bathrooms": 3, "area": 2600,
        "location": {"address": "18 Maple Ridge Rd", "city": "Austin", "state": "TX", "zip_code": "78731"},
        "amenities": ["Garage", "Garden", "Air Conditioning"],
        "featured": True,
    },
    {
        "title": "Downtown Loft",
        "description": "Converted warehouse loft steps from transit.",
        "price": 460000, "type": "apartment", "bedrooms": 1, "bathrooms": 1, "area": 900,
        "location": {"address": "220 Market St #5", "city": "Denver", "state": "CO", "zip_code": "80202"},
        "amenities": ["Elevator", "Gym"],
    },
    {
        "title": "Hillside Villa",
        "description": "Five-bedroom villa with pool and valley views.",
        "price": 2350000, "type": "villa", "bedrooms": 5, "bathrooms": 5, "area": 5200,
        "location": {"address": "3 Vista Ln", "city": "Scottsdale", "state": "AZ", "zip_code": "85255"},
        "amenities": ["Swimming Pool", "Security System", "Fireplace"],
        "featured": True,
    },
]


async def seed():
    await create_tables()

    async with async_session_factory() as db:
        existing = {p.title for p in await crud.list_properties(db)}
        for fields in DEMO_LISTINGS:
            if fields["title"] in existing:
                print(f"{fields['title']} already exists, skipping.")
                continue
            prop = await crud.create_property(db, fields)
            print(f"Created property: {prop.title} (id: {prop.id})")

    print("\nSeed complete. Start the server with: uvicorn app.main:app --reload")


if __name__ == "__main__":
    asyncio.run(seed())
