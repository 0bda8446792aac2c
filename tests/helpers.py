"""Test data builders shared across unit and integration tests."""

from __future__ import annotations

import io

from PIL import Image

TEST_PASSWORD = "secret123"

# Raw bearer token per seeded role
TOKENS = {
    "admin": "test-token-admin",
    "agent": "test-token-agent",
    "seller": "test-token-seller",
    "buyer": "test-token-buyer",
}


def auth_headers(role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKENS[role]}"}


def make_image(fmt: str = "PNG", size: tuple[int, int] = (64, 48)) -> bytes:
    img = Image.new("RGB", size, color=(70, 130, 180))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def listing_fields(**overrides) -> dict:
    fields = {
        "title": "Sunny Bungalow",
        "description": "Two-bedroom bungalow near the park.",
        "price": 350000,
        "type": "house",
        "bedrooms": 2,
        "bathrooms": 1,
        "area": 1200,
        "location": {
            "address": "12 Elm St",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62704",
        },
        "amenities": ["Garden", "Garage"],
        "featured": False,
    }
    fields.update(overrides)
    return fields
