from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.db.engine import get_db
from app.main import app


@pytest_asyncio.fixture
async def client(session_factory, users, store_dir):
    """Anonymous client against the app with an in-memory database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
