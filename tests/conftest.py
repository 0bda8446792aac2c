"""Shared fixtures: in-memory database, seeded users, temp image store."""

from __future__ import annotations

from datetime import datetime, timezone, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.models import Base, User, UserSession
from app.services import image_store
from app.services.auth import hash_password, _hash_token

from tests.helpers import TEST_PASSWORD, TOKENS

# bcrypt is slow; hash the shared test password once
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def store_dir(tmp_path, monkeypatch):
    """Point the image store at a temp directory."""
    base = tmp_path / "uploads"
    base.mkdir()
    monkeypatch.setattr(image_store, "_BASE", base)
    return base


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(session_factory) -> dict[str, User]:
    """One active user per role, each with a live session token."""
    seeded = {}
    async with session_factory() as db:
        for role, token in TOKENS.items():
            user = User(
                email=f"{role}@example.com",
                display_name=f"{role.title()} User",
                password_hash=_PASSWORD_HASH,
                role=role,
            )
            db.add(user)
            await db.flush()
            db.add(UserSession(
                user_id=user.id,
                token_hash=_hash_token(token),
                expires_at=datetime.now(timezone.utc) + timedelta(hours=24),
            ))
            seeded[role] = user
        await db.commit()
    return seeded
