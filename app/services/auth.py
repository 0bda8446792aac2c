"""Authentication service: DB-backed bearer sessions and bcrypt passwords."""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.errors import UnauthorizedError
from app.models import User, UserSession

logger = logging.getLogger(__name__)

_settings = get_settings()

SESSION_COOKIE_NAME = "session_token"
SESSION_MAX_AGE_DAYS = _settings.auth.session_max_age_days


@dataclass
class AuthContext:
    user_id: str
    role: str  # 'buyer' | 'seller' | 'agent' | 'admin'
    email: str
    display_name: str


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def create_session(user: User, db: AsyncSession, ip_address: str = "") -> str:
    """Create a DB-backed session. Returns the raw token (not the hash)."""
    token = secrets.token_urlsafe(48)
    session = UserSession(
        user_id=user.id,
        token_hash=_hash_token(token),
        expires_at=datetime.now(timezone.utc) + timedelta(days=SESSION_MAX_AGE_DAYS),
        ip_address=ip_address,
    )
    db.add(session)
    await db.commit()
    return token


async def validate_session(token: str, db: AsyncSession) -> User | None:
    """Look up session by token hash, return User if valid."""
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == _hash_token(token),
            UserSession.expires_at > datetime.now(timezone.utc),
        )
    )
    session = result.scalars().first()
    if not session:
        return None

    user = await db.get(User, session.user_id)
    if not user or not user.is_active:
        return None
    return user


async def remove_session(token: str, db: AsyncSession) -> None:
    result = await db.execute(
        select(UserSession).where(UserSession.token_hash == _hash_token(token))
    )
    session = result.scalars().first()
    if session:
        await db.delete(session)
        await db.commit()


async def remove_all_user_sessions(user_id: str, db: AsyncSession) -> None:
    """Invalidate all sessions for a user (e.g. after deactivation)."""
    result = await db.execute(select(UserSession).where(UserSession.user_id == user_id))
    for s in result.scalars().all():
        await db.delete(s)
    await db.commit()


def extract_token(request: Request) -> str | None:
    """Bearer header first, then the session cookie."""
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_current_user(request: Request, db: AsyncSession) -> AuthContext:
    """Resolve the request's credential to an AuthContext or raise 401."""
    token = extract_token(request)
    if not token:
        raise UnauthorizedError("Not authenticated")

    user = await validate_session(token, db)
    if not user:
        logger.warning("Rejected invalid or expired session for %s %s", request.method, request.url.path)
        raise UnauthorizedError("Session expired")

    return AuthContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        display_name=user.display_name,
    )
