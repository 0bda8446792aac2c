"""Auth API: register, login, logout, current user."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db import crud
from app.db.engine import get_db
from app.dependencies import require_auth
from app.errors import UnauthorizedError, ValidationError
from app.schemas import LoginRequest, RegisterRequest, UserRead
from app.services.auth import (
    AuthContext, SESSION_COOKIE_NAME, SESSION_MAX_AGE_DAYS,
    create_session, extract_token, hash_password, remove_session, verify_password,
)
from app.services.navigation import menu_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

_MIN_PASSWORD = get_settings().auth.min_password_length


@router.post("/register", response_model=UserRead, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    errors: dict[str, str] = {}
    if "@" not in body.email:
        errors["email"] = "Invalid email address"
    if len(body.password) < _MIN_PASSWORD:
        errors["password"] = f"Password must be at least {_MIN_PASSWORD} characters"
    if body.password != body.confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    if errors:
        raise ValidationError("; ".join(errors.values()), fields=list(errors))

    user = await crud.create_user(
        db, body.email, hash_password(body.password),
        display_name=body.display_name, phone=body.phone, role=body.role,
    )
    logger.info("Registered %s as %s", user.email, user.role)
    return user


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user_by_email(db, body.email)
    if not user or not user.is_active or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %s", body.email)
        raise UnauthorizedError("Invalid credentials")

    ip = request.client.host if request.client else ""
    token = await create_session(user, db, ip_address=ip)

    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()

    payload = UserRead.model_validate(user).model_dump(mode="json")
    response = JSONResponse(content={"token": token, "user": payload})
    response.set_cookie(
        SESSION_COOKIE_NAME, token,
        httponly=True, samesite="lax",
        max_age=86400 * SESSION_MAX_AGE_DAYS,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    await remove_session(extract_token(request), db)
    response = JSONResponse(content={"ok": True})
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/me")
async def me(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """Current user plus the dashboard menu for their role."""
    user = await crud.get_user(db, auth.user_id)
    return {
        "user": UserRead.model_validate(user).model_dump(mode="json"),
        "menu": [
            {"name": item.name, "href": item.href, "icon": item.icon}
            for item in menu_for(user.role)
        ],
    }
