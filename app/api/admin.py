"""Admin API: user management."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import require_admin
from app.errors import ValidationError
from app.models import User
from app.schemas import UserActiveUpdate, UserRead, UserRoleUpdate
from app.services.auth import AuthContext, remove_all_user_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


async def _active_admin_count(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(User.role == "admin", User.is_active == True)
    )
    return result.scalar_one()


# ── Users ─────────────────────────────────────────────────

@router.get("/users", response_model=list[UserRead])
async def list_users(
    search: str = Query(default=""),
    role: str | None = Query(default=None),
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await crud.list_users(db, search=search, role=role)


@router.put("/users/{user_id}/role", response_model=UserRead)
async def update_user_role(
    user_id: str,
    body: UserRoleUpdate,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user(db, user_id)

    # Prevent removing the last admin
    if user.role == "admin" and body.role != "admin" and user.is_active:
        if await _active_admin_count(db) <= 1:
            raise ValidationError("Cannot remove the last admin", fields=["role"])

    user = await crud.update_user(db, user, role=body.role)
    logger.info("User %s role set to %s by %s", user.id, user.role, auth.user_id)
    return user


@router.put("/users/{user_id}/active", response_model=UserRead)
async def set_user_active(
    user_id: str,
    body: UserActiveUpdate,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    if user_id == auth.user_id and not body.is_active:
        raise ValidationError("Cannot deactivate yourself", fields=["is_active"])

    user = await crud.get_user(db, user_id)
    user = await crud.update_user(db, user, is_active=body.is_active)
    if not body.is_active:
        await remove_all_user_sessions(user.id, db)
    return user
