"""FastAPI dependency providers for auth and role enforcement."""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.engine import get_db
from app.errors import ForbiddenError
from app.services.auth import AuthContext, get_current_user

logger = logging.getLogger(__name__)


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    """Require a valid bearer token or session cookie. Returns AuthContext."""
    return await get_current_user(request, db)


def require_role(*allowed_roles: str):
    """Factory: returns a dependency that enforces role membership."""
    async def _check(auth: AuthContext = Depends(require_auth)) -> AuthContext:
        if auth.role not in allowed_roles:
            logger.warning("Role %s denied (allowed: %s) for user %s", auth.role, ", ".join(allowed_roles), auth.user_id)
            raise ForbiddenError("Insufficient permissions")
        return auth
    return _check


_auth_settings = get_settings().auth

require_property_editor = require_role(*_auth_settings.property_roles)
require_schedule_admin = require_role(*_auth_settings.schedule_roles)
require_admin = require_role("admin")
