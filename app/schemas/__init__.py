"""Pydantic request/response schemas."""

from app.schemas.property import Location, PropertyCreate, PropertyUpdate, PropertyRead
from app.schemas.schedule import ScheduleCreate, ScheduleStatusUpdate, ScheduleRead
from app.schemas.user import (
    RegisterRequest, LoginRequest, UserRead, UserRoleUpdate, UserActiveUpdate,
)

__all__ = [
    "Location", "PropertyCreate", "PropertyUpdate", "PropertyRead",
    "ScheduleCreate", "ScheduleStatusUpdate", "ScheduleRead",
    "RegisterRequest", "LoginRequest", "UserRead", "UserRoleUpdate", "UserActiveUpdate",
]
