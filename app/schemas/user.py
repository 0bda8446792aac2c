from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Role = Literal["buyer", "seller", "agent", "admin"]


class RegisterRequest(BaseModel):
    email: str
    password: str
    confirm_password: str
    display_name: str = ""
    phone: str = ""
    # agent/admin are granted by an admin, never self-assigned
    role: Literal["buyer", "seller"] = "buyer"


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    id: str
    email: str
    display_name: str
    phone: str = ""
    role: str
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserRoleUpdate(BaseModel):
    role: Role


class UserActiveUpdate(BaseModel):
    is_active: bool
