from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

ScheduleStatus = Literal["pending", "confirmed", "cancelled", "completed"]


class ScheduleCreate(BaseModel):
    property_id: str
    scheduled_date: datetime
    contact_method: Literal["email", "phone"] = "email"
    message: str = ""


class ScheduleStatusUpdate(BaseModel):
    status: ScheduleStatus


class ScheduleRead(BaseModel):
    id: str
    property_id: str | None = None
    property_title: str
    property_address: str
    user_id: str
    user_name: str
    user_email: str
    scheduled_date: datetime
    contact_method: str
    message: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
