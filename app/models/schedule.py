from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ULIDMixin


class Schedule(Base, ULIDMixin):
    """A viewing appointment for a property."""

    __tablename__ = "schedules"

    # Nullable so an appointment outlives a deleted listing
    property_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    property_title: Mapped[str] = mapped_column(String(255), default="")
    property_address: Mapped[str] = mapped_column(String(500), default="")
    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    user_name: Mapped[str] = mapped_column(String(255), default="")
    user_email: Mapped[str] = mapped_column(String(255), default="")
    scheduled_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    contact_method: Mapped[str] = mapped_column(String(10), default="email")  # email | phone
    message: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
