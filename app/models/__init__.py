"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import User, UserSession
from app.models.property import Property
from app.models.schedule import Schedule

__all__ = ["Base", "User", "UserSession", "Property", "Schedule"]
