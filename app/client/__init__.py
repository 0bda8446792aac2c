"""Dashboard-side data layer: cached contexts over the listings API."""

from app.client.result import ErrorKind, Result
from app.client.property_context import PropertyContext
from app.client.schedule_context import ScheduleContext
from app.client.user_context import UserContext

__all__ = ["ErrorKind", "Result", "PropertyContext", "ScheduleContext", "UserContext"]
