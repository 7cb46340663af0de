"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.calendar_event import CalendarEvent
from app.models.notification import Notification
from app.models.user import User
from app.models.user_settings import UserSettings

__all__ = ["Base", "CalendarEvent", "Notification", "User", "UserSettings"]
