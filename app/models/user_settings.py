"""ORM model for per-account preferences (one row per user at most)."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class UserSettings(Base):
    """Notification and privacy preferences; user_id is unique (zero-or-one per account)."""

    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    profile_visibility = Column(String(16), nullable=False, default="public")
    email_notifications = Column(Boolean, nullable=False, default=True)
    app_notifications = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="settings")
