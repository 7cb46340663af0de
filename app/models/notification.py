"""ORM model for in-app notifications addressed to a single user."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from app.models.base import Base


class Notification(Base):
    """
    One notification for one user.

    type: 'project', 'task', 'client' or 'system'. entity_id/entity_type
    optionally point at the record the notification is about.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(16), nullable=False, default="system")
    read = Column(Boolean, nullable=False, default=False)
    entity_id = Column(Integer, nullable=True)
    entity_type = Column(String(50), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
