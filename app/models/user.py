"""ORM model for user accounts (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is stored lower-cased; role: 'admin' or 'user'.
    password_hash never leaves the service layer.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    email_verified = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    settings = relationship(
        "UserSettings",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications = relationship(
        "Notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    calendar_events = relationship(
        "CalendarEvent",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
