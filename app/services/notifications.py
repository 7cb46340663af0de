"""Notification service: per-user inbox operations and broadcast to every account."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models import Notification, User
from app.schemas.auth import IdentityContext
from app.schemas.notifications import NotificationCreate
from app.services.ownership import get_owned, owned_query

logger = logging.getLogger(__name__)

# The inbox shows the most recent notifications only.
INBOX_LIMIT = 50


def list_inbox(db: Session, identity: IdentityContext) -> list[Notification]:
    return (
        owned_query(db, Notification, identity)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(INBOX_LIMIT)
        .all()
    )


def list_unread(db: Session, identity: IdentityContext) -> list[Notification]:
    return (
        owned_query(db, Notification, identity)
        .filter(Notification.read.is_(False))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


def count_unread(db: Session, identity: IdentityContext) -> int:
    return owned_query(db, Notification, identity).filter(Notification.read.is_(False)).count()


def create_notification(db: Session, user_id: int, body: NotificationCreate) -> Notification:
    """Add one notification for user_id. Caller commits."""
    notification = Notification(
        user_id=user_id,
        title=body.title,
        message=body.message,
        type=body.type,
        read=False,
        entity_id=body.entity_id,
        entity_type=body.entity_type,
    )
    db.add(notification)
    return notification


def mark_read(db: Session, notification_id: int, identity: IdentityContext) -> Notification | None:
    """Mark one owned notification read; None if missing or not owned."""
    notification = get_owned(db, Notification, notification_id, identity, for_update=True)
    if notification is None:
        return None
    notification.read = True
    notification.updated_at = datetime.now(UTC)
    db.commit()
    return notification


def mark_all_read(db: Session, identity: IdentityContext) -> int:
    updated = (
        owned_query(db, Notification, identity)
        .filter(Notification.read.is_(False))
        .update(
            {Notification.read: True, Notification.updated_at: datetime.now(UTC)},
            synchronize_session=False,
        )
    )
    db.commit()
    return updated


def notify_all_users(db: Session, body: NotificationCreate) -> int:
    """Create one copy of the notification per existing account in a single transaction."""
    user_ids = [row.id for row in db.query(User.id).order_by(User.id).all()]
    for user_id in user_ids:
        create_notification(db, user_id, body)
    db.commit()
    logger.info(
        "Broadcast notification created: recipient_count=%s, type=%s",
        len(user_ids),
        body.type,
    )
    return len(user_ids)
