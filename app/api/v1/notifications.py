"""Notification endpoints. Every query is scoped to the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import not_found
from app.api.v1.auth import get_identity, require_admin
from app.core.database import get_db
from app.models import Notification
from app.schemas.auth import IdentityContext, MessageResponse
from app.schemas.notifications import (
    BroadcastResponse,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationOut,
    UnreadCountResponse,
)
from app.services import notifications as service
from app.services.ownership import assert_owned, delete_owned

router = APIRouter()


@router.get("", response_model=list[NotificationOut])
def list_notifications(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> list[Notification]:
    """The 50 most recent notifications, newest first."""
    return service.list_inbox(db, identity)


@router.get("/unread", response_model=list[NotificationOut])
def list_unread(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> list[Notification]:
    return service.list_unread(db, identity)


@router.get("/unread/count", response_model=UnreadCountResponse)
def unread_count(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> UnreadCountResponse:
    return UnreadCountResponse(count=service.count_unread(db, identity))


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> MarkAllReadResponse:
    updated = service.mark_all_read(db, identity)
    return MarkAllReadResponse(message="All notifications marked as read.", updated=updated)


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def create_notification(
    body: NotificationCreate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> Notification:
    """Create a notification for the requester."""
    notification = service.create_notification(db, identity.account_id, body)
    db.commit()
    db.refresh(notification)
    return notification


@router.post("/broadcast", response_model=BroadcastResponse, status_code=status.HTTP_201_CREATED)
def broadcast(
    body: NotificationCreate,
    _admin: Annotated[IdentityContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> BroadcastResponse:
    """Send one notification to every account (admin only)."""
    created = service.notify_all_users(db, body)
    return BroadcastResponse(message="Notification sent to all users.", created=created)


@router.get("/{notification_id}", response_model=NotificationOut)
def get_notification(
    notification_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> Notification:
    return assert_owned(db, Notification, notification_id, identity)


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_read(
    notification_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> Notification:
    notification = service.mark_read(db, notification_id, identity)
    if notification is None:
        raise not_found("Notification")
    return notification


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    if not delete_owned(db, Notification, notification_id, identity):
        db.rollback()
        raise not_found("Notification")
    db.commit()
    return MessageResponse(message="Notification deleted.")
