"""
Row ownership for user-scoped tables (notifications, calendar events, settings).

Every fetch, update and delete of an owned row is constrained by the primary key
AND user_id in the same statement. A row that exists but belongs to someone else
is indistinguishable from a row that does not exist.
"""

from typing import TypeVar

from sqlalchemy.orm import Query, Session

from app.models import CalendarEvent, Notification, UserSettings
from app.schemas.auth import IdentityContext

OwnedModel = TypeVar("OwnedModel", Notification, CalendarEvent, UserSettings)


class ResourceNotFound(Exception):
    """Raised when a user-scoped row is missing or not owned by the requester."""

    def __init__(self, resource: str, resource_id: int | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        self.message = f"{resource} not found"
        super().__init__(self.message)


def owned_query(db: Session, model: type[OwnedModel], identity: IdentityContext) -> Query:
    """Base query over the requester's rows only."""
    return db.query(model).filter(model.user_id == identity.account_id)


def get_owned(
    db: Session,
    model: type[OwnedModel],
    resource_id: int,
    identity: IdentityContext,
    for_update: bool = False,
) -> OwnedModel | None:
    """Fetch one row by id and owner in a single query; None when missing or not owned."""
    q = owned_query(db, model, identity).filter(model.id == resource_id)
    if for_update:
        q = q.with_for_update()
    return q.one_or_none()


def assert_owned(
    db: Session,
    model: type[OwnedModel],
    resource_id: int,
    identity: IdentityContext,
) -> OwnedModel:
    """Like get_owned but raises ResourceNotFound on a miss. Read-only."""
    row = get_owned(db, model, resource_id, identity)
    if row is None:
        raise ResourceNotFound(_resource_name(model), resource_id)
    return row


def delete_owned(
    db: Session,
    model: type[OwnedModel],
    resource_id: int,
    identity: IdentityContext,
) -> bool:
    """Delete with one DELETE ... WHERE id AND user_id; True if a row was removed. Caller commits."""
    deleted = (
        owned_query(db, model, identity)
        .filter(model.id == resource_id)
        .delete(synchronize_session=False)
    )
    return deleted == 1


def _resource_name(model: type) -> str:
    return {
        Notification: "Notification",
        CalendarEvent: "Calendar event",
        UserSettings: "Settings",
    }.get(model, model.__name__)
