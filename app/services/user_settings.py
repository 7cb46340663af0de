"""Per-account preferences. Always addressed by the requester's id, never by row id."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models import UserSettings
from app.schemas.auth import IdentityContext
from app.schemas.users import SettingsOut
from app.services.ownership import owned_query


def get_settings_row(db: Session, identity: IdentityContext, for_update: bool = False) -> UserSettings | None:
    q = owned_query(db, UserSettings, identity)
    if for_update:
        q = q.with_for_update()
    return q.one_or_none()


def read_settings(db: Session, identity: IdentityContext) -> SettingsOut:
    """Stored preferences, or the defaults when the user has never saved any."""
    row = get_settings_row(db, identity)
    if row is None:
        return SettingsOut()
    return SettingsOut.model_validate(row)


def update_settings(db: Session, identity: IdentityContext, **changes: object) -> SettingsOut:
    """Upsert the requester's settings row with the given column values."""
    row = get_settings_row(db, identity, for_update=True)
    if row is None:
        row = UserSettings(user_id=identity.account_id, **SettingsOut().model_dump())
        db.add(row)
    else:
        row.updated_at = datetime.now(UTC)
    for name, value in changes.items():
        setattr(row, name, value)
    db.commit()
    db.refresh(row)
    return SettingsOut.model_validate(row)
