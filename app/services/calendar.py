"""Calendar events: owner-scoped CRUD and conversion to the FullCalendar shape."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models import CalendarEvent
from app.schemas.auth import IdentityContext
from app.schemas.calendar import CalendarEventIn, CalendarEventOut, ExtendedPropsOut
from app.services.ownership import get_owned, owned_query


def _hhmm(value: datetime | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None


def to_out(event: CalendarEvent) -> CalendarEventOut:
    return CalendarEventOut(
        id=event.id,
        title=event.title,
        start=event.start_date,
        end=event.end_date,
        extendedProps=ExtendedPropsOut(
            calendar=event.calendar,
            startTime=_hhmm(event.start_date),
            endTime=_hhmm(event.end_date),
        ),
    )


def list_events(db: Session, identity: IdentityContext) -> list[CalendarEvent]:
    return (
        owned_query(db, CalendarEvent, identity)
        .order_by(CalendarEvent.start_date, CalendarEvent.id)
        .all()
    )


def create_event(db: Session, identity: IdentityContext, body: CalendarEventIn) -> CalendarEvent:
    event = CalendarEvent(
        user_id=identity.account_id,
        title=body.title,
        start_date=body.start,
        end_date=body.end,
        calendar=body.extendedProps.calendar,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def update_event(
    db: Session,
    event_id: int,
    identity: IdentityContext,
    body: CalendarEventIn,
) -> CalendarEvent | None:
    """Replace an owned event's fields; None if missing or not owned."""
    event = get_owned(db, CalendarEvent, event_id, identity, for_update=True)
    if event is None:
        return None
    event.title = body.title
    event.start_date = body.start
    event.end_date = body.end
    event.calendar = body.extendedProps.calendar
    event.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(event)
    return event
