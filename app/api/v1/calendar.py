"""Calendar endpoints (FullCalendar event shape), scoped to the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import not_found
from app.api.v1.auth import get_identity
from app.core.database import get_db
from app.models import CalendarEvent
from app.schemas.auth import IdentityContext, MessageResponse
from app.schemas.calendar import CalendarEventIn, CalendarEventOut
from app.services import calendar as service
from app.services.ownership import delete_owned, get_owned

router = APIRouter()


@router.get("", response_model=list[CalendarEventOut])
def list_events(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> list[CalendarEventOut]:
    return [service.to_out(e) for e in service.list_events(db, identity)]


@router.get("/{event_id}", response_model=CalendarEventOut)
def get_event(
    event_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> CalendarEventOut:
    event = get_owned(db, CalendarEvent, event_id, identity)
    if event is None:
        raise not_found("Calendar event")
    return service.to_out(event)


@router.post("", response_model=CalendarEventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    body: CalendarEventIn,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> CalendarEventOut:
    """
    Create an event. A date-only start begins at 00:00:00 and a date-only
    end finishes at 23:59:59.
    """
    return service.to_out(service.create_event(db, identity, body))


@router.put("/{event_id}", response_model=CalendarEventOut)
def update_event(
    event_id: int,
    body: CalendarEventIn,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> CalendarEventOut:
    event = service.update_event(db, event_id, identity, body)
    if event is None:
        raise not_found("Calendar event")
    return service.to_out(event)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    if not delete_owned(db, CalendarEvent, event_id, identity):
        db.rollback()
        raise not_found("Calendar event")
    db.commit()
    return MessageResponse(message="Calendar event deleted.")
