"""Schemas for notification endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal["project", "task", "client", "system"]


class NotificationCreate(BaseModel):
    """
    A notification for the requester.

    There is no user_id field: the recipient is always the
    authenticated identity (admins use the broadcast endpoint instead).
    """

    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: NotificationType = "system"
    entity_id: int | None = None
    entity_type: str | None = Field(default=None, max_length=50)


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    read: bool
    entity_id: int | None = None
    entity_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    message: str
    updated: int


class BroadcastResponse(BaseModel):
    message: str
    created: int
