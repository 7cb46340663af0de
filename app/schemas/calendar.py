"""Schemas for calendar events, shaped for FullCalendar (title/start/end/extendedProps)."""

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, Field, field_validator, model_validator

# Date-only values are widened to the whole day.
DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


def _parse_bound(value: str | datetime | None, default_time: time) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    value = value.strip()
    if "T" not in value:
        return datetime.combine(date.fromisoformat(value), default_time)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ExtendedPropsIn(BaseModel):
    calendar: str = Field(..., min_length=1, max_length=50, description="Colour/status label")


class CalendarEventIn(BaseModel):
    """Create/update payload. start is required; end is optional."""

    title: str = Field(..., min_length=1, max_length=255)
    start: datetime
    end: datetime | None = None
    extendedProps: ExtendedPropsIn

    @field_validator("start", mode="before")
    @classmethod
    def parse_start(cls, v: object) -> object:
        if isinstance(v, str):
            try:
                return _parse_bound(v, DAY_START)
            except ValueError as e:
                raise ValueError(f"Invalid start date: {v!r}") from e
        return v

    @field_validator("end", mode="before")
    @classmethod
    def parse_end(cls, v: object) -> object:
        if isinstance(v, str):
            try:
                return _parse_bound(v, DAY_END)
            except ValueError as e:
                raise ValueError(f"Invalid end date: {v!r}") from e
        return v

    @model_validator(mode="after")
    def end_not_before_start(self) -> "CalendarEventIn":
        if self.end is not None and _as_utc(self.end) < _as_utc(self.start):
            raise ValueError("end must not be before start")
        return self


class ExtendedPropsOut(BaseModel):
    calendar: str
    startTime: str | None = None
    endTime: str | None = None


class CalendarEventOut(BaseModel):
    id: int
    title: str
    start: datetime
    end: datetime | None = None
    extendedProps: ExtendedPropsOut


def _as_utc(dt: datetime) -> datetime:
    # Naive values are taken as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
