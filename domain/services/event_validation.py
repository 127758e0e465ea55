from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models import CalendarEvent, interval_problem

logger = logging.getLogger(__name__)


class InvalidEventError(ValueError):
    def __init__(self, event: CalendarEvent) -> None:
        self.event = event
        reason = interval_problem(event.start, event.end) or "interval is not drawable"
        super().__init__(
            f"Event {event.id} ({event.title!r}) is invalid, {reason}: "
            f"{event.start.isoformat()} -> {event.end.isoformat()}"
        )


class EventDraft(BaseModel):
    """A new event as entered by a user, before it reaches the store."""

    title: str = Field(..., min_length=1)
    start: datetime
    end: datetime
    color: int = 0xFF7986CB
    location: Optional[str] = None
    place_status: Optional[str] = None
    ai_advice: Optional[str] = None

    @field_validator("title", mode="after")
    @classmethod
    def ensure_title_not_blank(cls, title: str) -> str:
        if not title.strip():
            msg = "title must not be blank"
            raise ValueError(msg)
        return title

    @field_validator("location", mode="after")
    @classmethod
    def normalize_location(cls, location: Optional[str]) -> Optional[str]:
        if location is None or not location.strip():
            return None
        return location

    @model_validator(mode="after")
    def ensure_drawable_interval(self) -> "EventDraft":
        problem = interval_problem(self.start, self.end)
        if problem is not None:
            raise ValueError(problem)
        return self

    def to_event(self, event_id: int = 0) -> CalendarEvent:
        return CalendarEvent(id=event_id, **self.model_dump())


def ensure_well_formed(
    events: Iterable[CalendarEvent], *, drop_invalid: bool = False
) -> List[CalendarEvent]:
    accepted: List[CalendarEvent] = []
    for event in events:
        if event.is_well_formed():
            accepted.append(event)
            continue
        if not drop_invalid:
            raise InvalidEventError(event)
        logger.warning("Dropping event %s with an undrawable interval", event.id)
    return accepted
