from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DAYS_IN_WEEK = 7
HOURS_IN_DAY = 24


def interval_problem(start: datetime, end: datetime) -> Optional[str]:
    """Why ``start``..``end`` cannot be drawn inside one day column, or ``None``."""
    if (start.tzinfo is None) != (end.tzinfo is None):
        return "start and end must both carry a timezone or both omit it"
    if end <= start:
        return "end must be after start"
    if end.date() != start.date():
        return "end must fall on the same day as start"
    return None


class CalendarEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    title: str
    start: datetime
    end: datetime
    color: int = 0xFF7986CB
    location: Optional[str] = None
    place_status: Optional[str] = None
    ai_advice: Optional[str] = None

    def is_well_formed(self) -> bool:
        return interval_problem(self.start, self.end) is None

    def start_minutes(self) -> int:
        return self.start.hour * 60 + self.start.minute

    def end_minutes(self) -> int:
        return self.end.hour * 60 + self.end.minute


class EventCollection(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)


@dataclass(frozen=True)
class EventPlacement:
    event: CalendarEvent
    top: float
    height: float
    left: float
    width: float
    column: int
    column_count: int

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class DayLayout:
    day: date
    day_index: int
    placements: List[EventPlacement]


@dataclass(frozen=True)
class TimeMarker:
    day_index: int
    offset: float


@dataclass(frozen=True)
class GridSlot:
    day: date
    day_index: int
    time: datetime


@dataclass(frozen=True)
class WeekLayout:
    week_start: date
    day_height: float
    days: List[DayLayout]
    now_marker: TimeMarker | None = None

    def placements(self) -> List[EventPlacement]:
        return [placement for day in self.days for placement in day.placements]
