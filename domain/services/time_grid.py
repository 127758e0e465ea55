from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List

from domain.models import DAYS_IN_WEEK, HOURS_IN_DAY, GridSlot, TimeMarker

WEEKDAY_NUMBERS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def start_of_week(day: date, first_weekday: str = "sunday") -> date:
    first = WEEKDAY_NUMBERS[first_weekday]
    return day - timedelta(days=(day.weekday() - first) % DAYS_IN_WEEK)


def shift_week(week_start: date, weeks: int) -> date:
    return week_start + timedelta(weeks=weeks)


def minutes_of_day(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class TimeGridMapper:
    """Maps clock times onto the vertical axis of a day column and back.

    Offsets are expressed in the caller's units: one hour spans ``unit_height``.
    Only the time of day matters; seconds are ignored.
    """

    unit_height: float = 64.0

    @property
    def day_height(self) -> float:
        return HOURS_IN_DAY * self.unit_height

    def minutes_to_units(self, minutes: int) -> float:
        return minutes / 60 * self.unit_height

    def to_offset(self, value: datetime | time) -> float:
        return self.minutes_to_units(minutes_of_day(value))

    def to_extent(self, start: datetime | time, end: datetime | time) -> float:
        return self.minutes_to_units(minutes_of_day(end) - minutes_of_day(start))

    def to_time(self, offset: float, day: date) -> datetime:
        minutes = int(offset / self.unit_height * 60)
        return datetime.combine(day, time.min) + timedelta(minutes=minutes)

    def hour_lines(self) -> List[float]:
        return [hour * self.unit_height for hour in range(1, HOURS_IN_DAY)]

    def resolve_slot(self, week_start: date, x_fraction: float, offset: float) -> GridSlot:
        day_index = min(max(int(x_fraction * DAYS_IN_WEEK), 0), DAYS_IN_WEEK - 1)
        day = week_start + timedelta(days=day_index)
        return GridSlot(day=day, day_index=day_index, time=self.to_time(offset, day))

    def now_marker(self, week_start: date, now: datetime) -> TimeMarker | None:
        today = now.date()
        if today < week_start or today >= week_start + timedelta(days=DAYS_IN_WEEK):
            return None
        return TimeMarker(day_index=(today - week_start).days, offset=self.to_offset(now))
