from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from typing import List

from domain.models import DAYS_IN_WEEK, CalendarEvent, DayLayout, WeekLayout
from domain.ports.layout import EventLayoutEngine
from domain.services.time_grid import TimeGridMapper, start_of_week

logger = logging.getLogger(__name__)


class BuildWeekLayout:
    def __init__(
        self,
        layout_engine: EventLayoutEngine,
        mapper: TimeGridMapper | None = None,
        first_weekday: str = "sunday",
    ) -> None:
        self._layout_engine = layout_engine
        self._mapper = mapper or TimeGridMapper()
        self._first_weekday = first_weekday

    def week_start(self, day: date) -> date:
        return start_of_week(day, self._first_weekday)

    def build(
        self,
        events: Sequence[CalendarEvent],
        day: date,
        now: datetime | None = None,
    ) -> WeekLayout:
        week_start = self.week_start(day)
        buckets = self._bucket_by_day(events, week_start)
        days: List[DayLayout] = []
        for day_index, day_events in enumerate(buckets):
            # Stable sort: events starting together keep their input order.
            ordered = sorted(day_events, key=lambda event: event.start)
            placements = self._layout_engine.build_day(ordered) if ordered else []
            days.append(
                DayLayout(
                    day=week_start + timedelta(days=day_index),
                    day_index=day_index,
                    placements=placements,
                )
            )
        logger.debug(
            "Built week layout for %s with %d events",
            week_start.isoformat(),
            sum(len(bucket) for bucket in buckets),
        )
        return WeekLayout(
            week_start=week_start,
            day_height=self._mapper.day_height,
            days=days,
            now_marker=self._mapper.now_marker(week_start, now) if now else None,
        )

    def _bucket_by_day(
        self, events: Sequence[CalendarEvent], week_start: date
    ) -> List[List[CalendarEvent]]:
        window_start = datetime.combine(week_start, time.min)
        window_end = window_start + timedelta(days=DAYS_IN_WEEK)
        buckets: List[List[CalendarEvent]] = [[] for _ in range(DAYS_IN_WEEK)]
        for event in events:
            start = event.start.replace(tzinfo=None)
            if start < window_start or start >= window_end:
                continue
            buckets[(start.date() - week_start).days].append(event)
        return buckets
