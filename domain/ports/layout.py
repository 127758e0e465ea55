from __future__ import annotations

from collections.abc import Sequence
from typing import List, Protocol

from domain.models import CalendarEvent, EventPlacement


class EventLayoutEngine(Protocol):
    def build_day(self, events: Sequence[CalendarEvent]) -> List[EventPlacement]:
        ...
