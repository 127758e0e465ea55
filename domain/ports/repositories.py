from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import CalendarEvent, WeekLayout


class EventSource(Protocol):
    def load_all(self, path: Path) -> Sequence[CalendarEvent]: ...


class WeekLayoutWriter(Protocol):
    def save(self, layout: WeekLayout, path: Path) -> None: ...
