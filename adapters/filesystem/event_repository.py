from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from adapters.filesystem.json_utils import load_json_payload, write_json_atomic
from domain.models import CalendarEvent, EventCollection, WeekLayout
from domain.ports.repositories import EventSource, WeekLayoutWriter
from domain.services.layout_payload import week_layout_to_dict

_EVENT_LIST_ADAPTER = TypeAdapter(List[CalendarEvent])


class FileSystemEventSource(EventSource):
    def load_all(self, path: Path) -> List[CalendarEvent]:
        payload = load_json_payload(path)
        if isinstance(payload, dict):
            return list(EventCollection.model_validate(payload).events)
        return _EVENT_LIST_ADAPTER.validate_python(payload)


class FileSystemWeekLayoutWriter(WeekLayoutWriter):
    def save(self, layout: WeekLayout, path: Path) -> None:
        write_json_atomic(path, week_layout_to_dict(layout))
