from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Set

from domain.models import CalendarEvent, EventPlacement
from domain.ports.layout import EventLayoutEngine
from domain.services.event_overlap import build_overlap_adjacency, overlaps
from domain.services.time_grid import TimeGridMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnLayoutConfig:
    unit_height: float = 64.0


@dataclass
class _WorkingPlacement:
    event: CalendarEvent
    top: float
    height: float
    column: int
    left: float = 0.0
    width: float = 1.0
    column_count: int = 1

    def freeze(self) -> EventPlacement:
        return EventPlacement(
            event=self.event,
            top=self.top,
            height=self.height,
            left=self.left,
            width=self.width,
            column=self.column,
            column_count=self.column_count,
        )


class ColumnEventLayoutEngine(EventLayoutEngine):
    """Side-by-side column layout for one day of calendar events.

    Events are taken in the order given. Each one lands in the lowest column
    not held by an earlier event it collides with, then every transitively
    overlapping group is split into ``max(column) + 1`` equal lanes.
    """

    def __init__(self, config: ColumnLayoutConfig | None = None) -> None:
        self.config = config or ColumnLayoutConfig()
        self.mapper = TimeGridMapper(unit_height=self.config.unit_height)

    def build_day(self, events: Sequence[CalendarEvent]) -> List[EventPlacement]:
        if not events:
            return []
        working = self._assign_columns(events)
        groups = self._merge_overlap_groups(events)
        placements: List[EventPlacement] = []
        for group in groups:
            column_count = max(working[idx].column for idx in group) + 1
            for idx in group:
                item = working[idx]
                item.left = item.column / column_count
                item.width = 1.0 / column_count
                item.column_count = column_count
                placements.append(item.freeze())
        logger.debug(
            "Laid out %d events in %d overlap groups", len(placements), len(groups)
        )
        return placements

    def _assign_columns(self, events: Sequence[CalendarEvent]) -> List[_WorkingPlacement]:
        assigned: List[_WorkingPlacement] = []
        for event in events:
            occupied = {
                placed.column for placed in assigned if overlaps(event, placed.event)
            }
            column = 0
            while column in occupied:
                column += 1
            assigned.append(
                _WorkingPlacement(
                    event=event,
                    top=self.mapper.to_offset(event.start),
                    height=self.mapper.to_extent(event.start, event.end),
                    column=column,
                )
            )
        return assigned

    def _merge_overlap_groups(self, events: Sequence[CalendarEvent]) -> List[List[int]]:
        adjacency = build_overlap_adjacency(events)
        processed: Set[int] = set()
        groups: List[List[int]] = []
        for idx in range(len(events)):
            if idx in processed:
                continue
            group = [idx]
            seen: Set[int] = {idx}
            queue = deque([idx])
            while queue:
                current = queue.popleft()
                for neighbor in adjacency[current]:
                    if neighbor not in seen:
                        seen.add(neighbor)
                        group.append(neighbor)
                        queue.append(neighbor)
            processed.update(group)
            groups.append(group)
        return groups
