from __future__ import annotations

from collections.abc import Sequence
from typing import Dict, List

from domain.models import CalendarEvent


def overlaps(a: CalendarEvent, b: CalendarEvent) -> bool:
    # Half-open [start, end): touching endpoints do not collide.
    return a.start_minutes() < b.end_minutes() and b.start_minutes() < a.end_minutes()


def build_overlap_adjacency(events: Sequence[CalendarEvent]) -> Dict[int, List[int]]:
    adjacency: Dict[int, List[int]] = {idx: [] for idx in range(len(events))}
    for idx, event in enumerate(events):
        for other_idx in range(idx + 1, len(events)):
            if overlaps(event, events[other_idx]):
                adjacency[idx].append(other_idx)
                adjacency[other_idx].append(idx)
    for neighbors in adjacency.values():
        neighbors.sort()
    return adjacency
