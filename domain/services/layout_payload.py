from __future__ import annotations

from typing import Any

from domain.models import DayLayout, EventPlacement, GridSlot, WeekLayout


def placement_to_dict(placement: EventPlacement) -> dict[str, Any]:
    event = placement.event
    return {
        "event": event.model_dump(mode="json"),
        "top": placement.top,
        "height": placement.height,
        "left": placement.left,
        "width": placement.width,
        "column": placement.column,
        "column_count": placement.column_count,
    }


def day_layout_to_dict(layout: DayLayout) -> dict[str, Any]:
    return {
        "day": layout.day.isoformat(),
        "day_index": layout.day_index,
        "placements": [placement_to_dict(item) for item in layout.placements],
    }


def week_layout_to_dict(layout: WeekLayout) -> dict[str, Any]:
    marker = layout.now_marker
    return {
        "week_start": layout.week_start.isoformat(),
        "day_height": layout.day_height,
        "days": [day_layout_to_dict(day) for day in layout.days],
        "now_marker": (
            {"day_index": marker.day_index, "offset": marker.offset} if marker else None
        ),
    }


def grid_slot_to_dict(slot: GridSlot) -> dict[str, Any]:
    return {
        "day": slot.day.isoformat(),
        "day_index": slot.day_index,
        "time": slot.time.isoformat(),
    }
