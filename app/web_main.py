from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from app.config import AppSettings, load_settings
from app.layout_wiring import build_layout_engine, build_week_builder
from domain.models import CalendarEvent
from domain.ports.layout import EventLayoutEngine
from domain.services.build_week_layout import BuildWeekLayout
from domain.services.event_validation import EventDraft, InvalidEventError, ensure_well_formed
from domain.services.layout_payload import (
    grid_slot_to_dict,
    placement_to_dict,
    week_layout_to_dict,
)
from domain.services.time_grid import TimeGridMapper, shift_week

logger = logging.getLogger(__name__)


class DayLayoutRequest(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)


class WeekLayoutRequest(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)
    day: date
    week_offset: int = 0
    now: Optional[datetime] = None


class GridSlotRequest(BaseModel):
    week_start: date
    x_fraction: float = Field(..., ge=0.0, le=1.0)
    offset: float = Field(..., ge=0.0)


@dataclass(frozen=True)
class LayoutContext:
    settings: AppSettings
    mapper: TimeGridMapper
    day_engine: EventLayoutEngine
    week_builder: BuildWeekLayout


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.grid.title)
    app.state.layout_context = LayoutContext(
        settings=settings,
        mapper=settings.grid.to_mapper(),
        day_engine=build_layout_engine(settings),
        week_builder=build_week_builder(settings),
    )

    @app.get("/api/grid")
    def grid_info(context: LayoutContext = Depends(get_layout_context)) -> dict[str, Any]:
        return {
            "unit_height": context.mapper.unit_height,
            "day_height": context.mapper.day_height,
            "hour_lines": context.mapper.hour_lines(),
            "first_weekday": context.settings.grid.first_weekday,
        }

    @app.post("/api/grid/slot")
    def grid_slot(
        payload: GridSlotRequest, context: LayoutContext = Depends(get_layout_context)
    ) -> dict[str, Any]:
        slot = context.mapper.resolve_slot(payload.week_start, payload.x_fraction, payload.offset)
        return grid_slot_to_dict(slot)

    @app.post("/api/events/draft")
    def check_event_draft(draft: EventDraft) -> dict[str, Any]:
        return {"event": draft.to_event().model_dump(mode="json")}

    @app.post("/api/layout/day")
    def layout_day(
        payload: DayLayoutRequest, context: LayoutContext = Depends(get_layout_context)
    ) -> dict[str, Any]:
        events = accept_events(payload.events, context.settings)
        placements = context.day_engine.build_day(events)
        return {"placements": [placement_to_dict(item) for item in placements]}

    @app.post("/api/layout/week")
    def layout_week(
        payload: WeekLayoutRequest, context: LayoutContext = Depends(get_layout_context)
    ) -> dict[str, Any]:
        events = accept_events(payload.events, context.settings)
        week_start = shift_week(context.week_builder.week_start(payload.day), payload.week_offset)
        layout = context.week_builder.build(events, week_start, now=payload.now)
        return week_layout_to_dict(layout)

    return app


def get_layout_context(request: Request) -> LayoutContext:
    return request.app.state.layout_context


def accept_events(events: List[CalendarEvent], settings: AppSettings) -> List[CalendarEvent]:
    try:
        return ensure_well_formed(events, drop_invalid=settings.grid.drop_invalid_events)
    except InvalidEventError as exc:
        logger.info("Rejected layout request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


app = create_app(load_settings())
