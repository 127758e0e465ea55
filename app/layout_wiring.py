from __future__ import annotations

from adapters.layout.columns import ColumnEventLayoutEngine
from app.config import AppSettings
from domain.ports.layout import EventLayoutEngine
from domain.services.build_week_layout import BuildWeekLayout


def build_layout_engine(settings: AppSettings) -> EventLayoutEngine:
    return ColumnEventLayoutEngine(settings.grid.to_layout_config())


def build_week_builder(settings: AppSettings) -> BuildWeekLayout:
    return BuildWeekLayout(
        build_layout_engine(settings),
        mapper=settings.grid.to_mapper(),
        first_weekday=settings.grid.first_weekday,
    )
