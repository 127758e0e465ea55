from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.columns import ColumnLayoutConfig
from domain.services.time_grid import WEEKDAY_NUMBERS, TimeGridMapper

DEFAULT_CONFIG_PATH = Path("config/weekgrid.yaml")


class GridSettings(BaseModel):
    title: str = "Weekly Calendar"
    unit_height: float = Field(default=64.0, gt=0)
    first_weekday: str = "sunday"
    drop_invalid_events: bool = False

    @field_validator("first_weekday", mode="before")
    @classmethod
    def normalize_first_weekday(cls, value: object) -> str:
        normalized = str(value).strip().lower() if value else "sunday"
        if normalized not in WEEKDAY_NUMBERS:
            msg = f"grid.first_weekday must be a weekday name, got {value!r}"
            raise ValueError(msg)
        return normalized

    def to_layout_config(self) -> ColumnLayoutConfig:
        return ColumnLayoutConfig(unit_height=self.unit_height)

    def to_mapper(self) -> TimeGridMapper:
        return TimeGridMapper(unit_height=self.unit_height)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WEEKGRID_", env_nested_delimiter="__")

    grid: GridSettings = GridSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("WEEKGRID_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
