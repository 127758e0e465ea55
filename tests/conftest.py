from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from app.config import AppSettings, GridSettings


def _clear_weekgrid_env() -> None:
    for key in list(os.environ):
        if key.startswith("WEEKGRID_"):
            os.environ.pop(key, None)


_clear_weekgrid_env()


@pytest.fixture(autouse=True)
def clear_weekgrid_env() -> Generator[None, None, None]:
    _clear_weekgrid_env()
    yield
    _clear_weekgrid_env()


@pytest.fixture
def grid_settings() -> GridSettings:
    return GridSettings(
        title="Test Calendar",
        unit_height=60.0,
        first_weekday="sunday",
        drop_invalid_events=False,
    )


@pytest.fixture
def grid_settings_factory(grid_settings: GridSettings) -> Callable[..., GridSettings]:
    def _factory(**overrides: object) -> GridSettings:
        return grid_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(grid_settings: GridSettings) -> AppSettings:
    return AppSettings(grid=grid_settings)


@pytest.fixture
def app_settings_factory(
    grid_settings_factory: Callable[..., GridSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(grid=grid_settings_factory(**overrides))

    return _factory
