from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient

from app.config import AppSettings
from app.web_main import create_app
from tests.helpers.event_fixtures import event_payload


def _client(settings: AppSettings) -> TestClient:
    return TestClient(create_app(settings))


def test_grid_reports_configured_scale(app_settings: AppSettings) -> None:
    response = _client(app_settings).get("/api/grid")

    assert response.status_code == 200
    body = response.json()
    assert body["unit_height"] == 60.0
    assert body["day_height"] == 1440.0
    assert len(body["hour_lines"]) == 23
    assert body["first_weekday"] == "sunday"


def test_day_layout_splits_overlapping_events(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/layout/day",
        json={
            "events": [
                event_payload(1, "2024-03-13T09:00:00", "2024-03-13T10:00:00"),
                event_payload(2, "2024-03-13T09:30:00", "2024-03-13T10:30:00"),
            ]
        },
    )

    assert response.status_code == 200
    placements = response.json()["placements"]
    assert [(item["event"]["id"], item["left"], item["width"]) for item in placements] == [
        (1, 0.0, 0.5),
        (2, 0.5, 0.5),
    ]
    assert placements[0]["top"] == 540.0
    assert placements[0]["height"] == 60.0


def test_empty_day_layout(app_settings: AppSettings) -> None:
    response = _client(app_settings).post("/api/layout/day", json={"events": []})

    assert response.status_code == 200
    assert response.json() == {"placements": []}


def test_malformed_event_is_rejected(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/layout/day",
        json={"events": [event_payload(9, "2024-03-13T10:00:00", "2024-03-13T09:00:00")]},
    )

    assert response.status_code == 422
    assert "Event 9" in response.json()["detail"]


def test_malformed_event_can_be_dropped(
    app_settings_factory: Callable[..., AppSettings],
) -> None:
    settings = app_settings_factory(drop_invalid_events=True)
    response = _client(settings).post(
        "/api/layout/day",
        json={
            "events": [
                event_payload(1, "2024-03-13T09:00:00", "2024-03-13T10:00:00"),
                event_payload(9, "2024-03-13T10:00:00", "2024-03-13T09:00:00"),
            ]
        },
    )

    assert response.status_code == 200
    assert [item["event"]["id"] for item in response.json()["placements"]] == [1]


def test_week_layout_with_offset_and_now_marker(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/layout/week",
        json={
            "day": "2024-03-06",
            "week_offset": 1,
            "now": "2024-03-13T12:00:00",
            "events": [
                event_payload(1, "2024-03-13T09:00:00", "2024-03-13T11:00:00"),
                event_payload(2, "2024-03-13T09:30:00", "2024-03-13T10:00:00"),
                event_payload(3, "2024-03-13T10:30:00", "2024-03-13T11:30:00"),
                event_payload(4, "2024-03-20T09:00:00", "2024-03-20T10:00:00"),
            ],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["week_start"] == "2024-03-10"
    assert body["now_marker"] == {"day_index": 3, "offset": 720.0}
    wednesday = body["days"][3]["placements"]
    assert {item["event"]["id"] for item in wednesday} == {1, 2, 3}
    assert {item["column_count"] for item in wednesday} == {2}
    assert sum(len(day["placements"]) for day in body["days"]) == 3


def test_grid_slot_resolves_drag_point(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/grid/slot",
        json={"week_start": "2024-03-10", "x_fraction": 0.99, "offset": 630.0},
    )

    assert response.status_code == 200
    assert response.json() == {
        "day": "2024-03-16",
        "day_index": 6,
        "time": "2024-03-16T10:30:00",
    }


def test_grid_slot_validates_fraction(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/grid/slot",
        json={"week_start": "2024-03-10", "x_fraction": 1.5, "offset": 0.0},
    )

    assert response.status_code == 422


def test_mixed_timezone_event_is_rejected(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/layout/day",
        json={"events": [event_payload(5, "2024-03-13T09:00:00", "2024-03-13T10:00:00Z")]},
    )

    assert response.status_code == 422
    assert "timezone" in response.json()["detail"]


def test_event_crossing_midnight_is_rejected(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/layout/day",
        json={"events": [event_payload(6, "2024-03-13T23:00:00", "2024-03-14T01:00:00")]},
    )

    assert response.status_code == 422
    assert "same day" in response.json()["detail"]


def test_event_draft_is_normalized(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/events/draft",
        json={
            "title": "Lunch",
            "start": "2024-03-13T12:00:00",
            "end": "2024-03-13T13:00:00",
            "location": " ",
        },
    )

    assert response.status_code == 200
    event = response.json()["event"]
    assert event["title"] == "Lunch"
    assert event["location"] is None
    assert event["end"] == "2024-03-13T13:00:00"


def test_event_draft_with_bad_interval_is_rejected(app_settings: AppSettings) -> None:
    response = _client(app_settings).post(
        "/api/events/draft",
        json={"title": "Standup", "start": "2024-03-13T10:00:00", "end": "2024-03-13T10:00:00Z"},
    )

    assert response.status_code == 422
