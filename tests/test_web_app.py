"""Tests for the Flask map surface."""

import pytest

from bikeflow.viz.app.single import create_app
from bikeflow.viz.controller import InteractionController


@pytest.fixture
def controller(abc_stations, day_trips) -> InteractionController:
    c = InteractionController()
    c.load(lambda: abc_stations, lambda: day_trips)
    return c


@pytest.fixture
def client(controller):
    app = create_app(controller, title="Test map")
    app.config["TESTING"] = True
    return app.test_client()


def test_index_renders_markers_with_tooltips(client) -> None:
    """Given a loaded session, when the page is requested, then the folium document has the tooltips."""
    resp = client.get("/")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "6 trips (3 departures, 3 arrivals)" in html
    assert 'id="time-slider"' in html
    assert "(any time)" in html
    assert "Test map" in html


def test_index_applies_time_filter(client, controller) -> None:
    """Given ?t=510, when the page is requested, then the controller is filtered and labelled."""
    resp = client.get("/?t=510")

    html = resp.get_data(as_text=True)
    assert controller.filter_minute == 510
    assert "8:30 AM" in html
    assert "2 trips (2 departures, 0 arrivals)" in html


def test_index_ignores_bad_time(client, controller) -> None:
    """Given a garbage t, when the page is requested, then the current filter is kept."""
    client.get("/?t=600")

    resp = client.get("/?t=banana")

    assert resp.status_code == 200
    assert controller.filter_minute == 600


def test_api_stations_returns_snapshot(client) -> None:
    """Given ?t=-1, when the API is called, then every station is listed with its style."""
    data = client.get("/api/stations?t=-1").get_json()

    assert data["label"] == "(any time)"
    assert [s["short_name"] for s in data["stations"]] == ["A", "B", "C"]
    assert data["radius_range"] == [0.0, 25.0]


def test_api_stations_rejects_out_of_range(client) -> None:
    """Given t=5000, when the API is called, then 400 with an error message."""
    resp = client.get("/api/stations?t=5000")

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_api_positions_projects_every_marker(client, controller) -> None:
    """Given a viewport, when positions are requested, then each marker has screen coordinates."""
    before = controller.last_bind

    data = client.get(
        "/api/positions?lat=42.36&lon=-71.09&zoom=12&width=800&height=600"
    ).get_json()

    assert data["ready"] is True
    assert data["positions"]["A"] == pytest.approx([400.0, 300.0])
    assert set(data["positions"]) == {"A", "B", "C"}
    assert controller.last_bind is before


def test_api_positions_rejects_bad_viewport(client) -> None:
    """Given a non-numeric zoom, when positions are requested, then 400."""
    assert client.get("/api/positions?zoom=far").status_code == 400


def test_failed_session_serves_an_empty_map() -> None:
    """Given a session whose load failed, when the page is requested, then it renders with no markers."""
    def broken():
        raise ValueError("bad json")

    c = InteractionController()
    c.load(broken, broken)
    client = create_app(c).test_client()

    resp = client.get("/?t=600")

    assert resp.status_code == 200
    assert "trips (" not in resp.get_data(as_text=True)
    assert client.get("/api/stations").get_json()["stations"] == []


def test_api_positions_clamps_huge_zoom(client) -> None:
    """Given an absurd zoom, when positions are requested, then it is clamped instead of failing."""
    resp = client.get("/api/positions?lat=42.36&lon=-71.09&zoom=5000&width=800&height=600")

    assert resp.status_code == 200
    assert resp.get_json()["positions"]["A"] == pytest.approx([400.0, 300.0])
