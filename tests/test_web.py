"""Tests for the FastAPI interface."""

import pytest
from fastapi.testclient import TestClient

from railroute.web.app import create_app


@pytest.fixture
def client(repository):
    with TestClient(create_app(repository)) as test_client:
        yield test_client


class TestRouteEndpoint:
    def test_route_found(self, client):
        response = client.get("/api/route", params={"start": "A", "end": "D"})
        assert response.status_code == 200
        data = response.json()
        assert data["found"] is True
        assert data["status"] == "found"
        assert data["stations"] == ["A", "B", "E", "D"]
        assert data["total_distance_km"] == 6
        assert [s["railway_id"] for s in data["segments"]] == ["R1", "R3", "R2"]
        assert data["path_description"][0] == "[一号线 / Line 1] A站 <-> B站 (2km)"

    def test_route_via(self, client):
        response = client.get(
            "/api/route", params={"start": "A", "end": "D", "via": ["C"]}
        )
        data = response.json()
        assert data["stations"] == ["A", "B", "C", "D"]
        assert data["via"] == ["C"]

    def test_unknown_station(self, client):
        data = client.get("/api/route", params={"start": "A", "end": "H"}).json()
        assert data["found"] is False
        assert data["status"] == "unknown_station"
        assert "H" in data["error"]

    def test_no_path(self, client):
        data = client.get("/api/route", params={"start": "A", "end": "G"}).json()
        assert data["found"] is False
        assert data["status"] == "no_path"

    def test_missing_parameters(self, client):
        assert client.get("/api/route", params={"start": "A"}).status_code == 422


class TestStationEndpoints:
    def test_station(self, client):
        data = client.get("/api/stations/B").json()
        assert data["id"] == "B"
        assert data["name_english"] == "Station B"
        assert data["has_passenger_service"] is True

    def test_station_not_found(self, client):
        assert client.get("/api/stations/Unknown").status_code == 404

    def test_distance(self, client):
        data = client.get("/api/distance", params={"a": "A", "b": "B"}).json()
        assert data["distance_km"] == pytest.approx(5.56, abs=0.01)

    def test_distance_unknown(self, client):
        response = client.get("/api/distance", params={"a": "A", "b": "Unknown"})
        assert response.status_code == 404

    def test_railways(self, client):
        data = client.get("/api/railways").json()
        assert [r["id"] for r in data] == ["R1", "R2", "R3", "R4"]
        assert data[0]["num_edges"] == 3
        assert data[0]["length_km"] == 9


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["planner_loaded"] is True
    assert data["railways"] == 4


def test_default_app_loads_bundled_line(monkeypatch):
    monkeypatch.delenv("RAILROUTE_DB", raising=False)
    with TestClient(create_app()) as test_client:
        data = test_client.get(
            "/api/route", params={"start": "GSG-001", "end": "GSG-007"}
        ).json()
    assert data["found"] is True
    assert len(data["segments"]) == 6
