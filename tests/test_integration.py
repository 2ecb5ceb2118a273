import asyncio

import pytest
from fastapi.testclient import TestClient

from landscape_estimator.api.dependencies import get_maps_client
from landscape_estimator.errors import UpstreamUnavailableError
from landscape_estimator.main import create_app
from landscape_estimator.models.domain import Coordinate
from landscape_estimator.services.maps import BranchMatch, GeocodeResult

from factories import PHX_SW, cluster, make_property


class DummyMaps:
    def geocode(self, address):
        if address == "nowhere":
            return None
        return GeocodeResult(location=PHX_SW, formatted_address=f"{address}, USA")

    def drive_time_hours(self, origin, destination):
        return 0.8

    def closest_branch(self, origin, branches):
        return BranchMatch(branch=branches[0], distance_meters=500.0, duration_hours=0.05)


@pytest.fixture
def api_client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_maps_client] = DummyMaps
    return TestClient(app)


@pytest.fixture
def stored_properties(monkeypatch):
    from landscape_estimator.api.routes import active_properties as routes_module
    from landscape_estimator.services.estimates import service as estimates_service

    properties = cluster(4) + [make_property("other", 0.1, branch="phx-se")]

    def lookup(branch=None):
        return tuple(prop for prop in properties if branch is None or prop.branch == branch)

    monkeypatch.setattr(routes_module, "list_active_properties", lookup)
    monkeypatch.setattr(estimates_service, "list_active_properties", lookup)
    return properties


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_list_branches(api_client: TestClient):
    response = api_client.get("/api/branches", params={"market": "LV"})

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": "lv-main",
            "name": "Las Vegas",
            "address": "6290 S Pecos Rd, Las Vegas, NV 89120",
            "market": "LV",
            "lat": 36.0758681,
            "lng": -115.1002532,
        }
    ]


def test_list_active_properties(api_client: TestClient, stored_properties):
    response = api_client.get("/api/active-properties", params={"branch": "phx-se"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 1
    assert payload["properties"][0]["id"] == "other"


def test_proximity_endpoint(api_client: TestClient, stored_properties):
    response = api_client.post(
        "/api/active-properties/proximity",
        json={"lat": PHX_SW.latitude, "lng": PHX_SW.longitude, "branch": "PHX-SW"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 4
    assert payload["proximity_factor"] == 0.7
    assert payload["description"] == "Moderate route"
    assert payload["summary"] == "Moderate route - 4 properties within 1 mile"
    assert [item["distance"] for item in payload["nearby_properties"]] == [0.5] * 4


def test_proximity_endpoint_rejects_unknown_branch(api_client: TestClient, stored_properties):
    response = api_client.post("/api/active-properties/proximity", json={"lat": 33.4, "lng": -112.1, "branch": "tucson"})

    assert response.status_code == 400


def test_proximity_endpoint_validates_radius(api_client: TestClient, stored_properties):
    response = api_client.post(
        "/api/active-properties/proximity",
        json={"lat": 33.4, "lng": -112.1, "branch": "phx-sw", "radius_miles": 0},
    )

    assert response.status_code == 422


def test_proximity_endpoint_reports_unavailable_store(api_client: TestClient, monkeypatch):
    from landscape_estimator.api.routes import active_properties as routes_module

    def broken(branch=None):
        raise UpstreamUnavailableError("Supabase not configured")

    monkeypatch.setattr(routes_module, "list_active_properties", broken)

    response = api_client.post("/api/active-properties/proximity", json={"lat": 33.4, "lng": -112.1, "branch": "phx-sw"})

    assert response.status_code == 503


def test_drive_time_estimate(api_client: TestClient, stored_properties):
    response = api_client.post("/api/estimates/drive-time", json={"address": "2700 S 19th Ave", "branch": "phx-sw"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["baseline_hours"] == 0.8
    assert payload["adjusted_hours"] == 0.6
    assert payload["proximity_applied"] is True
    assert payload["proximity"]["count"] == 4
    assert payload["branch"]["id"] == "phx-sw"


def test_drive_time_estimate_unknown_address(api_client: TestClient, stored_properties):
    response = api_client.post("/api/estimates/drive-time", json={"address": "nowhere", "branch": "phx-sw"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Could not find property address"


def test_geocode_endpoint(api_client: TestClient):
    found = api_client.post("/api/maps/geocode", json={"address": "1 Main St"})
    missing = api_client.post("/api/maps/geocode", json={"address": "nowhere"})

    assert found.status_code == 200
    assert found.json()["location"] == {"lat": PHX_SW.latitude, "lng": PHX_SW.longitude}
    assert missing.status_code == 404


def test_closest_branch_endpoint(api_client: TestClient):
    response = api_client.post("/api/maps/closest-branch", json={"address": "1 Main St"})

    assert response.status_code == 200
    assert response.json()["closest_branch"]["id"] == "phx-sw"


def test_import_endpoint(api_client: TestClient, monkeypatch):
    from landscape_estimator.api.routes import active_properties as routes_module

    stored = {}

    def fake_replace(records):
        stored["records"] = list(records)
        return len(records)

    monkeypatch.setattr(routes_module, "replace_active_properties", fake_replace)

    content = b"name,address,branch\nA,1 Main St,Phx - SouthWest\nB,,Las Vegas\n"
    response = api_client.post(
        "/api/active-properties/import",
        files={"file": ("active.csv", content, "text/csv")},
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["imported"] == 1
    assert payload["skipped"] == 1
    assert stored["records"][0]["branch"] == "phx-sw"



def test_import_endpoint_runs_off_the_event_loop(api_client: TestClient, monkeypatch):
    from landscape_estimator.api.routes import active_properties as routes_module

    loops = []

    def fake_replace(records):
        try:
            loops.append(asyncio.get_running_loop())
        except RuntimeError:
            loops.append(None)
        return len(records)

    monkeypatch.setattr(routes_module, "replace_active_properties", fake_replace)

    response = api_client.post(
        "/api/active-properties/import",
        files={"file": ("active.csv", b"name,address,branch\nA,1 Main St,phx-sw\n", "text/csv")},
    )

    assert response.status_code == 201
    assert loops == [None]


def test_import_endpoint_rejects_bad_file(api_client: TestClient):
    response = api_client.post(
        "/api/active-properties/import",
        files={"file": ("active.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
