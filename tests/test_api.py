from __future__ import annotations

import pytest

from field_tracker.core.exceptions import RepositoryError

CHECKIN = {"employee_id": 1, "latitude": 28.7041, "longitude": 77.1025}


def test_index_and_health(client):
    index = client.get("/")
    assert index.status_code == 200
    assert index.get_json()["data"]["message"] == "Field Tracker API is running!"

    health = client.get("/health")
    assert health.get_json()["data"]["status"] == "healthy"


def test_login_success(client):
    resp = client.post("/api/auth/login", json={"employee_id": 1, "pin_code": "1234"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"] == {"employee_id": 1, "name": "Test Employee", "email": "test@example.com"}


def test_login_accepts_numeric_pin(client):
    resp = client.post("/api/auth/login", json={"employee_id": 1, "pin_code": 1234})

    assert resp.status_code == 200


@pytest.mark.parametrize("payload", [{"employee_id": 1, "pin_code": "0000"}, {"employee_id": 42, "pin_code": "1234"}])
def test_login_failure_is_401_with_generic_message(client, payload):
    resp = client.post("/api/auth/login", json=payload)

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid credentials"}


def test_login_rejects_boolean_employee_id(client):
    resp = client.post("/api/auth/login", json={"employee_id": True, "pin_code": "1234"})

    assert resp.status_code == 400


def test_login_missing_fields_is_400(client):
    resp = client.post("/api/auth/login", json={"employee_id": 1})

    assert resp.status_code == 400
    assert "pin_code" in resp.get_json()["message"]


def test_checkin_returns_session_and_summary(client):
    resp = client.post("/api/attendance/checkin", json={**CHECKIN, "location_code": "HQ-DEL-01"})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["session"]["location_verified"] is True
    assert data["session"]["check_in_location_code"] == "HQ-DEL-01"
    assert data["session"]["status"] == "ongoing"
    assert data["session"]["check_in_time"] == "2026-02-02T08:30:00"
    assert data["daily_summary"]["total_sessions"] == 1
    assert data["distance_meters"] == 0.0


def test_double_checkin_is_409(client):
    client.post("/api/attendance/checkin", json=CHECKIN)
    resp = client.post("/api/attendance/checkin", json=CHECKIN)

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False


def test_checkout_without_checkin_is_409(client):
    resp = client.post("/api/attendance/checkout", json=CHECKIN)

    assert resp.status_code == 409


def test_checkin_then_checkout(client, clock):
    client.post("/api/attendance/checkin", json=CHECKIN)
    clock.advance(hours=8)

    resp = client.post("/api/attendance/checkout", json={**CHECKIN, "location_code": "HQ-DEL-01"})

    assert resp.status_code == 200
    session = resp.get_json()["data"]["session"]
    assert session["total_hours"] == 8.0
    assert session["status"] == "completed"
    assert session["check_out_location_code"] == "HQ-DEL-01"


@pytest.mark.parametrize(
    "payload",
    [
        {"employee_id": 1, "latitude": 95, "longitude": 77.1},
        {"employee_id": 1, "latitude": 28.7, "longitude": -200},
        {"employee_id": 1, "latitude": "north", "longitude": 77.1},
        {"employee_id": 1, "longitude": 77.1},
        {"latitude": 28.7, "longitude": 77.1},
        {**CHECKIN, "location_code": "X" * 16},
        {**CHECKIN, "location_id": 0},
        {"employee_id": True, "latitude": True, "longitude": False},
        {**CHECKIN, "employee_id": True},
        {**CHECKIN, "location_id": True},
    ],
)
def test_checkin_validation_errors_are_400(client, attendance_repo, payload):
    resp = client.post("/api/attendance/checkin", json=payload)

    assert resp.status_code == 400
    assert attendance_repo.writes == 0


def test_non_object_body_is_400(client):
    resp = client.post("/api/attendance/checkin", data="not json", content_type="text/plain")

    assert resp.status_code == 400


def test_unknown_employee_is_404(client):
    resp = client.post("/api/attendance/checkin", json={**CHECKIN, "employee_id": 999})

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Employee not found"


def test_others_checkin_stores_code_verbatim(client, locations):
    resp = client.post(
        "/api/attendance/checkin",
        json={**CHECKIN, "location_id": 1, "location_code": "Cust. 42", "location_type": "Others"},
    )

    session = resp.get_json()["data"]["session"]
    assert session["location_verified"] is False
    assert session["check_in_location_code"] == "Cust. 42"
    assert locations.lookups == []


def test_checkin_accepts_integer_coordinates(client):
    resp = client.post("/api/attendance/checkin", json={"employee_id": 1, "latitude": 28, "longitude": 77})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["session"]["check_in_latitude"] == 28.0


def test_others_checkin_keeps_whitespace_code(client):
    resp = client.post(
        "/api/attendance/checkin",
        json={**CHECKIN, "location_code": "   ", "location_type": "others"},
    )

    assert resp.get_json()["data"]["session"]["check_in_location_code"] == "   "


def test_blank_code_for_known_site_is_stored_as_null(client):
    resp = client.post("/api/attendance/checkin", json={**CHECKIN, "location_code": "  "})

    assert resp.get_json()["data"]["session"]["check_in_location_code"] is None


def test_status_endpoint(client):
    client.post("/api/attendance/checkin", json=CHECKIN)

    data = client.get("/api/attendance/status/1").get_json()["data"]

    assert data["is_checked_in"] is True
    assert data["current_session"]["employee_id"] == 1
    assert len(data["today_sessions"]) == 1
    assert data["daily_summary"]["ongoing_sessions"] == 1


def test_status_unknown_employee_is_404(client):
    assert client.get("/api/attendance/status/999").status_code == 404


def test_summary_default_and_bounds(client):
    client.post("/api/attendance/checkin", json=CHECKIN)

    default = client.get("/api/attendance/summary/1").get_json()["data"]
    assert default["days"] == 7
    assert len(default["summaries"]) == 1

    assert client.get("/api/attendance/summary/1?days=1").status_code == 200
    assert client.get("/api/attendance/summary/1?days=365").status_code == 200
    assert client.get("/api/attendance/summary/1?days=0").status_code == 400
    assert client.get("/api/attendance/summary/1?days=366").status_code == 400
    assert client.get("/api/attendance/summary/1?days=week").status_code == 400


def test_history_endpoint(client, clock):
    client.post("/api/attendance/checkin", json=CHECKIN)
    clock.advance(hours=1)
    client.post("/api/attendance/checkout", json=CHECKIN)

    records = client.get("/api/attendance/history/1?limit=5").get_json()["data"]["records"]

    assert len(records) == 1
    assert records[0]["status"] == "completed"


def test_location_search_endpoints(client):
    found = client.get("/api/locations/search?location_code=del").get_json()["data"]
    assert [loc["location_code"] for loc in found] == ["HQ-DEL-01", "WH-DEL-02"]

    exact = client.get("/api/locations/search-exact?location_code=WH-DEL-02&location_type=warehouse").get_json()
    assert [loc["location_id"] for loc in exact["data"]] == [2]

    assert client.get("/api/locations/search").status_code == 400


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "API endpoint not found", "path": "/api/nope"}


def test_repository_failure_is_generic_500(client, employees, monkeypatch):
    def boom(_employee_id):
        raise RepositoryError("Database operation timed out at 10.0.0.5")

    monkeypatch.setattr(employees, "get_by_id", boom)

    resp = client.get("/api/attendance/status/1")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Something went wrong on the server"}


def test_unexpected_error_is_generic_500(client, attendance_repo, monkeypatch):
    def boom(*_args, **_kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(attendance_repo, "get_latest_open_for_employee", boom)

    resp = client.post("/api/attendance/checkin", json=CHECKIN)

    assert resp.status_code == 500
    assert "secret" not in resp.get_data(as_text=True)
