import pytest

from src.attendance_tracker.attendance_tracker.main import create_app


@pytest.fixture
def client(tmp_path):
    app = create_app(
        "config.testing",
        STORE_BACKEND="local",
        LOCAL_STORE_PATH=str(tmp_path / "store.json"),
        AUTO_SEED_DB=True,
    )
    return app.test_client()


def _login(client, email, password):
    return client.post("/api/login", json={"email": email, "password": password})


def test_login_and_me(client):
    assert _login(client, "staff@example.com", "wrong").status_code == 401

    resp = _login(client, "staff@example.com", "staff123")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "employee"

    me = client.get("/api/me").get_json()
    assert me["user"]["email"] == "staff@example.com"


def test_endpoints_require_login(client):
    assert client.get("/api/attendance/current").status_code == 401
    assert client.post("/api/attendance/checkin").status_code == 401


def test_admin_endpoints_reject_staff(client):
    _login(client, "staff@example.com", "staff123")
    assert client.get("/api/reports").status_code == 403
    assert client.get("/api/attendance/active").status_code == 403


def test_clock_in_and_out_flow(client):
    _login(client, "staff@example.com", "staff123")

    assert client.post("/api/attendance/checkout", json={}).status_code == 409

    resp = client.post("/api/attendance/checkin", json={"location": {"lat": 1.0, "lng": 2.0}})
    assert resp.status_code == 201
    record_id = resp.get_json()["id"]

    current = client.get("/api/attendance/current").get_json()["record"]
    assert current["id"] == record_id

    assert client.post("/api/attendance/checkout", json={}).status_code == 200
    assert client.get("/api/attendance/current").get_json()["record"] is None

    history = client.get("/api/attendance/history").get_json()
    assert [row["id"] for row in history["rows"]] == [record_id]
    assert history["rows"][0]["status"] == "completed"


def test_admin_sees_active_shifts_and_reports(client):
    _login(client, "staff@example.com", "staff123")
    client.post("/api/attendance/checkin", json={})
    client.post("/api/logout")

    _login(client, "admin@example.com", "admin123")
    active = client.get("/api/attendance/active").get_json()["active"]
    assert [row["user_id"] for row in active] == ["staff"]

    reports = client.get("/api/reports?employee=all")
    assert reports.status_code == 200
    assert reports.get_json()["reports"] == []

    assert client.get("/api/reports?from=yesterday").status_code == 400
    assert client.get("/api/reports/period").get_json()["period"]["month_index"] in range(1, 13)


def test_admin_corrects_record(client):
    _login(client, "staff@example.com", "staff123")
    record_id = client.post("/api/attendance/checkin", json={}).get_json()["id"]
    client.post("/api/logout")

    _login(client, "admin@example.com", "admin123")
    resp = client.put(
        f"/api/attendance/{record_id}",
        json={"check_in": "2024-03-04T08:00:00", "check_out": "2024-03-04T16:00:00"},
    )
    assert resp.status_code == 200

    reports = client.get("/api/reports").get_json()["reports"]
    assert reports[0]["month"] == "March"
    assert reports[0]["total_hours"] == 8.0

    bad = client.put(f"/api/attendance/{record_id}", json={"check_in": "2024-03-04T08:00:00", "check_out": "2024-03-04T07:00:00"})
    assert bad.status_code == 400
    assert client.put("/api/attendance/missing", json={"check_in": "2024-03-04T08:00:00"}).status_code == 404


def test_broadcast_visible_to_staff(client):
    _login(client, "admin@example.com", "admin123")
    resp = client.post("/api/admin/broadcasts", json={"title": "Hello", "message": "Team meeting"})
    assert resp.status_code == 201
    client.post("/api/logout")

    _login(client, "staff@example.com", "staff123")
    titles = [b["title"] for b in client.get("/api/broadcasts").get_json()["broadcasts"]]
    assert titles == ["Hello"]
