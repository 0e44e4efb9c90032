from __future__ import annotations

import csv
import io

import pytest

from player_attendance.core.enums import AttendanceStatus

ANA = {"playerId": "P1", "fullName": "Ana Cruz", "age": 24, "email": "a@x.com"}


@pytest.fixture
def today(app):
    return app.extensions["player_attendance"].attendance_service.today()


@pytest.fixture
def yesterday(app):
    return app.extensions["player_attendance"].attendance_service.yesterday()


# Players


def test_player_crud_flow(client, admin_headers):
    assert client.post("/api/players", json=ANA).status_code == 201

    res = client.get("/api/players/P1")
    assert res.status_code == 200
    assert res.get_json()["fullName"] == "Ana Cruz"
    assert res.get_json()["status"] == "active"

    res = client.put("/api/players/P1", json={**ANA, "fullName": "Ana Reyes"})
    assert res.status_code == 200
    assert client.get("/api/players").get_json()[0]["fullName"] == "Ana Reyes"

    assert client.delete("/api/players/P1", headers=admin_headers).status_code == 200
    res = client.get("/api/players/P1")
    assert res.status_code == 404
    assert res.get_json() is None


def test_create_player_validation_and_duplicates(client):
    res = client.post("/api/players", json={**ANA, "age": "24"})
    assert res.status_code == 400
    assert "age" in res.get_json()["error"]

    assert client.post("/api/players", json={"playerId": "P1"}).status_code == 400
    assert client.post("/api/players", json=ANA).status_code == 201

    res = client.post("/api/players", json=ANA)
    assert res.status_code == 409
    assert res.get_json() == {"error": "Player ID already exists"}


def test_update_unknown_player_is_404(client):
    assert client.put("/api/players/NOPE", json=ANA).status_code == 404


def test_delete_player_requires_admin_pin(client, admin_headers):
    client.post("/api/players", json=ANA)

    assert client.delete("/api/players/P1").status_code == 403
    assert client.delete("/api/players/P1", headers={"x-admin-pin": "wrong"}).status_code == 403
    assert client.delete("/api/players/NOPE", headers=admin_headers).status_code == 404


def test_admin_routes_open_without_configured_pin(players_repo, attendance_repo, test_settings):
    from player_attendance import create_app
    from player_attendance.container import build_services

    test_settings.ADMIN_PIN = ""
    app = create_app(
        container=build_services(players_repo=players_repo, attendance_repo=attendance_repo),
        settings=test_settings,
    )
    client = app.test_client()
    client.post("/api/players", json=ANA)

    assert client.delete("/api/players/P1").status_code == 200


# Attendance


def test_time_in_and_out_flow(client, today):
    res = client.post("/api/attendance/time-in", json={"playerId": "P1", "playerName": "Ana Cruz"})
    assert res.status_code == 201
    body = res.get_json()
    assert body["ok"] is True
    assert body["record"]["status"] == "present"
    assert body["record"]["date"] == today
    assert body["record"]["timeOut"] is None

    res = client.post("/api/attendance/time-in", json={"playerId": "P1", "playerName": "Ana Cruz"})
    assert res.status_code == 400
    assert res.get_json() == {"error": "Already timed in today"}

    res = client.post("/api/attendance/time-out", json={"playerId": "P1"})
    assert res.status_code == 200
    rec = res.get_json()["record"]
    assert rec["timeOut"] >= rec["timeIn"]
    assert rec["timeOutFormatted"]

    res = client.post("/api/attendance/time-out", json={"playerId": "P1"})
    assert res.status_code == 400
    assert res.get_json() == {"error": "Already timed out today"}


def test_time_in_requires_fields(client):
    assert client.post("/api/attendance/time-in", json={"playerId": "P1"}).status_code == 400
    assert client.post("/api/attendance/time-in", data="not json", content_type="text/plain").status_code == 400
    assert client.post("/api/attendance/time-out", json={}).status_code == 400


def test_time_out_without_record_is_404(client):
    res = client.post("/api/attendance/time-out", json={"playerId": "P1"})
    assert res.status_code == 404
    assert res.get_json() == {"error": "No attendance record found for today"}


def test_time_out_before_time_in_is_400(client, attendance_repo, today):
    attendance_repo.add(player_id="P1", player_name="Ana", date=today, status=AttendanceStatus.ABSENT)

    res = client.post("/api/attendance/time-out", json={"playerId": "P1"})
    assert res.status_code == 400
    assert res.get_json() == {"error": "Must time in first"}


def test_night_shift_time_out_over_http(client, attendance_repo, yesterday):
    rec = attendance_repo.add(player_id="P1", player_name="Ana", date=yesterday, time_in=1)

    res = client.post("/api/attendance/time-out", json={"playerId": "P1"})

    assert res.status_code == 200
    assert res.get_json()["id"] == rec.id
    assert res.get_json()["record"]["date"] == yesterday


def test_listing_endpoints(client, attendance_repo, today):
    attendance_repo.add(player_id="P2", player_name="Zed", date=today, time_in=1000)
    attendance_repo.add(player_id="P1", player_name="Ana", date=today)
    attendance_repo.add(player_id="P1", player_name="Ana", date="2020-01-01")

    rows = client.get("/api/attendance/today").get_json()
    assert [r["playerName"] for r in rows] == ["Ana", "Zed"]
    assert rows[0]["timeInFormatted"] is None
    assert rows[1]["timeInFormatted"] is not None

    assert len(client.get(f"/api/attendance/by-date?date={today}").get_json()) == 2
    assert client.get("/api/attendance/by-date").status_code == 400

    ranged = client.get(f"/api/attendance/range?start=2020-01-01&end={today}").get_json()
    assert [r["date"] for r in ranged] == ["2020-01-01", today, today]
    assert client.get("/api/attendance/range?start=2020-01-01").status_code == 400

    assert client.get("/api/attendance/dates").get_json() == [today, "2020-01-01"]


def test_player_today_endpoint(client, attendance_repo, today):
    assert client.get("/api/attendance/player/today").status_code == 400

    res = client.get("/api/attendance/player/today?playerId=P1")
    assert res.status_code == 200
    assert res.get_json() is None

    attendance_repo.add(player_id="P1", player_name="Ana", date=today, time_in=1000)
    assert client.get("/api/attendance/player/today?playerId=P1").get_json()["timeIn"] == 1000


def test_patch_attendance(client, attendance_repo, admin_headers, today):
    attendance_repo.add(player_id="P1", player_name="Ana", date=today, time_in=5000)

    assert client.patch("/api/attendance", json={"playerId": "P1", "status": "partial"}).status_code == 403

    res = client.patch("/api/attendance", json={"playerId": "P1", "status": "partial"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()["record"]["status"] == "partial"

    res = client.patch("/api/attendance", json={"playerId": "P1"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json() == {"error": "Nothing to update"}

    res = client.patch("/api/attendance", json={"playerId": "P1", "timeOut": 4000}, headers=admin_headers)
    assert res.status_code == 400

    res = client.patch(
        "/api/attendance", json={"playerId": "P9", "date": today, "status": "absent"}, headers=admin_headers
    )
    assert res.status_code == 404

    assert client.patch("/api/attendance", json={"status": "absent"}, headers=admin_headers).status_code == 400


def test_cycle_status_endpoint(client, attendance_repo, admin_headers, today):
    attendance_repo.add(player_id="P1", player_name="Ana", date=today, time_in=5000)

    res = client.post("/api/attendance/cycle-status", json={"playerId": "P1", "date": today}, headers=admin_headers)
    assert res.get_json()["record"]["status"] == "partial"


def test_delete_attendance_endpoints(client, attendance_repo, admin_headers, today):
    attendance_repo.add(player_id="P1", player_name="Ana", date=today)
    attendance_repo.add(player_id="P2", player_name="Ben", date="2020-01-01")
    attendance_repo.add(player_id="P3", player_name="Cy", date="2020-01-01")

    assert client.delete(f"/api/attendance?playerId=P1&date={today}").status_code == 403
    assert client.delete("/api/attendance", headers=admin_headers).status_code == 400
    assert client.delete("/api/attendance?playerId=P1", headers=admin_headers).status_code == 200
    assert client.delete("/api/attendance?playerId=P1", headers=admin_headers).status_code == 404

    assert client.delete("/api/attendance/by-date", headers=admin_headers).status_code == 400
    res = client.delete("/api/attendance/by-date?date=2020-01-01", headers=admin_headers)
    assert res.get_json() == {"ok": True, "deleted": 2}
    assert attendance_repo.all() == []


def test_export_today_csv(client, attendance_repo, today):
    attendance_repo.add(player_id="P1", player_name="Cruz, Ana", date=today, time_in=1000, time_out=3_601_000)

    res = client.get("/api/attendance/export/today")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert res.headers["Content-Disposition"] == f"attachment; filename=attendance_{today}.csv"
    rows = list(csv.reader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert rows[0] == ["Player ID", "Name", "Date", "Time In", "Time Out", "Total Hours", "Status"]
    assert rows[1][1] == "Cruz, Ana"
    assert rows[1][5] == "01:00:00"


def test_export_by_date_csv(client, attendance_repo):
    attendance_repo.add(player_id="P1", player_name="Ana", date="2020-01-01")

    assert client.get("/api/attendance/export/by-date").status_code == 400
    res = client.get("/api/attendance/export/by-date?date=2020-01-01")
    rows = list(csv.reader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert len(rows) == 2


# Plumbing


def test_storage_errors_are_opaque(client, attendance_repo, monkeypatch):
    from player_attendance.core.exceptions import StorageError

    def boom(*args, **kwargs):
        raise StorageError("Database operation failed: secret table details")

    monkeypatch.setattr(attendance_repo, "list_by_date", boom)

    res = client.get("/api/attendance/today")
    assert res.status_code == 500
    assert res.get_json() == {"error": "Internal server error"}


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert "error" in res.get_json()


def test_cors_and_health(client):
    res = client.get("/api/health")
    assert res.get_json() == {"ok": True}
    assert res.headers["Access-Control-Allow-Origin"] == "*"
    assert "x-admin-pin" in res.headers["Access-Control-Allow-Headers"]

    assert client.options("/api/attendance").status_code == 200
