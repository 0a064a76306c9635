from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.staff_attendance.staff_attendance.common.datetime_utils import now_local
from src.staff_attendance.staff_attendance.container import wire_container
from src.staff_attendance.staff_attendance.core.enums import Role
from src.staff_attendance.staff_attendance.main import create_app
from src.staff_attendance.staff_attendance.timings.model import StoreTimings
from src.staff_attendance.staff_attendance.users.model import User
from tests.fakes import InMemoryAttendance, InMemoryUsers, at, ledger_of, punch


@pytest.fixture
def repo():
    return InMemoryAttendance()


@pytest.fixture
def client(monkeypatch, repo):
    monkeypatch.setenv("APP_ENV", "testing")
    users = InMemoryUsers(
        {
            "admin-1": User(user_id="admin-1", full_name="Admin", role=Role.ADMIN),
            "staff-1": User(user_id="staff-1", full_name="Staff", role=Role.STAFF, base_salary=Decimal("30000")),
        }
    )
    container = wire_container(attendance_repo=repo, users_repo=users, timings=StoreTimings.default())
    app = create_app(container=container)
    return app.test_client()


def test_punch_returns_ledger(client):
    resp = client.post("/api/attendance/punch", json={"userId": "staff-1", "type": "IN"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["userId"] == "staff-1"
    assert body["punches"][0]["type"] == "IN"
    assert body["totals"] == {"workMin": 0, "breakMin": 0}
    assert "checkIn" in body["status"]


def test_punch_requires_user_and_type(client):
    assert client.post("/api/attendance/punch", json={"userId": "staff-1"}).status_code == 400
    assert client.post("/api/attendance/punch", json={"type": "IN"}).status_code == 400


def test_bad_punch_is_a_client_error(client):
    resp = client.post("/api/attendance/punch", json={"userId": "staff-1", "type": "BREAK_START"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_manual_punch_by_staff_is_forbidden(client):
    resp = client.post(
        "/api/attendance/punch",
        json={
            "userId": "staff-1",
            "type": "IN",
            "manualPunch": True,
            "punchedBy": "staff-1",
            "customTime": "2020-01-01T09:00:00",
        },
    )

    assert resp.status_code == 403


def test_manual_punch_by_admin(client, repo):
    resp = client.post(
        "/api/attendance/punch",
        json={
            "userId": "staff-1",
            "type": "IN",
            "manualPunch": True,
            "punchedBy": "admin-1",
            "customTime": "2020-01-01T09:00:00",
            "reason": "badge reader down",
        },
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["date"] == "2020-01-01"
    assert body["punches"][0]["manualPunch"] is True
    assert body["punches"][0]["punchedBy"] == "admin-1"
    assert repo.get_for_user_and_date("staff-1", date(2020, 1, 1)) is not None


def test_today_history_and_live(client, repo):
    assert client.get("/api/attendance/today/staff-1").get_json() is None

    client.post("/api/attendance/punch", json={"userId": "staff-1", "type": "IN"})
    earlier = now_local().date() - timedelta(days=3)
    repo.save(ledger_of("staff-1", earlier, punch("IN", at(earlier, 9)), punch("OUT", at(earlier, 17))))

    today = client.get("/api/attendance/today/staff-1").get_json()
    assert today["date"] == now_local().date().isoformat()

    history = client.get("/api/attendance/history/staff-1?limit=1").get_json()
    assert len(history) == 1
    assert history[0]["date"] == today["date"]
    assert len(client.get("/api/attendance/history/staff-1").get_json()) == 2
    assert client.get("/api/attendance/history/staff-1?limit=abc").status_code == 400

    live = client.get("/api/attendance/live/staff-1").get_json()
    assert set(live) == {"workMin", "breakMin"}

    assert len(client.get("/api/attendance/all").get_json()) == 2


def test_leave_deduction(client):
    resp = client.post(
        "/api/leaves/deduction", json={"userId": "staff-1", "date": "2026-03-14", "leaveType": "half"}
    )

    assert resp.status_code == 200
    assert resp.get_json()["amount"] == "500.00"

    resp = client.post(
        "/api/leaves/deduction",
        json={"userId": "staff-1", "date": "2026-03-14", "leaveType": "full", "dailyRate": 120},
    )
    assert resp.get_json()["amount"] == "120.00"

    bad = client.post("/api/leaves/deduction", json={"userId": "staff-1", "date": "2026-03-14", "leaveType": "x"})
    assert bad.status_code == 400


def test_attendance_report(client, repo):
    day = date(2026, 3, 2)
    repo.save(ledger_of("staff-1", day, punch("IN", at(day, 9)), punch("OUT", at(day, 17))))

    resp = client.get("/api/reports/attendance?start=2026-03-01&end=2026-03-02")

    assert resp.status_code == 200
    assert resp.get_json()["summary"][0]["total_hours"] == "08:00"
    assert client.get("/api/reports/attendance?start=2026-03-05&end=2026-03-01").status_code == 400


def test_leave_deduction_rejects_non_finite_rate(client):
    resp = client.post(
        "/api/leaves/deduction",
        json={"userId": "staff-1", "date": "2026-03-14", "leaveType": "full", "dailyRate": "NaN"},
    )

    assert resp.status_code == 400


def test_sessions_for_a_day(client, repo):
    day = date(2026, 3, 2)
    repo.save(
        ledger_of(
            "staff-1",
            day,
            punch("IN", at(day, 9)),
            punch("OUT", at(day, 12)),
            punch("IN", at(day, 13)),
            punch("OUT", at(day, 17)),
        )
    )

    resp = client.get("/api/attendance/sessions/staff-1?date=2026-03-02")

    assert resp.status_code == 200
    sessions = resp.get_json()
    assert [s["workMin"] for s in sessions] == [180, 240]
    assert sessions[0]["startedAt"] == "2026-03-02T09:00:00"
    assert sessions[1]["endedAt"] == "2026-03-02T17:00:00"
    assert client.get("/api/attendance/sessions/staff-1?date=yesterday").status_code == 400
