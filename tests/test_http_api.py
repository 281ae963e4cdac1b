from __future__ import annotations

import pytest

from src.attendance_ledger.attendance_ledger.container import assemble
from src.attendance_ledger.attendance_ledger.core.exceptions import NotReachable
from src.attendance_ledger.attendance_ledger.main import create_app

from tests.fakes import InMemoryTableStore, seed_student


@pytest.fixture
def api_store():
    return InMemoryTableStore(unique={"attendance": [("student_id", "date")]})


@pytest.fixture
def client(api_store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=assemble(api_store))
    return app.test_client()


def test_register_search_and_count(client):
    assert client.post("/api/students", json={"name": "Ana Li", "roll_num": "R-01"}).status_code == 201
    client.post("/api/students", json={"name": "Bo Park", "roll_num": "R-02", "status": "inactive"})

    body = client.get("/api/students?q=li").get_json()

    assert [s["name"] for s in body["students"]] == ["Ana Li"]
    assert body["counts"] == {"total": 2, "active": 1, "inactive": 1}


def test_register_validation_error_is_400(client):
    resp = client.post("/api/students", json={"name": "", "roll_num": "R-01"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_mark_and_read_back_day_sheet(client, api_store):
    sid = seed_student(api_store, name="Ana Li", roll_num="R-01")

    pending = client.get("/api/attendance/2026-02-02").get_json()
    assert pending["sheet"]["rows"][0]["status"] == "pending"

    resp = client.post("/api/attendance/mark", json={"student_id": sid, "status": "late", "date": "2026-02-02"})

    assert resp.status_code == 200
    sheet = resp.get_json()["sheet"]
    assert sheet["rows"][0]["status"] == "late"
    assert sheet["tally"] == {"present": 0, "absent": 0, "late": 1, "pending": 0}


def test_checkin_outcomes(client, api_store):
    seed_student(api_store, name="Ana Li", roll_num="R-01")
    seed_student(api_store, name="Chidi", roll_num="2024-001", status="inactive")

    ok = client.post("/api/attendance/checkin", json={"roll": "r-01", "date": "2026-02-02"})
    inactive = client.post("/api/attendance/checkin", json={"roll": "2024-001", "date": "2026-02-02"})
    missing = client.post("/api/attendance/checkin", json={"roll": "nope", "date": "2026-02-02"})

    assert ok.status_code == 200
    assert ok.get_json()["message"] == "Marked PRESENT: Ana Li"
    assert inactive.status_code == 409
    assert missing.status_code == 404


def test_bad_date_and_missing_student_id(client):
    assert client.get("/api/attendance/02-02-2026").status_code == 400
    assert client.post("/api/attendance/mark", json={"status": "present"}).status_code == 400


def test_store_outage_is_503(client, api_store):
    api_store.fail[("select", "students")] = NotReachable("down", table="students")

    resp = client.get("/api/students")

    assert resp.status_code == 503
    assert resp.get_json()["table"] == "students"
