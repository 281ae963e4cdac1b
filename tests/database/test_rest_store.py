from __future__ import annotations

import json
from datetime import date

import pytest
import requests

from src.attendance_ledger.attendance_ledger.core.exceptions import NotFound, NotReachable, Rejected
from src.attendance_ledger.attendance_ledger.database.rest_store import RestTableStore


def _response(status: int, body=None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return r


class StubSession:
    def __init__(self, *responses):
        self._responses = list(responses)
        self.requests: list[dict] = []

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        nxt = self._responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def _store(session) -> RestTableStore:
    return RestTableStore("https://db.example.test/", "anon-key", timeout=3, session=session)


def test_select_builds_equality_filters_and_order():
    session = StubSession(_response(200, [{"id": 1, "status": "present"}]))

    rows = _store(session).select("attendance", {"student_id": 7, "date": date(2026, 2, 2)}, order_by="date", descending=True)

    assert rows == [{"id": 1, "status": "present"}]
    req = session.requests[0]
    assert req["method"] == "GET"
    assert req["url"] == "https://db.example.test/rest/v1/attendance"
    assert req["params"]["student_id"] == "eq.7"
    assert req["params"]["date"] == "eq.2026-02-02"
    assert req["params"]["order"] == "date.desc,id.desc"
    assert req["timeout"] == 3.0
    assert req["headers"]["apikey"] == "anon-key"


def test_upsert_requests_merge_on_conflict_columns():
    session = StubSession(_response(201, [{"id": 4, "student_id": 1, "date": "2026-02-02", "status": "late"}]))

    row = _store(session).upsert(
        "attendance",
        {"student_id": 1, "date": date(2026, 2, 2), "status": "late"},
        conflict=("student_id", "date"),
    )

    assert row["id"] == 4
    req = session.requests[0]
    assert req["method"] == "POST"
    assert req["params"] == {"on_conflict": "student_id,date"}
    assert "resolution=merge-duplicates" in req["headers"]["Prefer"]
    assert req["json"] == [{"student_id": 1, "date": "2026-02-02", "status": "late"}]


def test_update_with_empty_representation_is_not_found():
    session = StubSession(_response(200, []))

    with pytest.raises(NotFound):
        _store(session).update("students", 9, {"name": "X"})

    assert session.requests[0]["params"] == {"id": "eq.9"}


def test_delete_missing_row_is_not_found():
    with pytest.raises(NotFound):
        _store(StubSession(_response(200, []))).delete("students", 9)


@pytest.mark.parametrize(
    "outcome,error",
    [
        (requests.ConnectionError("refused"), NotReachable),
        (requests.Timeout("slow"), NotReachable),
        (_response(503, {"message": "unavailable"}), NotReachable),
        (_response(409, {"message": "duplicate key value"}), Rejected),
        (_response(400, {"message": "invalid input"}), Rejected),
        (_response(404, {"message": "relation does not exist"}), NotFound),
    ],
)
def test_transport_and_status_errors_are_translated(outcome, error):
    with pytest.raises(error) as exc:
        _store(StubSession(outcome)).insert("students", {"name": "A"})

    assert exc.value.table == "students"


def test_missing_base_url_is_a_configuration_error():
    with pytest.raises(ValueError):
        RestTableStore("", "key")
