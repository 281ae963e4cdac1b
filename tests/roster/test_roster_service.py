from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_ledger.attendance_ledger.core.enums import StudentStatus
from src.attendance_ledger.attendance_ledger.core.exceptions import NotFound, NotReachable, ValidationError
from src.attendance_ledger.attendance_ledger.roster.service import RosterService
from src.attendance_ledger.attendance_ledger.roster.store_repository import StoreRosterRepository

from tests.fakes import InMemoryTableStore, seed_student


@pytest.fixture
def roster_store():
    return InMemoryTableStore()


@pytest.fixture
def svc(roster_store):
    return RosterService(StoreRosterRepository(roster_store))


def test_list_students_is_newest_first(roster_store, svc):
    seed_student(roster_store, name="Old", roll_num="1", created_at=datetime(2024, 1, 1))
    seed_student(roster_store, name="New", roll_num="2", created_at=datetime(2024, 6, 1))
    seed_student(roster_store, name="Mid", roll_num="3", created_at=datetime(2024, 3, 1))

    assert [s.name for s in svc.list_students()] == ["New", "Mid", "Old"]


def test_register_trims_fields_and_refetches(roster_store, svc):
    students = svc.register(name="  Jane Smith ", roll_num=" 2024-001 ")

    assert [(s.name, s.roll_num, s.status) for s in students] == [("Jane Smith", "2024-001", StudentStatus.ACTIVE)]
    assert students[0].created_at is not None
    assert roster_store.calls[-1] == ("select", "students")


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "roll_num": "R-1"},
        {"name": "A", "roll_num": "   "},
        {"name": "A", "roll_num": "R-1", "status": "archived"},
    ],
)
def test_register_rejects_invalid_fields_without_writing(roster_store, svc, fields):
    with pytest.raises(ValidationError):
        svc.register(**fields)

    assert ("insert", "students") not in roster_store.calls


def test_register_allows_duplicate_roll_but_warns(roster_store, svc, caplog):
    seed_student(roster_store, name="Ana", roll_num="R-01")

    with caplog.at_level("WARNING"):
        students = svc.register(name="Other", roll_num="r-01")

    assert len(students) == 2
    assert "already used" in caplog.text


def test_edit_updates_status_and_keeps_created_at(roster_store, svc):
    sid = seed_student(roster_store, name="Ana", roll_num="R-01", created_at=datetime(2024, 2, 3, 4, 5, 6))

    students = svc.edit(sid, status="inactive", name="Ana Li")

    assert students[0].status == StudentStatus.INACTIVE
    assert students[0].name == "Ana Li"
    assert students[0].created_at == datetime(2024, 2, 3, 4, 5, 6)


def test_edit_with_no_fields_is_rejected(roster_store, svc):
    sid = seed_student(roster_store, name="Ana", roll_num="R-01")

    with pytest.raises(ValidationError):
        svc.edit(sid)


def test_repository_refuses_read_only_fields(roster_store):
    repo = StoreRosterRepository(roster_store)
    sid = seed_student(roster_store, name="Ana", roll_num="R-01")

    with pytest.raises(ValidationError):
        repo.update_student(sid, {"created_at": datetime(2020, 1, 1)})


def test_edit_missing_student_surfaces_not_found(svc):
    with pytest.raises(NotFound):
        svc.edit(99, name="Ghost")


def test_remove_leaves_ledger_rows_orphaned(roster_store, svc):
    sid = seed_student(roster_store, name="Ana", roll_num="R-01")
    roster_store.seed("attendance", student_id=sid, date=datetime(2026, 2, 2).date(), status="present")

    assert svc.remove(sid) == []
    assert len(roster_store.rows("attendance")) == 1


def test_store_failure_propagates(roster_store, svc):
    roster_store.fail[("insert", "students")] = NotReachable("down", table="students")

    with pytest.raises(NotReachable):
        svc.register(name="Ana", roll_num="R-01")


def test_browse_filters_and_counts_full_roster(roster_store, svc):
    seed_student(roster_store, name="Ana Li", roll_num="R-01")
    seed_student(roster_store, name="Bo Park", roll_num="R-02", status="inactive")

    page = svc.browse("li")

    assert [s.name for s in page.students] == ["Ana Li"]
    assert (page.counts.total, page.counts.active, page.counts.inactive) == (2, 1, 1)


def test_browse_matches_query_as_typed(roster_store, svc):
    seed_student(roster_store, name="Ana Li", roll_num="R-01")

    page = svc.browse("li ")

    assert page.students == []
    assert page.query == "li "
