from __future__ import annotations

from datetime import date

import pytest

from src.attendance_ledger.attendance_ledger.container import assemble
from src.attendance_ledger.attendance_ledger.core.enums import WriteMode

from tests.fakes import InMemoryTableStore


@pytest.fixture
def day() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def store() -> InMemoryTableStore:
    return InMemoryTableStore(unique={"attendance": [("student_id", "date")]})


@pytest.fixture(params=[WriteMode.ATOMIC, WriteMode.FIND_OR_CREATE], ids=lambda m: m.value)
def write_mode(request) -> WriteMode:
    return request.param


@pytest.fixture
def container(store, write_mode):
    return assemble(store, write_mode=write_mode)
