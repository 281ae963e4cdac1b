from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.constants import ATTENDANCE_TABLE
from ..core.enums import AttendanceStatus
from ..database.table_store import Row, TableStore
from .model import AttendanceRecord
from .repository import LedgerRepository


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_record(row: Row) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        student_id=int(row["student_id"]),
        date=_parse_date(row["date"]),
        status=AttendanceStatus(row["status"]),
    )


class StoreLedgerRepository(LedgerRepository):
    def __init__(self, store: TableStore, *, table: str = ATTENDANCE_TABLE):
        self._store = store
        self._table = table

    def find(self, *, student_id: int, on: date) -> Optional[AttendanceRecord]:
        rows = self._store.select(self._table, {"student_id": int(student_id), "date": on})
        if not rows:
            return None
        # More than one row means the unique key is missing in the store; the oldest wins.
        return to_record(rows[0])

    def list_for_date(self, on: date) -> Sequence[AttendanceRecord]:
        return [to_record(r) for r in self._store.select(self._table, {"date": on})]

    def create(self, *, student_id: int, on: date, status: AttendanceStatus) -> AttendanceRecord:
        row = self._store.insert(
            self._table,
            {"student_id": int(student_id), "date": on, "status": status.value},
        )
        return to_record(row)

    def update_status(self, *, record_id: int, status: AttendanceStatus) -> AttendanceRecord:
        return to_record(self._store.update(self._table, int(record_id), {"status": status.value}))

    def upsert(self, *, student_id: int, on: date, status: AttendanceStatus) -> AttendanceRecord:
        row = self._store.upsert(
            self._table,
            {"student_id": int(student_id), "date": on, "status": status.value},
            conflict=("student_id", "date"),
        )
        return to_record(row)
