from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import STUDENTS_TABLE
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError
from ..database.table_store import Row, TableStore
from .model import Student
from .repository import RosterRepository

_EDITABLE = ("name", "roll_num", "status")


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_student(row: Row) -> Student:
    return Student(
        id=int(row["id"]),
        name=row["name"],
        roll_num=str(row["roll_num"]),
        status=StudentStatus(row["status"]),
        created_at=_parse_datetime(row["created_at"]),
    )


class StoreRosterRepository(RosterRepository):
    def __init__(self, store: TableStore, *, table: str = STUDENTS_TABLE):
        self._store = store
        self._table = table

    def list_students(self) -> Sequence[Student]:
        rows = self._store.select(self._table, order_by="created_at", descending=True)
        return [to_student(r) for r in rows]

    def create_student(self, fields: Mapping[str, object]) -> Student:
        values = self._editable(fields)
        values["created_at"] = now_utc().replace(microsecond=0, tzinfo=None)
        return to_student(self._store.insert(self._table, values))

    def update_student(self, student_id: int, fields: Mapping[str, object]) -> Student:
        return to_student(self._store.update(self._table, int(student_id), self._editable(fields)))

    def delete_student(self, student_id: int) -> None:
        self._store.delete(self._table, int(student_id))

    def _editable(self, fields: Mapping[str, object]) -> dict:
        locked = {"id", "created_at"} & set(fields)
        if locked:
            raise ValidationError(f"Read-only fields: {', '.join(sorted(locked))}")
        values = {k: fields[k] for k in _EDITABLE if k in fields}
        if isinstance(values.get("status"), StudentStatus):
            values["status"] = values["status"].value
        return values
