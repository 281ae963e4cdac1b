from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class LedgerRepository(Protocol):
    def find(self, *, student_id: int, on: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, on: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, student_id: int, on: date, status: AttendanceStatus) -> AttendanceRecord:
        raise NotImplementedError

    def update_status(self, *, record_id: int, status: AttendanceStatus) -> AttendanceRecord:
        """Overwrite the status of an existing row; its id never changes."""

        raise NotImplementedError

    def upsert(self, *, student_id: int, on: date, status: AttendanceStatus) -> AttendanceRecord:
        """Insert-or-replace keyed on (student_id, date), atomically in the store."""

        raise NotImplementedError
