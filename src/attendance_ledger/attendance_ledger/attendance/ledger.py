from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Dict, Hashable, Sequence, Tuple

from ..common.validators import parse_attendance_status
from ..core.enums import AttendanceStatus, WriteMode
from ..core.exceptions import NotFound
from .model import AttendanceRecord
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class KeyedLocks:
    """One mutex per key, created on demand and dropped when nobody holds it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, Tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, key: Hashable):
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                _, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


@dataclass(frozen=True)
class MarkResult:
    record: AttendanceRecord
    day_records: Sequence[AttendanceRecord]


class AttendanceLedger:
    """Maps (student, date, status) onto exactly one ledger row.

    Writes for the same (student_id, date) are serialized in-process. In atomic
    mode the write itself is a single insert-or-replace guarded by the store's
    unique key, which also holds across processes. In find_or_create mode the
    row is looked up first, then updated in place or created.

    A successful write is always followed by a re-fetch of the whole day; a
    failed write never is.
    """

    def __init__(self, ledger: LedgerRepository, *, write_mode: WriteMode = WriteMode.ATOMIC):
        self._ledger = ledger
        self._write_mode = WriteMode(write_mode)
        self._locks = KeyedLocks()

    def day(self, on: date) -> Sequence[AttendanceRecord]:
        return self._ledger.list_for_date(on)

    def mark(self, student_id: int, on: date, status) -> MarkResult:
        status = parse_attendance_status(status)
        student_id = int(student_id)

        with self._locks.hold((student_id, on)):
            if self._write_mode == WriteMode.ATOMIC:
                record = self._ledger.upsert(student_id=student_id, on=on, status=status)
            else:
                record = self._find_or_create(student_id, on, status)

        logger.info(
            "Marked student_id=%s date=%s status=%s (record id=%s)",
            student_id,
            on.isoformat(),
            status.value,
            record.id,
        )
        return MarkResult(record=record, day_records=self._ledger.list_for_date(on))

    def _find_or_create(self, student_id: int, on: date, status: AttendanceStatus) -> AttendanceRecord:
        # A failed lookup propagates: creating blindly could duplicate the row.
        existing = self._ledger.find(student_id=student_id, on=on)
        if existing is None:
            return self._ledger.create(student_id=student_id, on=on, status=status)

        try:
            return self._ledger.update_status(record_id=existing.id, status=status)
        except NotFound:
            logger.warning("Record id=%s vanished before update; recreating", existing.id)
            return self._ledger.create(student_id=student_id, on=on, status=status)
