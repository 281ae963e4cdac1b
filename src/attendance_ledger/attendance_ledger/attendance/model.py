from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one ledger row, unique per (student_id, date)."""

    id: int
    student_id: int
    date: date
    status: AttendanceStatus
