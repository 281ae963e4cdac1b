from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence

from ..core.constants import PENDING
from ..core.enums import AttendanceStatus
from ..roster.model import Student
from .model import AttendanceRecord


@dataclass(frozen=True)
class EffectiveStatus:
    """Status shown for a (student, date) pair. ``status is None`` means pending."""

    status: Optional[AttendanceStatus] = None

    @property
    def is_pending(self) -> bool:
        return self.status is None

    @property
    def label(self) -> str:
        return PENDING if self.status is None else self.status.value


@dataclass(frozen=True)
class DayTally:
    present: int = 0
    absent: int = 0
    late: int = 0
    pending: int = 0


def project(
    active_students: Iterable[Student],
    day_records: Iterable[AttendanceRecord],
) -> Dict[int, EffectiveStatus]:
    """Effective status for every active student on one day.

    Records for students not in ``active_students`` are ignored. If a student has
    several rows for the day the first one wins, the same row the ledger updates.
    """

    by_student: Dict[int, AttendanceStatus] = {}
    for r in day_records:
        by_student.setdefault(r.student_id, r.status)
    return {s.id: EffectiveStatus(by_student.get(s.id)) for s in active_students}


def tally(view: Mapping[int, EffectiveStatus]) -> DayTally:
    counts = {"present": 0, "absent": 0, "late": 0, PENDING: 0}
    for eff in view.values():
        counts[eff.label] += 1
    return DayTally(
        present=counts["present"],
        absent=counts["absent"],
        late=counts["late"],
        pending=counts[PENDING],
    )


def orphaned(active_students: Sequence[Student], day_records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """Day records whose student is not on the active roster."""

    ids = {s.id for s in active_students}
    return [r for r in day_records if r.student_id not in ids]
