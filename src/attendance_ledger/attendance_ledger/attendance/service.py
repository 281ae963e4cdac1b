from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import IneligibleStudentError, StudentNotFoundError
from ..roster import index, resolver
from ..roster.model import Student
from ..roster.repository import RosterRepository
from . import view
from .ledger import AttendanceLedger
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetRow:
    student: Student
    effective: view.EffectiveStatus


@dataclass(frozen=True)
class DaySheet:
    """Attendance sheet for one date: every active student with their effective status."""

    date: date
    rows: List[SheetRow]
    tally: view.DayTally
    hidden_records: int = 0

    def status_of(self, student_id: int) -> str:
        for row in self.rows:
            if row.student.id == student_id:
                return row.effective.label
        raise KeyError(student_id)


@dataclass(frozen=True)
class CheckInResult:
    student: Student
    record: AttendanceRecord
    sheet: DaySheet
    ambiguous: bool = False


class AttendanceService:
    """The two intake paths onto the ledger: direct selection and roll-number check-in.

    Both re-read the roster before writing, so eligibility is judged against
    the store rather than a stale screen.
    """

    def __init__(self, roster: RosterRepository, ledger: AttendanceLedger):
        self._roster = roster
        self._ledger = ledger

    def day_sheet(self, on: date) -> DaySheet:
        roster = self._roster.list_students()
        return self._build_sheet(on, roster, self._ledger.day(on))

    def mark_student(self, student_id: int, on: date, status) -> DaySheet:
        roster = self._roster.list_students()
        student = next((s for s in roster if s.id == int(student_id)), None)
        if student is None:
            raise StudentNotFoundError(f"Student {student_id} not found")
        self._require_active(student)

        result = self._ledger.mark(student.id, on, status)
        return self._build_sheet(on, roster, result.day_records)

    def check_in(self, roll_input: str, on: date) -> CheckInResult:
        if not (roll_input or "").strip():
            raise StudentNotFoundError("Roll number is empty")

        roster = self._roster.list_students()
        match = resolver.resolve(roll_input, roster)
        if isinstance(match, resolver.NotFound):
            raise StudentNotFoundError(f'Roll number "{match.roll_input}" not found')
        if isinstance(match, resolver.Inactive):
            self._require_active(match.student)

        result = self._ledger.mark(match.student.id, on, AttendanceStatus.PRESENT)
        return CheckInResult(
            student=match.student,
            record=result.record,
            sheet=self._build_sheet(on, roster, result.day_records),
            ambiguous=match.ambiguous,
        )

    def _require_active(self, student: Student) -> None:
        if not student.is_active:
            logger.info("Refused to mark inactive student id=%s", student.id)
            raise IneligibleStudentError(
                f"Student {student.name} is inactive and cannot be marked.",
                student_id=student.id,
            )

    def _build_sheet(self, on: date, roster: Sequence[Student], day_records: Sequence[AttendanceRecord]) -> DaySheet:
        active = index.active_only(roster)
        projected = view.project(active, day_records)
        return DaySheet(
            date=on,
            rows=[SheetRow(student=s, effective=projected[s.id]) for s in active],
            tally=view.tally(projected),
            hidden_records=len(view.orphaned(active, day_records)),
        )
