from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..common.validators import parse_student_status, require_non_empty
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError
from . import index
from .model import Student
from .repository import RosterRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterPage:
    """Roster snapshot filtered for display, with counts over the full roster."""

    students: List[Student]
    counts: index.RosterCounts
    query: str


class RosterService:
    """Use case: register, edit and remove students.

    Every mutation is followed by a fresh ``list_students`` so callers only ever
    see state the store has confirmed.
    """

    def __init__(self, roster: RosterRepository):
        self._roster = roster

    def list_students(self) -> Sequence[Student]:
        return self._roster.list_students()

    def browse(self, query: str = "") -> RosterPage:
        roster = self._roster.list_students()
        query = query or ""
        return RosterPage(students=index.search(roster, query), counts=index.count(roster), query=query)

    def register(self, *, name: str, roll_num: str, status=StudentStatus.ACTIVE) -> Sequence[Student]:
        fields = {
            "name": require_non_empty(name, "Full name"),
            "roll_num": require_non_empty(roll_num, "Roll/ID number"),
            "status": parse_student_status(status),
        }
        self._warn_duplicate_roll(fields["roll_num"], exclude_id=None)
        created = self._roster.create_student(fields)
        logger.info("Registered student id=%s roll=%s", created.id, created.roll_num)
        return self._roster.list_students()

    def edit(
        self,
        student_id: int,
        *,
        name: Optional[str] = None,
        roll_num: Optional[str] = None,
        status=None,
    ) -> Sequence[Student]:
        fields: dict = {}
        if name is not None:
            fields["name"] = require_non_empty(name, "Full name")
        if roll_num is not None:
            fields["roll_num"] = require_non_empty(roll_num, "Roll/ID number")
            self._warn_duplicate_roll(fields["roll_num"], exclude_id=int(student_id))
        if status is not None:
            fields["status"] = parse_student_status(status)
        if not fields:
            raise ValidationError("Nothing to update")

        self._roster.update_student(int(student_id), fields)
        logger.info("Updated student id=%s fields=%s", student_id, sorted(fields))
        return self._roster.list_students()

    def remove(self, student_id: int) -> Sequence[Student]:
        # Ledger rows for this student are left in place; the day view ignores them.
        self._roster.delete_student(int(student_id))
        logger.info("Removed student id=%s", student_id)
        return self._roster.list_students()

    def _warn_duplicate_roll(self, roll_num: str, *, exclude_id: Optional[int]) -> None:
        key = roll_num.strip().lower()
        clashes = [
            s.id
            for s in self._roster.list_students()
            if s.is_active and s.id != exclude_id and s.roll_num.strip().lower() == key
        ]
        if clashes:
            logger.warning("Roll number %r already used by active student(s) %s", roll_num, clashes)
