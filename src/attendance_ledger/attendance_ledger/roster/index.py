from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .model import Student


@dataclass(frozen=True)
class RosterCounts:
    total: int
    active: int
    inactive: int


def search(roster: Sequence[Student], query: str) -> List[Student]:
    """Students whose name or roll number contains ``query``, case-insensitively.

    Roster order is preserved; an empty query returns the whole roster.
    """

    needle = (query or "").lower()
    if not needle:
        return list(roster)
    return [s for s in roster if needle in s.name.lower() or needle in s.roll_num.lower()]


def active_only(roster: Sequence[Student]) -> List[Student]:
    return [s for s in roster if s.is_active]


def inactive_only(roster: Sequence[Student]) -> List[Student]:
    return [s for s in roster if not s.is_active]


def count(roster: Sequence[Student]) -> RosterCounts:
    return RosterCounts(total=len(roster), active=len(active_only(roster)), inactive=len(inactive_only(roster)))
