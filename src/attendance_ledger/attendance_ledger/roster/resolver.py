from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from .model import Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    student: Student
    ambiguous: bool = False


@dataclass(frozen=True)
class Inactive:
    student: Student
    ambiguous: bool = False


@dataclass(frozen=True)
class NotFound:
    roll_input: str


Match = Union[Found, Inactive, NotFound]


def normalize_roll(value: str) -> str:
    return (value or "").strip().lower()


def resolve(roll_input: str, roster: Sequence[Student]) -> Match:
    """Resolve a typed or scanned roll number against a roster snapshot.

    Comparison is case-insensitive on the trimmed input. When several students
    share the roll number the first one in roster order wins; the collision is
    logged and flagged on the result but never rejected.
    """

    key = normalize_roll(roll_input)
    if not key:
        return NotFound(roll_input=roll_input or "")

    matches = [s for s in roster if s.roll_num.strip().lower() == key]
    if not matches:
        return NotFound(roll_input=roll_input.strip())

    ambiguous = len(matches) > 1
    if ambiguous:
        logger.warning(
            "Roll number %r matches %d students (ids=%s); using the first",
            roll_input.strip(),
            len(matches),
            [s.id for s in matches],
        )

    student = matches[0]
    if not student.is_active:
        return Inactive(student=student, ambiguous=ambiguous)
    return Found(student=student, ambiguous=ambiguous)
