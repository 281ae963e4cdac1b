from __future__ import annotations

from enum import Enum


class StudentStatus(str, Enum):
    """Roster eligibility. Only active students can be marked."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Statuses that can be persisted in the ledger.

    "pending" is deliberately not a member: it only exists as the absence of a record.
    """

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class WriteMode(str, Enum):
    ATOMIC = "atomic"
    FIND_OR_CREATE = "find_or_create"
