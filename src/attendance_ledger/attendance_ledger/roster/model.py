from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import StudentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student on the roster."""

    id: int
    name: str
    roll_num: str
    status: StudentStatus
    created_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE
