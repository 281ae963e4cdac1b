from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StudentNotFoundError(DomainError):
    """Raised when a student id or roll number matches nobody on the roster."""


class IneligibleStudentError(DomainError):
    """Raised when attendance is requested for a student who is not active."""

    def __init__(self, message: str, *, student_id: Optional[int] = None):
        super().__init__(message)
        self.student_id = student_id


class StoreError(Exception):
    """Base exception for failures reported by the remote table store."""

    def __init__(self, message: str, *, table: Optional[str] = None):
        super().__init__(message)
        self.table = table


class NotReachable(StoreError):
    """Store unreachable, timed out or failing on its side."""


class Rejected(StoreError):
    """Store refused the request (validation or constraint failure)."""


class NotFound(StoreError):
    """Referenced row id does not exist."""
