from __future__ import annotations

from datetime import date, datetime

from ..core.enums import AttendanceStatus, StudentStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def parse_student_status(value) -> StudentStatus:
    if isinstance(value, StudentStatus):
        return value
    try:
        return StudentStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid student status: {value!r}")


def parse_attendance_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")


def parse_iso_date(value) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format (YYYY-MM-DD)")
