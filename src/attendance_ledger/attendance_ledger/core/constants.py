"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

STUDENTS_TABLE = "students"
ATTENDANCE_TABLE = "attendance"

PENDING = "pending"

DEFAULT_REST_TIMEOUT_SECONDS = 10.0
