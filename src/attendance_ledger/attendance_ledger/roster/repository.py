from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .model import Student


class RosterRepository(Protocol):
    """Roster store adapter.

    Mutations return the stored entity but callers must re-fetch the roster
    afterwards; nothing here caches.
    """

    def list_students(self) -> Sequence[Student]:
        """All students, newest first."""

        raise NotImplementedError

    def create_student(self, fields: Mapping[str, object]) -> Student:
        raise NotImplementedError

    def update_student(self, student_id: int, fields: Mapping[str, object]) -> Student:
        raise NotImplementedError

    def delete_student(self, student_id: int) -> None:
        raise NotImplementedError
