"""Repository interface shared by every storage backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from roster.students import Department, Status, Student


@runtime_checkable
class StudentRepository(Protocol):
    """Persistence operations for Student records.

    Absence is a normal outcome: lookups, updates and deletes of an unknown id
    return None or False instead of raising.
    """

    def save(
        self,
        name: str,
        email: str,
        phone: str,
        date_of_birth: date,
        address: str | None,
        department: Department,
        status: Status,
    ) -> Student:
        """Validate, assign a new id and persist a student."""
        ...

    def find_by_id(self, student_id: int) -> Student | None:
        """Get a student by id, or None if there is none."""
        ...

    def update(self, student: Student) -> Student | None:
        """Replace the stored record with the same id. Never inserts."""
        ...

    def delete_by_id(self, student_id: int) -> bool:
        """Remove a student. Returns True if a record was removed."""
        ...

    def find_all(self) -> list[Student]:
        """List every student, ordered by id."""
        ...
