"""StudentService - input parsing and orchestration on top of a repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roster.students import Department, InvalidArgumentError, Status
from roster.students.validation import parse_date

if TYPE_CHECKING:
    from collections.abc import Callable

    from roster.repository.base import StudentRepository
    from roster.students import Student

logger = logging.getLogger(__name__)


def parse_department(code: str | None) -> Department:
    """Convert a department code or name, raising InvalidArgumentError if unknown."""
    department = Department.from_code(code)
    if department is None:
        raise InvalidArgumentError("department", f"Invalid department code '{code}'.")
    return department


def parse_status(code: str | None) -> Status:
    """Convert a status code or name, raising InvalidArgumentError if unknown."""
    status = Status.from_code(code)
    if status is None:
        raise InvalidArgumentError("status", f"Invalid status code '{code}'.")
    return status


class StudentService:
    """Business operations on students.

    Converts raw user input to domain values and delegates persistence to the
    repository. Input errors are raised before the repository is called;
    repository errors pass through unchanged.
    """

    def __init__(self, repository: StudentRepository) -> None:
        self._repository = repository

    def create_student(
        self,
        name: str,
        email: str,
        phone: str,
        dob_text: str,
        address: str | None,
        department_code: str,
        status_code: str,
    ) -> Student:
        """Create a student from raw strings.

        Args:
            name: Full name.
            email: Email address.
            phone: Phone number, punctuation allowed.
            dob_text: Date of birth as yyyy-MM-dd.
            address: Postal address (optional).
            department_code: Department code or name, e.g. "cse".
            status_code: Status code or name, e.g. "active".

        Returns:
            The created Student with its assigned id.

        Raises:
            InvalidArgumentError: If any input is invalid.
        """
        date_of_birth = parse_date(dob_text)
        if date_of_birth is None:
            raise InvalidArgumentError("date_of_birth", "Invalid date of birth format.")
        department = parse_department(department_code)
        status = parse_status(status_code)

        student = self._repository.save(
            name, email, phone, date_of_birth, address, department, status
        )
        logger.info("Created student %d", student.id)
        return student

    def _apply(self, student_id: int, change: Callable[[Student], Student]) -> Student | None:
        current = self._repository.find_by_id(student_id)
        if current is None:
            return None
        return self._repository.update(change(current))

    def update_name(self, student_id: int, new_name: str) -> Student | None:
        """Rename a student. Returns None if the id is unknown."""
        return self._apply(student_id, lambda s: s.with_name(new_name))

    def update_email(self, student_id: int, new_email: str) -> Student | None:
        return self._apply(student_id, lambda s: s.with_email(new_email))

    def update_phone(self, student_id: int, new_phone: str) -> Student | None:
        return self._apply(student_id, lambda s: s.with_phone(new_phone))

    def update_address(self, student_id: int, new_address: str | None) -> Student | None:
        return self._apply(student_id, lambda s: s.with_address(new_address))

    def update_department(self, student_id: int, department_code: str) -> Student | None:
        """Move a student to another department.

        Raises:
            InvalidArgumentError: If the code is unknown (checked first).
        """
        department = parse_department(department_code)
        return self._apply(student_id, lambda s: s.with_department(department))

    def update_status(self, student_id: int, status_code: str) -> Student | None:
        """Change a student's status.

        Raises:
            InvalidArgumentError: If the code is unknown (checked first).
        """
        status = parse_status(status_code)
        return self._apply(student_id, lambda s: s.with_status(status))

    def update_fields(
        self,
        student_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        department_code: str | None = None,
        status_code: str | None = None,
    ) -> Student | None:
        """Change several fields at once with a single repository write.

        Every given value is parsed and validated before anything is stored, so
        an invalid value leaves the record untouched. Fields passed as None are
        kept.

        Returns:
            The updated Student, or None if the id is unknown.

        Raises:
            InvalidArgumentError: If any given value is invalid.
        """
        department = parse_department(department_code) if department_code is not None else None
        status = parse_status(status_code) if status_code is not None else None

        def change(student: Student) -> Student:
            if name is not None:
                student = student.with_name(name)
            if email is not None:
                student = student.with_email(email)
            if phone is not None:
                student = student.with_phone(phone)
            if address is not None:
                student = student.with_address(address)
            if department is not None:
                student = student.with_department(department)
            if status is not None:
                student = student.with_status(status)
            return student

        updated = self._apply(student_id, change)
        if updated is not None:
            logger.info("Updated student %d", student_id)
        return updated

    def delete_student(self, student_id: int) -> bool:
        deleted = self._repository.delete_by_id(student_id)
        if deleted:
            logger.info("Deleted student %d", student_id)
        return deleted

    def find_student(self, student_id: int) -> Student | None:
        return self._repository.find_by_id(student_id)

    def list_students(self) -> list[Student]:
        return self._repository.find_all()
