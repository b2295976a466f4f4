"""Relational repository backed by SQLAlchemy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from roster.repository.records import StudentRecord
from roster.students import DuplicateEmailError, Student

if TYPE_CHECKING:
    from datetime import date

    from roster.repository.database import Database
    from roster.students import Department, Status

logger = logging.getLogger(__name__)


def _is_email_conflict(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "email" in message and ("unique" in message or "duplicate" in message)


class SqlStudentRepository:
    """Student repository that stores records in a relational database.

    Holds no state besides the injected Database. Each call runs one SQL
    statement on its own session, so a pooled connection is borrowed and
    returned within the call.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Shared, pooled database handle. Its tables must exist
                (see Database.create_tables). The caller owns and closes it.
        """
        self._db = database

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
        """Insert a new student; the database assigns the id.

        Returns:
            The stored Student with its generated id.

        Raises:
            InvalidArgumentError: If a field is invalid (nothing is executed).
            DuplicateEmailError: If another student already has this email.
        """
        candidate = Student(0, name, email, phone, date_of_birth, address, department, status)
        session = self._db.get_session()
        try:
            record = StudentRecord(**StudentRecord.column_values(candidate))
            session.add(record)
            session.commit()
            logger.info("Inserted student %d", record.id)
            return candidate.with_id(record.id)
        except IntegrityError as e:
            session.rollback()
            if _is_email_conflict(e):
                raise DuplicateEmailError(candidate.email) from e
            raise
        finally:
            session.close()

    def find_by_id(self, student_id: int) -> Student | None:
        session = self._db.get_session()
        try:
            record = session.get(StudentRecord, student_id)
            return record.to_student() if record is not None else None
        finally:
            session.close()

    def update(self, student: Student) -> Student | None:
        """Overwrite every column of the row with ``student.id``.

        Returns:
            The student, or None if no row has that id.

        Raises:
            DuplicateEmailError: If the new email belongs to another student.
        """
        session = self._db.get_session()
        try:
            stmt = (
                update(StudentRecord)
                .where(StudentRecord.id == student.id)
                .values(**StudentRecord.column_values(student))
            )
            result = session.execute(stmt)
            session.commit()
            if result.rowcount == 0:
                return None
            logger.info("Updated student %d", student.id)
            return student
        except IntegrityError as e:
            session.rollback()
            if _is_email_conflict(e):
                raise DuplicateEmailError(student.email) from e
            raise
        finally:
            session.close()

    def delete_by_id(self, student_id: int) -> bool:
        session = self._db.get_session()
        try:
            result = session.execute(delete(StudentRecord).where(StudentRecord.id == student_id))
            session.commit()
            deleted = result.rowcount > 0
            if deleted:
                logger.info("Deleted student %d", student_id)
            return deleted
        finally:
            session.close()

    def find_all(self) -> list[Student]:
        session = self._db.get_session()
        try:
            stmt = select(StudentRecord).order_by(StudentRecord.id)
            result = session.execute(stmt)
            return [record.to_student() for record in result.scalars().all()]
        finally:
            session.close()
