"""SQLAlchemy table mapping for the relational backend."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003 - used at runtime for SQLAlchemy

from sqlalchemy import Date, DateTime, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from roster.students import Department, Status, Student


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class StudentRecord(Base):
    """Row in the ``students`` table.

    Department and status are stored by member name.
    """

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_name", "name"),
        Index("idx_department", "department"),
        Index("idx_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @staticmethod
    def column_values(student: Student) -> dict[str, object]:
        """Map a Student onto column values (everything except id and timestamps)."""
        return {
            "name": student.name,
            "email": student.email,
            "phone": student.phone,
            "dob": student.date_of_birth,
            "address": student.address,
            "department": student.department.name,
            "status": student.status.name,
        }

    def to_student(self) -> Student:
        """Rebuild the validated domain object."""
        return Student(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            date_of_birth=self.dob,
            address=self.address,
            department=Department[self.department],
            status=Status[self.status],
        )

    def __repr__(self) -> str:
        return f"<StudentRecord(id={self.id!r}, email={self.email!r})>"
