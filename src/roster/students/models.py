"""Domain models for student records."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date  # noqa: TC003 - used at runtime by dataclass fields
from enum import StrEnum
from typing import Self

from roster.students.exceptions import InvalidArgumentError
from roster.students.validation import (
    is_valid_email,
    is_valid_name,
    is_valid_phone,
    normalize_email,
    normalize_phone,
)


class _CodedEnum(StrEnum):
    """String enum whose members carry a short code and a display name.

    The member value is the code, so members compare equal to their code string.
    """

    display_name: str

    def __new__(cls, code: str, display_name: str) -> _CodedEnum:
        member = str.__new__(cls, code)
        member._value_ = code
        member.display_name = display_name
        return member

    @property
    def code(self) -> str:
        """Short machine-readable code."""
        return self.value

    @classmethod
    def from_code(cls, code: str | None) -> Self | None:
        """Find a member by code or symbolic name, ignoring case.

        Args:
            code: Code or member name, e.g. "cse" or "CSE".

        Returns:
            The matching member, or None if nothing matches.
        """
        if code is None:
            return None
        wanted = code.strip().upper()
        for member in cls:
            if member.code.upper() == wanted or member.name == wanted:
                return member
        return None


class Department(_CodedEnum):
    """Academic departments."""

    CSE = "CSE", "Computer Science & Engineering"
    AI = "AI", "Artificial Intelligence"
    ML = "ML", "Machine Learning"
    ECE = "ECE", "Electronics & Communication"
    EE = "EE", "Electrical Engineering"
    ME = "ME", "Mechanical Engineering"
    CE = "CE", "Civil Engineering"
    IT = "IT", "Information Technology"
    CHE = "CHE", "Chemical Engineering"
    BT = "BT", "Biotechnology"
    AE = "AE", "Aerospace Engineering"


class Status(_CodedEnum):
    """Enrollment status of a student."""

    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    GRADUATED = "GRADUATED", "Graduated"
    DROPPED = "DROPPED", "Dropped"


@dataclass(frozen=True, eq=False)
class Student:
    """Immutable student record.

    Name, email and phone are validated on construction; email and phone are
    stored in normalized form. Every ``with_*`` method builds a new instance
    through the constructor, so derived records are validated the same way.

    Two students are equal when they share an ``id``, whatever their other fields.

    Attributes:
        id: Identifier assigned by the repository. 0 until assigned.
        name: Full name.
        email: Lower-cased, trimmed email address.
        phone: Phone number with whitespace, hyphens and parentheses removed.
        date_of_birth: Date of birth.
        address: Free-text postal address (optional).
        department: Academic department.
        status: Enrollment status.
    """

    id: int
    name: str
    email: str
    phone: str
    date_of_birth: date
    address: str | None
    department: Department
    status: Status

    def __post_init__(self) -> None:
        if not is_valid_name(self.name):
            raise InvalidArgumentError("name", "Invalid name format.")
        if not is_valid_email(self.email):
            raise InvalidArgumentError("email", "Invalid email format.")
        object.__setattr__(self, "email", normalize_email(self.email))
        if not is_valid_phone(self.phone):
            raise InvalidArgumentError("phone", "Invalid phone number.")
        object.__setattr__(self, "phone", normalize_phone(self.phone))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_id(self, new_id: int) -> Student:
        """Return a copy carrying a repository-assigned id."""
        return replace(self, id=new_id)

    def with_name(self, new_name: str) -> Student:
        """Return a copy with a new name, validated like the original."""
        return replace(self, name=new_name)

    def with_email(self, new_email: str) -> Student:
        """Return a copy with a new email, validated then normalized."""
        return replace(self, email=new_email)

    def with_phone(self, new_phone: str) -> Student:
        """Return a copy with a new phone number, validated then normalized."""
        return replace(self, phone=new_phone)

    def with_address(self, new_address: str | None) -> Student:
        """Return a copy with a new address (None clears it)."""
        return replace(self, address=new_address)

    def with_department(self, new_department: Department) -> Student:
        """Return a copy in another department."""
        return replace(self, department=new_department)

    def with_status(self, new_status: Status) -> Student:
        """Return a copy with another enrollment status."""
        return replace(self, status=new_status)

    def describe(self) -> str:
        """Multi-line, human-readable summary of the record."""
        return (
            f"ID:         {self.id}\n"
            f"Name:       {self.name}\n"
            f"Email:      {self.email}\n"
            f"Phone:      {self.phone}\n"
            f"DOB:        {self.date_of_birth.isoformat()}\n"
            f"Address:    {self.address or '-'}\n"
            f"Department: {self.department.display_name}\n"
            f"Status:     {self.status.display_name}"
        )

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, name={self.name!r}, email={self.email!r})>"
