"""Students - the Student entity, its vocabularies and field validation."""

from roster.students.exceptions import (
    DuplicateEmailError,
    InvalidArgumentError,
    RepositoryError,
    RosterError,
)
from roster.students.models import Department, Status, Student

__all__ = [
    "Department",
    "DuplicateEmailError",
    "InvalidArgumentError",
    "RepositoryError",
    "RosterError",
    "Status",
    "Student",
]
