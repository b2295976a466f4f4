"""JSON snapshot codec for the file-backed repository.

The snapshot is a pretty-printed JSON array of student objects::

    [
      {
        "id": 101,
        "name": "John Doe",
        "email": "john.doe@example.com",
        "phone": "1234567890",
        "DOB": "2005-05-10",
        "address": "123 Main St",
        "department": "CSE",
        "status": "ACTIVE"
      }
    ]
"""

from __future__ import annotations

import json
import logging
from datetime import date  # noqa: TC003 - used at runtime by pydantic
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from roster.students import Department, InvalidArgumentError, Status, Student

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)


class StudentSnapshot(BaseModel):
    """One student as stored in the snapshot file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str
    email: str
    phone: str
    date_of_birth: date = Field(alias="DOB")
    address: str | None = None
    department: str
    status: str

    @classmethod
    def from_student(cls, student: Student) -> StudentSnapshot:
        return cls(
            id=student.id,
            name=student.name,
            email=student.email,
            phone=student.phone,
            date_of_birth=student.date_of_birth,
            address=student.address,
            department=student.department.name,
            status=student.status.name,
        )

    def to_student(self) -> Student:
        """Rebuild a validated Student.

        Raises:
            InvalidArgumentError: If a field fails validation or an enum name is
                unknown.
        """
        try:
            department = Department[self.department]
        except KeyError as e:
            raise InvalidArgumentError("department", f"Unknown department '{self.department}'") from e
        try:
            status = Status[self.status]
        except KeyError as e:
            raise InvalidArgumentError("status", f"Unknown status '{self.status}'") from e
        return Student(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            date_of_birth=self.date_of_birth,
            address=self.address,
            department=department,
            status=status,
        )


_SNAPSHOT_LIST = TypeAdapter(list[StudentSnapshot])


def encode_students(students: Iterable[Student]) -> str:
    """Serialize students to the snapshot JSON text."""
    snapshots = [StudentSnapshot.from_student(s) for s in students]
    return _SNAPSHOT_LIST.dump_json(snapshots, by_alias=True, indent=2).decode("utf-8")


def decode_students(text: str) -> list[Student]:
    """Parse snapshot JSON text into students.

    Records that fail validation are skipped with a warning so one bad entry
    does not discard the rest of the file.

    Returns:
        The valid students. Empty if the text is not a JSON array.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.warning("Snapshot is not valid JSON: %s", e)
        return []

    if not isinstance(data, list):
        logger.warning("Snapshot must be a JSON array, got %s", type(data).__name__)
        return []

    students: list[Student] = []
    for index, item in enumerate(data):
        try:
            students.append(StudentSnapshot.model_validate(item).to_student())
        except (ValidationError, InvalidArgumentError) as e:
            logger.warning("Skipping invalid snapshot record #%d: %s", index, e)
    return students


def load_students(path: Path) -> list[Student]:
    """Load students from a snapshot file.

    Never raises: a missing or unreadable file yields an empty list.
    """
    if not path.exists():
        logger.info("Snapshot %s not found, starting with no students", path)
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read snapshot %s", path)
        return []
    if not text.strip():
        return []
    return decode_students(text)


def save_students(path: Path, students: Iterable[Student]) -> None:
    """Overwrite the snapshot file with the given students.

    Raises:
        OSError: If the file cannot be written.
    """
    path.write_text(encode_students(students), encoding="utf-8")
