"""File-backed in-memory repository."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from roster.repository.snapshot import load_students, save_students
from roster.students import Student

if TYPE_CHECKING:
    from datetime import date

    from roster.students import Department, Status

logger = logging.getLogger(__name__)

# First id handed out by an empty store is BASELINE_ID + 1
BASELINE_ID = 100


class JsonStudentRepository:
    """Keeps students in a dict and mirrors it to a JSON snapshot file.

    Every successful mutation rewrites the whole snapshot (write-through). Write
    failures are logged and swallowed: the in-memory map stays authoritative and
    callers get a normal result either way.
    """

    def __init__(self, path: str | Path = "students.json") -> None:
        """Load the snapshot and position the id counter.

        Args:
            path: Snapshot file. A missing or unreadable file starts an empty store.
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        loaded = load_students(self.path)
        self._students: dict[int, Student] = {s.id: s for s in loaded}
        self._last_id = max(self._students, default=BASELINE_ID)
        logger.info(
            "Loaded %d students from %s (next id %d)",
            len(self._students),
            self.path,
            self._last_id + 1,
        )

    def _next_id(self) -> int:
        # caller holds self._lock
        self._last_id += 1
        return self._last_id

    def _persist(self) -> None:
        try:
            save_students(self.path, self._students.values())
        except OSError:
            logger.exception("Failed to write snapshot %s; keeping in-memory state", self.path)
        else:
            logger.debug("Wrote %d students to %s", len(self._students), self.path)

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
        """Create a student with the next free id.

        Raises:
            InvalidArgumentError: If name, email or phone is invalid. No id is
                consumed and nothing is written.
        """
        candidate = Student(0, name, email, phone, date_of_birth, address, department, status)
        with self._lock:
            student = candidate.with_id(self._next_id())
            self._students[student.id] = student
            self._persist()
        logger.info("Saved student %d", student.id)
        return student

    def find_by_id(self, student_id: int) -> Student | None:
        return self._students.get(student_id)

    def update(self, student: Student) -> Student | None:
        with self._lock:
            if student.id not in self._students:
                return None
            self._students[student.id] = student
            self._persist()
        logger.info("Updated student %d", student.id)
        return student

    def delete_by_id(self, student_id: int) -> bool:
        with self._lock:
            if self._students.pop(student_id, None) is None:
                return False
            self._persist()
        logger.info("Deleted student %d", student_id)
        return True

    def find_all(self) -> list[Student]:
        with self._lock:
            return sorted(self._students.values(), key=lambda s: s.id)
