"""Unit tests for the JSON snapshot codec."""

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from roster.repository.snapshot import (
    decode_students,
    encode_students,
    load_students,
    save_students,
)
from roster.students import Department, Status, Student


@pytest.fixture
def student(john_doe: dict[str, Any]) -> Student:
    return Student(id=101, **john_doe)


@pytest.mark.unit
class TestEncodeStudents:
    """Tests for encode_students."""

    def test_field_names_and_order(self, student: Student) -> None:
        """Keys appear in the documented order, with DOB as the date key."""
        data = json.loads(encode_students([student]))

        assert list(data[0]) == [
            "id",
            "name",
            "email",
            "phone",
            "DOB",
            "address",
            "department",
            "status",
        ]

    def test_values(self, student: Student) -> None:
        record = json.loads(encode_students([student]))[0]

        assert record == {
            "id": 101,
            "name": "John Doe",
            "email": "john.doe@example.com",
            "phone": "1234567890",
            "DOB": "2005-05-10",
            "address": "123 Main St",
            "department": "CSE",
            "status": "ACTIVE",
        }

    def test_pretty_printed(self, student: Student) -> None:
        text = encode_students([student])
        assert text.startswith("[\n  {\n")

    def test_empty_list(self) -> None:
        assert json.loads(encode_students([])) == []


@pytest.mark.unit
class TestDecodeStudents:
    """Tests for decode_students."""

    def test_decodes_valid_records(self, student: Student) -> None:
        decoded = decode_students(encode_students([student]))

        assert len(decoded) == 1
        assert decoded[0].id == 101
        assert decoded[0].date_of_birth == date(2005, 5, 10)
        assert decoded[0].department is Department.CSE
        assert decoded[0].status is Status.ACTIVE

    def test_unknown_fields_ignored(self) -> None:
        text = json.dumps(
            [
                {
                    "id": 5,
                    "name": "Ann Lee",
                    "email": "ann@example.com",
                    "phone": "5550001111",
                    "DOB": "2001-01-01",
                    "department": "IT",
                    "status": "INACTIVE",
                    "nickname": "annie",
                }
            ]
        )

        decoded = decode_students(text)

        assert decoded[0].name == "Ann Lee"
        assert decoded[0].address is None

    def test_stored_values_are_normalized_on_load(self) -> None:
        """Hand-edited records are normalized like any other construction."""
        text = json.dumps(
            [
                {
                    "id": 6,
                    "name": "Ann Lee",
                    "email": "Ann@Example.com",
                    "phone": "(555) 000-1111",
                    "DOB": "2001-01-01",
                    "department": "IT",
                    "status": "ACTIVE",
                }
            ]
        )

        decoded = decode_students(text)

        assert decoded[0].email == "ann@example.com"
        assert decoded[0].phone == "5550001111"

    def test_invalid_records_skipped(
        self, student: Student, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A bad record is dropped with a warning, the rest still load."""
        records = json.loads(encode_students([student]))
        records.append({**records[0], "id": 102, "email": "broken"})
        records.append({**records[0], "id": 103, "department": "ASTROLOGY"})
        records.append({"id": 104})
        records.append("not an object")

        decoded = decode_students(json.dumps(records))

        assert [s.id for s in decoded] == [101]
        assert "Skipping invalid snapshot record" in caplog.text

    @pytest.mark.parametrize("text", ["{not json", '{"id": 1}', "null", "42"])
    def test_non_list_returns_empty(self, text: str) -> None:
        assert decode_students(text) == []

    def test_deeply_nested_json_returns_empty(self) -> None:
        depth = 100_000
        assert decode_students("[" * depth + "]" * depth) == []


@pytest.mark.unit
class TestSnapshotFile:
    """Tests for load_students and save_students."""

    def test_save_then_load(self, tmp_path: Path, student: Student) -> None:
        path = tmp_path / "students.json"

        save_students(path, [student])
        loaded = load_students(path)

        assert loaded == [student]
        assert loaded[0].email == student.email

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_students(tmp_path / "absent.json") == []

    def test_empty_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "students.json"
        path.write_text("")

        assert load_students(path) == []

    def test_unreadable_path_is_empty(self, tmp_path: Path) -> None:
        """A directory where the file should be cannot be read; no error escapes."""
        path = tmp_path / "students.json"
        path.mkdir()

        assert load_students(path) == []

    def test_non_utf8_file_is_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Bytes that are not UTF-8 are logged, not raised."""
        path = tmp_path / "students.json"
        path.write_bytes(b'[{"name": "\xff\xfe bad"}]')

        assert load_students(path) == []
        assert "Failed to read snapshot" in caplog.text

    def test_save_failure_raises(self, tmp_path: Path, student: Student) -> None:
        path = tmp_path / "students.json"
        path.mkdir()

        with pytest.raises(OSError):
            save_students(path, [student])
