"""Behaviour shared by every repository backend."""

from datetime import date
from typing import Any

import pytest

from roster.repository import StudentRepository
from roster.students import Department, InvalidArgumentError, Status, Student


@pytest.mark.unit
class TestRepositoryContract:
    """Runs once per backend (json and sql)."""

    def test_implements_protocol(self, repo: StudentRepository) -> None:
        assert isinstance(repo, StudentRepository)

    def test_save_then_find_round_trips_all_fields(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        saved = repo.save(**john_doe)

        found = repo.find_by_id(saved.id)

        assert saved.id > 0
        assert saved.email == "john.doe@example.com"
        assert saved.phone == "1234567890"
        assert found is not None
        assert found == saved
        assert (
            found.name,
            found.email,
            found.phone,
            found.date_of_birth,
            found.address,
            found.department,
            found.status,
        ) == (
            "John Doe",
            "john.doe@example.com",
            "1234567890",
            date(2005, 5, 10),
            "123 Main St",
            Department.CSE,
            Status.ACTIVE,
        )

    def test_null_address_round_trips(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        saved = repo.save(**{**john_doe, "address": None})

        assert repo.find_by_id(saved.id).address is None

    def test_find_never_issued_id(self, repo: StudentRepository) -> None:
        assert repo.find_by_id(424242) is None

    def test_invalid_save_raises_and_stores_nothing(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            repo.save(**{**john_doe, "phone": "not a phone"})

        assert repo.find_all() == []

    def test_update_existing(self, repo: StudentRepository, john_doe: dict[str, Any]) -> None:
        saved = repo.save(**john_doe)

        result = repo.update(saved.with_address("New Address").with_status(Status.GRADUATED))

        assert result is not None
        found = repo.find_by_id(saved.id)
        assert found.address == "New Address"
        assert found.status is Status.GRADUATED

    def test_update_missing_returns_none(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        assert repo.update(Student(id=987654, **john_doe)) is None
        assert repo.find_all() == []

    def test_delete(self, repo: StudentRepository, john_doe: dict[str, Any]) -> None:
        saved = repo.save(**john_doe)

        assert repo.delete_by_id(saved.id) is True
        assert repo.find_by_id(saved.id) is None
        assert repo.delete_by_id(saved.id) is False

    def test_find_all_empty_is_list(self, repo: StudentRepository) -> None:
        assert repo.find_all() == []

    def test_find_all_returns_every_record(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        a = repo.save(**john_doe)
        b = repo.save(**{**john_doe, "email": "b@example.com", "name": "Bee Bee"})

        assert repo.find_all() == [a, b]

    def test_failed_derivation_leaves_record_unchanged(
        self, repo: StudentRepository, john_doe: dict[str, Any]
    ) -> None:
        saved = repo.save(**john_doe)

        with pytest.raises(InvalidArgumentError):
            repo.update(saved.with_name("Invalid@Name"))

        assert repo.find_by_id(saved.id).name == "John Doe"
