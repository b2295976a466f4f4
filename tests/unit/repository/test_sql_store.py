"""Unit tests for the relational repository on in-memory SQLite."""

from typing import Any

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from roster.repository import Database, SqlStudentRepository
from roster.repository.records import StudentRecord
from roster.students import DuplicateEmailError, RepositoryError


@pytest.mark.unit
class TestSqlSave:
    """Tests for save."""

    def test_database_assigns_ids(
        self, sql_repo: SqlStudentRepository, john_doe: dict[str, Any]
    ) -> None:
        first = sql_repo.save(**john_doe)
        second = sql_repo.save(**{**john_doe, "email": "second@example.com"})

        assert first.id > 0
        assert second.id > first.id

    def test_stores_enum_names_and_timestamps(
        self,
        sql_repo: SqlStudentRepository,
        memory_database: Database,
        john_doe: dict[str, Any],
    ) -> None:
        saved = sql_repo.save(**john_doe)

        with memory_database.get_session() as session:
            record = session.execute(
                select(StudentRecord).where(StudentRecord.id == saved.id)
            ).scalar_one()

        assert record.department == "CSE"
        assert record.status == "ACTIVE"
        assert record.email == "john.doe@example.com"
        assert record.created_at is not None
        assert record.updated_at is not None

    def test_duplicate_email_raises(
        self, sql_repo: SqlStudentRepository, john_doe: dict[str, Any]
    ) -> None:
        """Second insert with the same normalized email fails; the first survives."""
        first = sql_repo.save(**john_doe)

        with pytest.raises(DuplicateEmailError) as exc_info:
            sql_repo.save(**{**john_doe, "email": "JOHN.DOE@Example.com"})

        assert exc_info.value.email == "john.doe@example.com"
        assert isinstance(exc_info.value, RepositoryError)
        assert sql_repo.find_by_id(first.id) == first
        assert len(sql_repo.find_all()) == 1


@pytest.mark.unit
class TestSqlUpdate:
    """Tests for update."""

    def test_update_to_taken_email_raises(
        self, sql_repo: SqlStudentRepository, john_doe: dict[str, Any]
    ) -> None:
        sql_repo.save(**john_doe)
        other = sql_repo.save(**{**john_doe, "email": "other@example.com"})

        with pytest.raises(DuplicateEmailError):
            sql_repo.update(other.with_email("john.doe@example.com"))

        assert sql_repo.find_by_id(other.id).email == "other@example.com"

    def test_update_with_unchanged_values_still_found(
        self, sql_repo: SqlStudentRepository, john_doe: dict[str, Any]
    ) -> None:
        saved = sql_repo.save(**john_doe)

        assert sql_repo.update(saved) == saved


@pytest.mark.unit
class TestSqlFailuresPropagate:
    """Database errors surface to the caller, unlike json write failures."""

    def test_missing_table_raises(
        self, sql_repo: SqlStudentRepository, memory_database: Database
    ) -> None:
        memory_database.drop_tables()

        with pytest.raises(OperationalError):
            sql_repo.find_all()

    def test_missing_table_on_save_raises(
        self,
        sql_repo: SqlStudentRepository,
        memory_database: Database,
        john_doe: dict[str, Any],
    ) -> None:
        memory_database.drop_tables()

        with pytest.raises(OperationalError):
            sql_repo.save(**john_doe)
