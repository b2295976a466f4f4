"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from roster.repository import Database, JsonStudentRepository, SqlStudentRepository
from roster.students import Department, Status


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def john_doe() -> dict[str, Any]:
    """Raw field values for a valid student, as a user would type them."""
    return {
        "name": "John Doe",
        "email": "John.Doe@Example.com",
        "phone": "(123) 456-7890",
        "date_of_birth": date(2005, 5, 10),
        "address": "123 Main St",
        "department": Department.CSE,
        "status": Status.ACTIVE,
    }


@pytest.fixture
def json_repo(tmp_path: Path) -> JsonStudentRepository:
    """Create a file-backed repository with a fresh snapshot path."""
    return JsonStudentRepository(tmp_path / "students.json")


@pytest.fixture
def memory_database() -> Iterator[Database]:
    """Create an in-memory SQLite database with tables."""
    db = Database("sqlite:///:memory:")
    db.create_tables()
    yield db
    db.close()


@pytest.fixture
def sql_repo(memory_database: Database) -> SqlStudentRepository:
    """Create a relational repository on the in-memory database."""
    return SqlStudentRepository(memory_database)


@pytest.fixture(params=["json", "sql"])
def repo(
    request: pytest.FixtureRequest,
    json_repo: JsonStudentRepository,
    sql_repo: SqlStudentRepository,
) -> JsonStudentRepository | SqlStudentRepository:
    """Each repository backend in turn."""
    return json_repo if request.param == "json" else sql_repo
