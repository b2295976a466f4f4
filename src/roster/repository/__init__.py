"""Repository - storage backends for student records."""

from roster.repository.base import StudentRepository
from roster.repository.database import Database, PoolSettings
from roster.repository.factory import open_repository
from roster.repository.json_store import JsonStudentRepository
from roster.repository.sql_store import SqlStudentRepository

__all__ = [
    "Database",
    "JsonStudentRepository",
    "PoolSettings",
    "SqlStudentRepository",
    "StudentRepository",
    "open_repository",
]
