"""Backend selection for the student repository."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from roster.repository.database import Database
from roster.repository.json_store import JsonStudentRepository
from roster.repository.sql_store import SqlStudentRepository

if TYPE_CHECKING:
    from collections.abc import Iterator

    from roster.config import RosterConfig
    from roster.repository.base import StudentRepository

logger = logging.getLogger(__name__)


@contextmanager
def open_repository(config: RosterConfig) -> Iterator[StudentRepository]:
    """Open the repository selected by ``config.storage.backend``.

    The sql backend creates its tables if needed and closes its connection pool
    when the block exits.

    Args:
        config: Loaded configuration.

    Yields:
        A ready-to-use repository.
    """
    if config.storage.backend == "sql":
        database = Database(config.database.url, config.database.pool)
        try:
            database.create_tables()
            logger.info("Using sql backend")
            yield SqlStudentRepository(database)
        finally:
            database.close()
    else:
        path = config.get_json_path()
        logger.info("Using json backend at %s", path)
        yield JsonStudentRepository(path)
