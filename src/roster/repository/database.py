"""Pooled database connection manager for the relational backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from roster.repository.records import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine, URL

logger = logging.getLogger(__name__)


@dataclass
class PoolSettings:
    """Connection pool limits.

    Attributes:
        pool_size: Connections kept open in the pool.
        max_overflow: Extra connections allowed above pool_size under load.
        pool_timeout: Seconds to wait for a free connection before failing.
        pool_recycle: Seconds after which an idle connection is replaced.
        pool_pre_ping: Test connections for liveness on checkout.
        echo: Log every SQL statement.
    """

    pool_size: int = 5
    max_overflow: int = 5
    pool_timeout: float = 30.0
    pool_recycle: int = 1800
    pool_pre_ping: bool = True
    echo: bool = False


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class Database:
    """Database connection manager.

    Owns the engine and its connection pool. Repositories receive a Database
    instance and borrow one session per operation; closing the Database disposes
    of the pool.
    """

    def __init__(self, url: str = "sqlite:///roster.db", pool: PoolSettings | None = None) -> None:
        """Initialize database connection settings.

        Args:
            url: SQLAlchemy database URL. "sqlite:///:memory:" gives a private
                in-memory database shared across threads.
            pool: Pool limits. Ignored for in-memory SQLite.
        """
        self.url = make_url(url)
        self.pool = pool or PoolSettings()
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            if _is_memory_sqlite(self.url):
                # One shared connection, usable from any thread
                self._engine = create_engine(
                    self.url,
                    echo=self.pool.echo,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(
                    self.url,
                    echo=self.pool.echo,
                    pool_size=self.pool.pool_size,
                    max_overflow=self.pool.max_overflow,
                    pool_timeout=self.pool.pool_timeout,
                    pool_recycle=self.pool.pool_recycle,
                    pool_pre_ping=self.pool.pool_pre_ping,
                )

            if self.url.get_backend_name() == "sqlite":

                @event.listens_for(self._engine, "connect")
                def set_sqlite_pragma(dbapi_connection: object, _connection_record: object) -> None:
                    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.execute("PRAGMA foreign_keys=ON")
                    cursor.close()

            logger.info(
                "Database engine created for %s",
                self.url.render_as_string(hide_password=True),
            )

        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
            )
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session.

        Returns:
            A new SQLAlchemy session. It checks a connection out of the pool on
            first use and returns it when closed.
        """
        return self.session_factory()

    def close(self) -> None:
        """Dispose of the pool and its connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection pool closed")
