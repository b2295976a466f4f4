"""Configuration loading for roster."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from roster.logging import LoggingConfig
from roster.repository.database import PoolSettings

CONFIG_FILE_NAME = "roster.yaml"

BACKENDS = ("json", "sql")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class StorageConfig:
    """Which backend stores the students.

    Attributes:
        backend: "json" for the snapshot file, "sql" for a database.
        json_path: Snapshot file used by the json backend.
    """

    backend: str = "json"
    json_path: str = "students.json"


@dataclass
class DatabaseConfig:
    """Settings for the sql backend."""

    url: str = "sqlite:///roster.db"
    pool: PoolSettings = field(default_factory=PoolSettings)


@dataclass
class RosterConfig:
    """Roster configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root_path: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> RosterConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML. Every key is optional.
            root_path: Directory relative paths are resolved against.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section is not a mapping or a value is invalid.
        """
        storage_data = _section(data, "storage")
        storage = StorageConfig(
            backend=str(storage_data.get("backend", "json")).lower(),
            json_path=str(storage_data.get("json_path", "students.json")),
        )
        if storage.backend not in BACKENDS:
            raise ConfigError(
                f"Unknown storage backend '{storage.backend}' (expected one of: {', '.join(BACKENDS)})"
            )

        database_data = _section(data, "database")
        defaults = PoolSettings()
        try:
            pool = PoolSettings(
                pool_size=int(database_data.get("pool_size", defaults.pool_size)),
                max_overflow=int(database_data.get("max_overflow", defaults.max_overflow)),
                pool_timeout=float(database_data.get("pool_timeout", defaults.pool_timeout)),
                pool_recycle=int(database_data.get("pool_recycle", defaults.pool_recycle)),
                pool_pre_ping=bool(database_data.get("pool_pre_ping", defaults.pool_pre_ping)),
                echo=bool(database_data.get("echo", defaults.echo)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid database pool setting: {e}") from e
        database = DatabaseConfig(
            url=str(database_data.get("url", "sqlite:///roster.db")),
            pool=pool,
        )

        logging_data = _section(data, "logging")
        log_defaults = LoggingConfig()
        try:
            logging_config = LoggingConfig(
                dir=str(logging_data.get("dir", log_defaults.dir)),
                file=str(logging_data.get("file", log_defaults.file)),
                level=str(logging_data.get("level", log_defaults.level)).upper(),
                console=bool(logging_data.get("console", log_defaults.console)),
                max_bytes=int(logging_data.get("max_bytes", log_defaults.max_bytes)),
                backup_count=int(logging_data.get("backup_count", log_defaults.backup_count)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid logging setting: {e}") from e

        return cls(
            storage=storage,
            database=database,
            logging=logging_config,
            root_path=root_path,
        )

    def apply_env(self, environ: dict[str, str] | None = None) -> RosterConfig:
        """Apply ROSTER_* environment overrides in place.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            This configuration, for chaining.
        """
        env = os.environ if environ is None else environ
        if backend := env.get("ROSTER_BACKEND"):
            backend = backend.lower()
            if backend not in BACKENDS:
                raise ConfigError(f"Unknown storage backend '{backend}' in ROSTER_BACKEND")
            self.storage.backend = backend
        if url := env.get("ROSTER_DATABASE_URL"):
            self.database.url = url
        if log_dir := env.get("ROSTER_LOG_DIR"):
            self.logging.dir = log_dir
        if level := env.get("ROSTER_LOG_LEVEL"):
            self.logging.level = level.upper()
        return self

    def get_json_path(self) -> Path:
        """Get absolute path to the snapshot file."""
        return self.root_path / self.storage.json_path


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def load_config(config_path: Path | str) -> RosterConfig:
    """Load roster configuration from a YAML file.

    Args:
        config_path: Path to roster.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return RosterConfig.from_dict(data, config_path.parent)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find roster.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (Path.cwd() if start_path is None else Path(start_path)).resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path
    return None
