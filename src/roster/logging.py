"""Centralized logging configuration for roster.

All modules log through ``logging.getLogger(__name__)``, so every record lands
under the ``roster`` logger configured here and goes to one rotating log file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "roster"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Log file settings (the ``logging`` section of roster.yaml).

    Attributes:
        dir: Log directory, relative to the config file's directory.
        file: Log file name inside ``dir``.
        level: Level name (DEBUG, INFO, WARNING, ERROR).
        console: Also log to stderr.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files kept next to the current one.
    """

    dir: str = "logs"
    file: str = "roster.log"
    level: str = "INFO"
    console: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


def setup_logging(
    config: LoggingConfig | None = None,
    root_path: str | Path | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """Attach a rotating file handler (and optionally stderr) to the roster logger.

    Safe to call repeatedly: handlers from an earlier call are closed and
    replaced.

    Args:
        config: Log settings. Defaults to LoggingConfig().
        root_path: Directory a relative ``config.dir`` is resolved against.
            Defaults to the current directory.
        verbose: Force DEBUG level and console output.

    Returns:
        The root roster logger.
    """
    config = config or LoggingConfig()
    log_dir = Path(root_path or Path.cwd()) / config.dir
    log_dir.mkdir(parents=True, exist_ok=True)

    level = "DEBUG" if verbose else config.level.upper()
    log_level = getattr(logging, level, logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = log_dir / config.file
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if config.console or verbose:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug("Logging to %s at %s", log_path, level)
    return logger
