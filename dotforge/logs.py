from __future__ import annotations

import logging
import time
from pathlib import Path

from dotforge.config import InstallSettings

LOGGER_NAME = "dotforge"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(settings: InstallSettings, *, log_file: bool = True) -> Path | None:
    """Configure the package logger for one CLI run.

    Console output goes to stderr. Unless this is a dry run, the same
    records are also written to a timestamped file under ``log_dir``.
    Returns the log file path, or None when no file is written.
    """
    level = logging.DEBUG if settings.verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    close_logging()

    formatter = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if not log_file or settings.dry_run:
        return None

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    path = settings.log_dir / time.strftime("install-%Y%m%d-%H%M%S.log")

    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(formatter)
    logger.addHandler(fh)

    return path


def close_logging() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
