from __future__ import annotations

import logging
import os
from pathlib import Path

from .types import LockError

logger = logging.getLogger(__name__)


class InstallLock:
    """Single-instance guard backed by a pid file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._held = False

    def acquire(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open("x", encoding="utf-8") as fh:
                fh.write(f"{os.getpid()}\n")
        except FileExistsError as exc:
            raise LockError(
                f"Another instance is running. Remove {self.path} if it's stale."
            ) from exc
        self._held = True
        logger.debug("Acquired lock %s", self.path)

    def release(self) -> None:
        if not self._held:
            return
        self.path.unlink(missing_ok=True)
        self._held = False
        logger.debug("Released lock %s", self.path)

    def __enter__(self) -> InstallLock:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
