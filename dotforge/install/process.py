from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .types import CommandResult, MissingCommandError

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(
        self, args: Sequence[str], *, cwd: str | Path | None = None
    ) -> CommandResult: ...

    def which(self, name: str) -> str | None: ...


class SubprocessRunner:
    def run(
        self, args: Sequence[str], *, cwd: str | Path | None = None
    ) -> CommandResult:
        argv = tuple(str(a) for a in args)
        logger.debug("Running: %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                cwd=cwd or None,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            return CommandResult(argv, 127, "", f"{argv[0]}: command not found")

        return CommandResult(argv, result.returncode, result.stdout, result.stderr)

    def which(self, name: str) -> str | None:
        return shutil.which(name)


def require_commands(commands: CommandRunner, names: Iterable[str]) -> None:
    missing = [name for name in names if commands.which(name) is None]
    if missing:
        raise MissingCommandError(missing)
