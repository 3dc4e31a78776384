from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Sequence

import pytest

from dotforge.config import InstallSettings
from dotforge.install import CommandResult
from dotforge.logs import close_logging

Handler = Callable[[tuple[str, ...]], CommandResult]


class FakeCommands:
    """
    In-memory CommandRunner.

    `git clone` creates the target directory with a few repository files,
    everything else succeeds with empty output unless a handler is
    registered for a matching argv prefix.
    """

    def __init__(self, available: Sequence[str] = ("git", "curl")):
        self.available = set(available)
        self.calls: list[tuple[str, ...]] = []
        self._handlers: list[tuple[tuple[str, ...], Handler]] = []
        self._lock = threading.Lock()

    def on(self, *prefix: str, result: CommandResult | Handler) -> None:
        handler = result if callable(result) else (lambda _args, r=result: r)
        self._handlers.append((tuple(prefix), handler))

    def run(self, args: Sequence[str], *, cwd: str | Path | None = None) -> CommandResult:
        argv = tuple(str(a) for a in args)
        with self._lock:
            self.calls.append(argv)

        for prefix, handler in self._handlers:
            if argv[: len(prefix)] == prefix:
                return handler(argv)

        if argv[:2] == ("git", "clone"):
            target = Path(argv[-1])
            target.mkdir(parents=True)
            (target / ".git").mkdir()
            (target / "README.md").write_text("readme", encoding="utf-8")
            (target / "config").write_text("cfg", encoding="utf-8")

        return CommandResult(argv, 0)

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.available else None

    def clones(self) -> list[tuple[str, ...]]:
        return [c for c in self.calls if c[:2] == ("git", "clone")]


@pytest.fixture
def fake_commands() -> FakeCommands:
    return FakeCommands()


@pytest.fixture
def settings(tmp_path: Path) -> InstallSettings:
    return InstallSettings.from_env({"HOME": str(tmp_path)}, skip_deps=True)


@pytest.fixture(autouse=True)
def _reset_dotforge_logger():
    yield
    close_logging()
