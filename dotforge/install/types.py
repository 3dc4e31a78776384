from __future__ import annotations

from dataclasses import dataclass, field


class InstallError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class LockError(InstallError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class MissingCommandError(InstallError):
    def __init__(self, missing: list[str]):
        super().__init__("Missing command: " + ", ".join(missing))
        self.missing = missing


class PackageError(InstallError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"{self.args[0]} exited with code {self.returncode}"


@dataclass
class PackageReport:
    manager: str | None = None
    present: list[str] = field(default_factory=list)
    installed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
