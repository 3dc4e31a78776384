from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator


class RunnerError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class InvalidConfigurationError(RunnerError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class TaskFailure(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TaskSkipped(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TaskStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TaskStatus.SUCCEEDED, TaskStatus.FAILED)


@dataclass(frozen=True)
class Task:
    task_id: str
    action: Callable[[], None]


@dataclass(frozen=True)
class TaskResult:
    task_id: str
    status: TaskStatus
    reason: str | None = None
    skipped: bool = False
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == TaskStatus.SUCCEEDED


@dataclass(frozen=True)
class RunSummary:
    results: tuple[TaskResult, ...] = ()

    def __iter__(self) -> Iterator[TaskResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def get(self, task_id: str) -> TaskResult:
        for result in self.results:
            if result.task_id == task_id:
                return result
        raise KeyError(task_id)

    @property
    def order(self) -> list[str]:
        return [r.task_id for r in self.results]

    @property
    def succeeded(self) -> list[str]:
        return [r.task_id for r in self.results if r.ok and not r.skipped]

    @property
    def skipped(self) -> list[str]:
        return [r.task_id for r in self.results if r.ok and r.skipped]

    @property
    def failed(self) -> list[str]:
        return [r.task_id for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def counts(self) -> dict[str, int]:
        return {
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
        }
