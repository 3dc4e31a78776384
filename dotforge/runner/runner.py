from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Sequence

from .types import (
    InvalidConfigurationError,
    RunSummary,
    Task,
    TaskFailure,
    TaskResult,
    TaskSkipped,
    TaskStatus,
)


class BoundedRunner:
    """Runs independent tasks with at most ``limit`` of them in flight.

    Tasks are admitted in input order: the pool's work queue is FIFO, so a
    freed worker always picks up the earliest pending task. Every task ends
    in exactly one terminal state and a failing action never affects the
    others. The call returns once all tasks are terminal.
    """

    def __init__(self, limit: int):
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidConfigurationError(
                f"Concurrency limit must be an integer, got {type(limit).__name__}"
            )
        if limit < 1:
            raise InvalidConfigurationError(
                f"Concurrency limit must be at least 1, got {limit}"
            )
        self.limit = limit

    def run(self, tasks: Sequence[Task]) -> RunSummary:
        _check_tasks(tasks)
        if not tasks:
            return RunSummary()

        workers = min(self.limit, len(tasks))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="dotforge-task"
        ) as pool:
            futures: list[Future[TaskResult]] = [
                pool.submit(_execute, task) for task in tasks
            ]
            wait(futures)

        return RunSummary(tuple(f.result() for f in futures))


def run_tasks(tasks: Sequence[Task], limit: int) -> RunSummary:
    return BoundedRunner(limit).run(tasks)


def _check_tasks(tasks: Sequence[Task]) -> None:
    seen: set[str] = set()
    for task in tasks:
        if not isinstance(task, Task):
            raise InvalidConfigurationError(f"Expected a Task, got {type(task)}")
        if not isinstance(task.task_id, str) or not task.task_id:
            raise InvalidConfigurationError(
                f"Task id must be a non-empty string, got {task.task_id!r}"
            )
        if not callable(task.action):
            raise InvalidConfigurationError(f"{task.task_id}: action is not callable")
        if task.task_id in seen:
            raise InvalidConfigurationError(f"Duplicate task id: {task.task_id}")
        seen.add(task.task_id)


def _execute(task: Task) -> TaskResult:
    start = time.monotonic()
    try:
        task.action()
    except TaskSkipped as exc:
        return TaskResult(
            task.task_id,
            TaskStatus.SUCCEEDED,
            exc.reason,
            skipped=True,
            duration_s=time.monotonic() - start,
        )
    except TaskFailure as exc:
        return TaskResult(
            task.task_id,
            TaskStatus.FAILED,
            exc.reason,
            duration_s=time.monotonic() - start,
        )
    except SystemExit as exc:
        return TaskResult(
            task.task_id,
            TaskStatus.FAILED,
            f"exited with code {exc.code}",
            duration_s=time.monotonic() - start,
        )
    except Exception as exc:
        return TaskResult(
            task.task_id,
            TaskStatus.FAILED,
            str(exc) or type(exc).__name__,
            duration_s=time.monotonic() - start,
        )

    return TaskResult(
        task.task_id, TaskStatus.SUCCEEDED, duration_s=time.monotonic() - start
    )
