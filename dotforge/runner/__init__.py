from .runner import BoundedRunner, run_tasks
from .types import (
    InvalidConfigurationError,
    RunnerError,
    RunSummary,
    Task,
    TaskFailure,
    TaskResult,
    TaskSkipped,
    TaskStatus,
)

__all__ = [
    "BoundedRunner",
    "run_tasks",
    "InvalidConfigurationError",
    "RunnerError",
    "RunSummary",
    "Task",
    "TaskFailure",
    "TaskResult",
    "TaskSkipped",
    "TaskStatus",
]
