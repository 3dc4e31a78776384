from __future__ import annotations

import logging
from typing import Sequence

from dotforge.config import Catalog, InstallSettings
from dotforge.runner import RunSummary, Task, run_tasks

from .clone import make_clone_task
from .process import CommandRunner

logger = logging.getLogger(__name__)


class Installer:
    def __init__(
        self, catalog: Catalog, settings: InstallSettings, commands: CommandRunner
    ):
        self.catalog = catalog
        self.settings = settings
        self.commands = commands

    def plan(self, names: Sequence[str] = ()) -> tuple[list[Task], list[str]]:
        if names:
            entries, unknown = self.catalog.select(names)
        else:
            entries, unknown = list(self.catalog), []

        for name in unknown:
            logger.warning("Unknown config: %s", name)

        tasks = [make_clone_task(e, self.settings, self.commands) for e in entries]
        return tasks, unknown

    def run(self, names: Sequence[str] = ()) -> RunSummary:
        tasks, _ = self.plan(names)
        logger.debug(
            "Cloning %d config(s) with up to %d in parallel",
            len(tasks),
            self.settings.parallel,
        )
        return run_tasks(tasks, self.settings.parallel)
