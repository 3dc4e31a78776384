from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from dotforge.config import InstallSettings, RepoSpec
from dotforge.runner import Task, TaskFailure, TaskSkipped

from .process import CommandRunner

logger = logging.getLogger(__name__)

# repository files that are not part of the config itself
CLEAN_PATHS = (
    ".git",
    "README.md",
    "LICENSE",
    ".github",
    ".gitignore",
    "assets",
    "install.sh",
)


def repo_url(base_url: str, entry: RepoSpec) -> str:
    return f"{base_url.rstrip('/')}/{entry.repo}"


def remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def backup_existing(path: str | Path) -> Path:
    path = Path(path)
    backup = path.with_name(path.name + ".bak")
    logger.info("Backing up existing config to %s", backup)
    remove_path(backup)
    shutil.move(str(path), str(backup))
    return backup


def clean_clone(target: Path) -> list[Path]:
    removed = []
    for name in CLEAN_PATHS:
        candidate = target / name
        if candidate.exists() or candidate.is_symlink():
            remove_path(candidate)
            removed.append(candidate)
    logger.debug("Cleaned up repo files in %s", target)
    return removed


@dataclass(frozen=True)
class CloneAction:
    entry: RepoSpec
    settings: InstallSettings
    commands: CommandRunner
    target: Path

    def __call__(self) -> None:
        name = self.entry.name
        url = repo_url(self.settings.base_url, self.entry)
        exists = self.target.exists() or self.target.is_symlink()

        if exists and not self.settings.force:
            logger.info("Skipping %s (already exists)", name)
            raise TaskSkipped("already exists")

        if self.settings.dry_run:
            branch = f" (branch: {self.entry.branch})" if self.entry.branch else ""
            logger.info("Would clone %s to %s%s", url, self.target, branch)
            raise TaskSkipped("dry run")

        if exists:
            if self.settings.backup:
                backup_existing(self.target)
            else:
                logger.debug("Removing existing %s", self.target)
                remove_path(self.target)

        self.target.parent.mkdir(parents=True, exist_ok=True)
        args = ["git", "clone", "--quiet"]
        if self.entry.branch:
            args += ["--branch", self.entry.branch]
        args += [url, str(self.target)]

        result = self.commands.run(args)
        if not result.ok:
            logger.error("Failed to clone %s: %s", name, result.error_text())
            raise TaskFailure(result.error_text())

        if self.settings.clean:
            clean_clone(self.target)

        logger.info("Installed %s", name)


def make_clone_task(
    entry: RepoSpec,
    settings: InstallSettings,
    commands: CommandRunner,
    target: Path | None = None,
) -> Task:
    target = target or settings.config_dir / entry.name
    return Task(entry.name, CloneAction(entry, settings, commands, target))
