from .clone import CloneAction, backup_existing, clean_clone, make_clone_task, repo_url
from .installer import Installer
from .lock import InstallLock
from .packages import detect_package_manager, install_packages, parse_package_list
from .process import CommandRunner, SubprocessRunner, require_commands
from .types import (
    CommandResult,
    InstallError,
    LockError,
    MissingCommandError,
    PackageError,
    PackageReport,
)

__all__ = [
    "CloneAction",
    "backup_existing",
    "clean_clone",
    "make_clone_task",
    "repo_url",
    "Installer",
    "InstallLock",
    "detect_package_manager",
    "install_packages",
    "parse_package_list",
    "CommandRunner",
    "SubprocessRunner",
    "require_commands",
    "CommandResult",
    "InstallError",
    "LockError",
    "MissingCommandError",
    "PackageError",
    "PackageReport",
]
