from __future__ import annotations

import logging

from dotforge.config import InstallSettings

from .process import CommandRunner
from .types import PackageError, PackageReport

logger = logging.getLogger(__name__)

PACKAGE_MANAGERS = ("paru", "yay", "pacman")


def packages_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/.generic/raw/main/packages"


def detect_package_manager(commands: CommandRunner) -> str | None:
    for tool in PACKAGE_MANAGERS:
        if commands.which(tool) is not None:
            return tool
    return None


def parse_package_list(text: str) -> list[str]:
    packages = []
    for line in text.splitlines():
        pkg = line.strip()
        if not pkg or pkg.startswith("#"):
            continue
        packages.append(pkg)
    return packages


def fetch_package_list(settings: InstallSettings, commands: CommandRunner) -> list[str]:
    url = packages_url(settings.base_url)
    result = commands.run(["curl", "-fsSL", url])
    if not result.ok:
        raise PackageError(f"Failed to fetch package list from {url}: {result.error_text()}")
    return parse_package_list(result.stdout)


def install_packages(settings: InstallSettings, commands: CommandRunner) -> PackageReport:
    if settings.skip_deps:
        logger.debug("Skipping dependency installation")
        return PackageReport()

    manager = detect_package_manager(commands)
    if manager is None:
        logger.warning("No supported package manager found.")
        return PackageReport()

    logger.info("Installing dependencies using %s...", manager)
    report = PackageReport(manager=manager)

    for pkg in fetch_package_list(settings, commands):
        if commands.run([manager, "-Q", pkg]).ok:
            report.present.append(pkg)
            continue

        if settings.dry_run:
            logger.info("Would install %s", pkg)
            continue

        result = commands.run([manager, "-S", "--needed", "--noconfirm", pkg])
        if result.ok:
            logger.debug("Installed package %s", pkg)
            report.installed.append(pkg)
        else:
            logger.warning("Failed to install %s: %s", pkg, result.error_text())
            report.failed.append(pkg)

    return report
