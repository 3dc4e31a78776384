from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping

from dotforge.config import (
    Catalog,
    ConfigError,
    InstallSettings,
    RepoSpec,
    default_catalog,
    load_catalog,
)
from dotforge.flags import generate_flags, load_flags
from dotforge.install import (
    CommandRunner,
    InstallError,
    Installer,
    InstallLock,
    SubprocessRunner,
    install_packages,
    make_clone_task,
    require_commands,
)
from dotforge.logs import close_logging, setup_logging
from dotforge.runner import RunnerError, RunSummary, run_tasks

from .args import build_parser

logger = logging.getLogger(__name__)


def run_cli(
    argv: list[str] | None = None,
    *,
    commands: CommandRunner | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    parser = build_parser()
    commands = commands or SubprocessRunner()
    environ = os.environ if environ is None else environ
    try:
        args = parser.parse_args(argv)

        match args.command:
            case "install":
                return cmd_install(args, commands, environ)
            case "list":
                return cmd_list(args)
            case "subconfig":
                return cmd_subconfig(args, commands, environ)
            case "flags":
                return cmd_flags(args, environ)
            case _:
                return 2

    except (ConfigError, RunnerError, InstallError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def main() -> None:
    sys.exit(run_cli())


def cmd_install(
    args: argparse.Namespace, commands: CommandRunner, environ: Mapping[str, str]
) -> int:
    settings = _settings(
        args,
        environ,
        dry_run=args.dry_run,
        force=args.force,
        skip_deps=args.skip_deps,
        parallel=args.parallel,
        backup=not args.no_backup,
        clean=args.clean,
    )
    catalog = _catalog(args)
    log_file = setup_logging(settings)
    try:
        logger.info("Starting dotforge installer...")
        if log_file is not None:
            logger.info("Log file: %s", log_file)

        with InstallLock(settings.lock_file):
            require_commands(
                commands, ["git"] if settings.skip_deps else ["git", "curl"]
            )
            install_packages(settings, commands)
            summary = Installer(catalog, settings, commands).run(args.configs)

        _print_summary(summary)
        logger.info("Done.")
    finally:
        close_logging()

    return 1 if summary.failed else 0


def cmd_list(args: argparse.Namespace) -> int:
    catalog = _catalog(args)
    print("Available configs:")
    for name in catalog.names():
        print(f"  - {name}")
    return 0


def cmd_subconfig(
    args: argparse.Namespace, commands: CommandRunner, environ: Mapping[str, str]
) -> int:
    settings = _settings(
        args, environ, dry_run=args.dry_run, force=args.force, clean=True
    )
    setup_logging(settings, log_file=False)

    name = args.name.strip()
    dir_name = (args.dir_name or name).strip()
    if not name or not dir_name or "/" in name or "/" in dir_name:
        raise ConfigError(f"Invalid config name: {args.name!r}")

    entry = RepoSpec(dir_name, name)
    dest = settings.config_dir / dir_name
    logger.debug("Target path: %s", dest)

    if (dest.exists() or dest.is_symlink()) and not settings.force:
        if not _confirm(f"Overwrite existing config at {dest}?"):
            print("Aborted", file=sys.stderr)
            return 1
        settings = settings.with_changes(force=True)

    require_commands(commands, ["git"])
    summary = run_tasks([make_clone_task(entry, settings, commands, dest)], 1)
    _print_summary(summary)

    if summary.failed:
        return 1

    if not settings.dry_run:
        print(f"\nNext steps:\n- Review {dest}\n- Adjust as needed")
    return 0


def cmd_flags(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    settings = _settings(args, environ, dry_run=args.dry_run)
    setup_logging(settings, log_file=False)

    home = Path(environ["HOME"]) if environ.get("HOME") else Path.home()
    flagsets = load_flags(args.file)
    generate_flags(flagsets, only_app=args.app, home=home, dry_run=settings.dry_run)

    logger.info("Successfully generated")
    return 0


def _settings(
    args: argparse.Namespace, environ: Mapping[str, str], **overrides: Any
) -> InstallSettings:
    base_url = args.base_url
    if args.user:
        base_url = f"https://github.com/{args.user.strip()}"

    return InstallSettings.from_env(
        environ,
        config_dir=args.config_dir,
        base_url=base_url,
        verbose=args.verbose,
        **overrides,
    )


def _catalog(args: argparse.Namespace) -> Catalog:
    if args.catalog:
        return load_catalog(args.catalog)
    return default_catalog()


def _confirm(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N]: ")
    except EOFError:
        return False
    return answer.strip() in ("y", "Y")


def _print_summary(summary: RunSummary) -> None:
    for result in summary:
        if not result.ok:
            print(f"FAIL {result.task_id}, {result.duration_s:.3f}s: {result.reason}")
        elif result.skipped:
            print(f"SKIP {result.task_id} ({result.reason})")
        else:
            print(f"OK {result.task_id}, {result.duration_s:.3f}s")

    counts = summary.counts()
    print(
        f"{counts['succeeded']} succeeded, {counts['failed']} failed, {counts['skipped']} skipped"
    )
