from __future__ import annotations

import argparse

from dotforge import __version__


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_run_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Only print what would be done",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Replace configs that already exist",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotforge", description="Install dotfiles from a GitHub organization"
    )

    parser.add_argument(
        "--catalog",
        default=None,
        help="Path to a catalog file (.yml/.yaml, .toml, .json)",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Base config dir (default: $XDG_CONFIG_HOME or ~/.config)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--base-url",
        default=None,
        help="Base URL the config repositories live under",
    )
    source.add_argument(
        "-u",
        "--user",
        default=None,
        help="GitHub user or organization owning the config repositories",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # install
    install = subparsers.add_parser("install", help="Install configs")
    install.add_argument(
        "configs",
        nargs="*",
        help="Config names (default: all)",
    )
    _add_run_flags(install)
    install.add_argument(
        "-s",
        "--skip-deps",
        action="store_true",
        help="Don't install OS packages",
    )
    install.add_argument(
        "-j",
        "--parallel",
        type=_positive_int,
        default=None,
        help="Number of clones to run at once (default: 4)",
    )
    install.add_argument(
        "--no-backup",
        action="store_true",
        help="Delete replaced configs instead of moving them to <name>.bak",
    )
    install.add_argument(
        "--clean",
        action="store_true",
        help="Remove git metadata and repository files after cloning",
    )

    # list
    subparsers.add_parser("list", help="List available configs")

    # subconfig
    subconfig = subparsers.add_parser("subconfig", help="Install a single config repo")
    subconfig.add_argument("name", help="Repository name (e.g. nvim)")
    subconfig.add_argument(
        "--dir-name",
        default=None,
        help="Install directory name (default: the repository name)",
    )
    _add_run_flags(subconfig)

    # flags
    flags = subparsers.add_parser("flags", help="Generate flag files from flags.json")
    flags.add_argument("app", nargs="?", default=None, help="Only generate for this app")
    flags.add_argument(
        "--file",
        default="flags.json",
        help="Path to the flags file",
    )
    flags.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Only print what would be generated",
    )

    return parser
