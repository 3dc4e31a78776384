from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from dotforge.config import ConfigError
from dotforge.config.loader import detect_format, parse_file

logger = logging.getLogger(__name__)

SPOTIFY_LAUNCHER_CONF = "spotify-launcher.conf"


@dataclass(frozen=True)
class FlagSet:
    app: str
    paths: tuple[str, ...]
    flags: tuple[str, ...]


def load_flags(path: str | Path) -> dict[str, FlagSet]:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.is_file():
        raise ConfigError(f"Flags file not found: {pure_path}")

    raw = parse_file(pure_path, detect_format(pure_path))
    flagsets = {}
    for app, fields in raw.items():
        flagset = _build_flagset(app, fields)
        if flagset.app in flagsets:
            raise ConfigError(f"Duplicate app name after normalization: {flagset.app}")
        flagsets[flagset.app] = flagset
    return flagsets


def _build_flagset(app: Any, fields: Any) -> FlagSet:
    if not isinstance(app, str) or not app.strip():
        raise ConfigError(f"App name must be a non-empty string, got {app!r}")

    if not isinstance(fields, Mapping):
        raise ConfigError(f"{app} must be a mapping")

    for key in ("paths", "list"):
        if key not in fields:
            raise ConfigError(f"{app}: missing '{key}'")
        if not isinstance(fields[key], list):
            raise ConfigError(f"{app}: '{key}' should be a list")
        for item in fields[key]:
            if not isinstance(item, str) or not item.strip():
                raise ConfigError(f"{app}: {item!r} in '{key}' should be a non-empty string")

    return FlagSet(
        app.strip(),
        tuple(p.strip() for p in fields["paths"]),
        tuple(f.strip() for f in fields["list"]),
    )


def format_flags(flags: Iterable[str]) -> list[str]:
    return [f if f.startswith("--") else f"--{f}" for f in flags]


def render_flags(path: str | Path, flags: Iterable[str]) -> str:
    flags = list(flags)
    if SPOTIFY_LAUNCHER_CONF in str(path):
        lines = ["[spotify]", "extra_arguments = ["]
        lines += [f'  "{f}",' for f in flags]
        lines.append("]")
    else:
        lines = flags
    return "".join(line + "\n" for line in lines)


def expand_home(path: str, home: Path) -> Path:
    if path == "~" or path.startswith("~/"):
        return home / path[2:]
    return Path(path)


def display_path(path: Path, home: Path) -> str:
    try:
        return "~/" + path.relative_to(home).as_posix()
    except ValueError:
        return str(path)


def generate_flags(
    flagsets: Mapping[str, FlagSet],
    only_app: str | None = None,
    home: Path | None = None,
    dry_run: bool = False,
) -> list[Path]:
    home = home or Path.home()

    if only_app is not None and only_app not in flagsets:
        raise ConfigError(f"Unknown app: {only_app}")

    written: list[Path] = []
    for app, flagset in flagsets.items():
        if only_app is not None and app != only_app:
            continue

        formatted = format_flags(flagset.flags)
        for raw_path in flagset.paths:
            path = expand_home(raw_path, home)
            shown = display_path(path, home)

            if dry_run:
                logger.info("Would generate %s for %s", shown, app)
                continue

            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_flags(path, formatted), encoding="utf-8")
            logger.info("Generated %s for %s", shown, app)
            written.append(path)

    return written
