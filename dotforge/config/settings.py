from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from .catalog import DEFAULT_BASE_URL
from .types import ConfigError

APP_NAME = "dotforge"
DEFAULT_PARALLEL = 4


@dataclass(frozen=True)
class InstallSettings:
    """Everything that changes how an install behaves, fixed for one run."""

    config_dir: Path
    log_dir: Path
    cache_dir: Path
    base_url: str = DEFAULT_BASE_URL
    verbose: bool = False
    dry_run: bool = False
    force: bool = False
    skip_deps: bool = False
    parallel: int = DEFAULT_PARALLEL
    backup: bool = True
    clean: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.parallel, bool) or not isinstance(self.parallel, int):
            raise ConfigError(f"parallel must be an integer, got {self.parallel!r}")
        if self.parallel < 1:
            raise ConfigError(f"parallel must be at least 1, got {self.parallel}")
        if not self.base_url.strip():
            raise ConfigError("base_url can't be empty")

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> InstallSettings:
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home())

        config_home = _xdg(env, "XDG_CONFIG_HOME", home / ".config")
        data_home = _xdg(env, "XDG_DATA_HOME", home / ".local" / "share")
        cache_home = _xdg(env, "XDG_CACHE_HOME", home / ".cache")

        values: dict[str, Any] = {
            "config_dir": config_home,
            "log_dir": data_home / APP_NAME,
            "cache_dir": cache_home / APP_NAME,
        }
        for key, value in overrides.items():
            if value is None:
                continue
            if key.endswith("_dir"):
                value = Path(value).expanduser()
            values[key] = value

        if "base_url" in values:
            values["base_url"] = values["base_url"].rstrip("/")

        return cls(**values)

    def with_changes(self, **changes: Any) -> InstallSettings:
        return replace(self, **changes)

    @property
    def lock_file(self) -> Path:
        return self.cache_dir / "install.lock"


def _xdg(env: Mapping[str, str], name: str, default: Path) -> Path:
    value = env.get(name, "").strip()
    # relative XDG values are ignored
    if value and os.path.isabs(value):
        return Path(value)
    return default
