import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import Catalog, ConfigError, RepoSpec, UnsupportedConfigFormatError


def load_catalog(path: str | Path) -> Catalog:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Catalog file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Catalog path is not a file: {pure_path}")

    fmt = detect_format(pure_path)
    raw_file = parse_file(pure_path, fmt)
    return _build_catalog(raw_file)


def detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {fmt.upper()} parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_catalog(raw: Mapping[str, Any]) -> Catalog:
    entries: dict[str, RepoSpec] = {}

    for key in raw:
        if key != "configs":
            raise ConfigError(f"Can't process: {key}")

    if "configs" not in raw:
        raise ConfigError("Missing 'configs' field")

    if not isinstance(raw["configs"], Mapping):
        raise ConfigError(f"'configs' must be a mapping, got {type(raw['configs'])}")

    if len(raw["configs"]) < 1:
        raise ConfigError("There must be at least one config in the catalog file")

    for name, value in raw["configs"].items():
        if not isinstance(name, str):
            raise ConfigError(f"Config name must be a string, got {type(name)}")

        name_norm = _check_segment(name.strip(), "config name", name)

        if name_norm in entries:
            raise ConfigError(f"Duplicate config name after normalization: {name_norm}")

        entries[name_norm] = _build_repo_spec(name_norm, value)

    return Catalog(entries)


def _build_repo_spec(name: str, value: Any) -> RepoSpec:
    if isinstance(value, str):
        spec = RepoSpec.parse(name, value.strip())
        repo = spec.repo.strip()
        branch = spec.branch.strip() if spec.branch else None
    elif isinstance(value, Mapping):
        keys = {"repo", "branch"}
        for field in value.keys():
            if field not in keys:
                raise ConfigError(f"{name}: Can't process: {field}")

        if "repo" not in value:
            raise ConfigError(f"{name}: missing 'repo'")

        if not isinstance(value["repo"], str):
            raise ConfigError(f"{name}: The repo should be a string")

        repo = value["repo"].strip()
        branch = None

        if "branch" in value:
            if not isinstance(value["branch"], str):
                raise ConfigError(f"{name}: The branch should be a string")

            if len(value["branch"].strip()) < 1:
                raise ConfigError(f"{name}: Please provide a branch or remove this field")

            branch = value["branch"].strip()
    else:
        raise ConfigError(f"{name} must be a string or a mapping")

    repo = _check_segment(repo, "repo", name)
    return RepoSpec(name, repo, branch or None)


def _check_segment(value: str, what: str, owner: str) -> str:
    if len(value) < 1:
        raise ConfigError(f"{owner}: A {what} can't be empty")

    if "/" in value:
        raise ConfigError(f"{owner}: A {what} can't contain '/'")

    return value
