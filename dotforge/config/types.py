from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class RepoSpec:
    name: str
    repo: str
    branch: str | None = None

    @classmethod
    def parse(cls, name: str, value: str) -> RepoSpec:
        repo, sep, branch = value.partition(":")
        return cls(name, repo, branch if sep and branch else None)

    def __str__(self) -> str:
        return f"{self.repo}:{self.branch}" if self.branch else self.repo


@dataclass
class Catalog:
    entries: dict[str, RepoSpec]

    def __iter__(self) -> Iterator[RepoSpec]:
        for name in sorted(self.entries):
            yield self.entries[name]

    def __len__(self):
        return len(self.entries)

    def has(self, name: str) -> bool:
        return name in self.entries

    def get(self, name: str) -> RepoSpec:
        if not self.has(name):
            raise KeyError(name)

        return self.entries[name]

    def names(self) -> list[str]:
        return sorted(self.entries.keys())

    def select(self, names: Iterable[str]) -> tuple[list[RepoSpec], list[str]]:
        selected: list[RepoSpec] = []
        unknown: list[str] = []
        seen: set[str] = set()

        for name in names:
            if name in seen:
                continue
            seen.add(name)
            if self.has(name):
                selected.append(self.entries[name])
            else:
                unknown.append(name)

        return selected, unknown


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
