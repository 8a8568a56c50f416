"""Data model of ``Pipfile`` and ``Pipfile.lock``."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any

import tomlkit


@dataclass
class Source:
    name: str
    url: str

    @classmethod
    def from_dict(cls, data: dict) -> Source:
        try:
            return cls(name=data["name"], url=data["url"])
        except KeyError as exc:
            raise ValueError(f"Pipfile source is missing {exc.args[0]!r}") from None


@dataclass
class Requires:
    python_version: str | None = None
    python_full_version: str | None = None


@dataclass
class KeywordMarkers:
    """Environment markers that Pipenv accepts as plain keys."""

    os_name: str | None = None
    sys_platform: str | None = None
    platform_machine: str | None = None
    platform_python_implementation: str | None = None
    platform_release: str | None = None
    platform_system: str | None = None
    platform_version: str | None = None
    python_version: str | None = None
    python_full_version: str | None = None
    implementation_name: str | None = None
    implementation_version: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> KeywordMarkers:
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})


@dataclass
class DependencySpecification:
    """A dependency given as a version string or as a table."""

    constraint: str | None = None
    version: str | None = None
    extras: list[str] | None = None
    markers: str | None = None
    index: str | None = None
    git: str | None = None
    ref: str | None = None
    path: str | None = None
    editable: bool | None = None
    keyword_markers: KeywordMarkers | None = None

    @property
    def is_string(self) -> bool:
        return self.constraint is not None

    @classmethod
    def from_value(cls, value: Any) -> DependencySpecification:
        if isinstance(value, str):
            return cls(constraint=value)
        if isinstance(value, dict):
            extras = value.get("extras")
            return cls(
                version=value.get("version"),
                extras=None if extras is None else list(extras),
                markers=value.get("markers"),
                index=value.get("index"),
                git=value.get("git"),
                ref=value.get("ref"),
                path=value.get("path"),
                editable=value.get("editable"),
                keyword_markers=KeywordMarkers.from_dict(value),
            )
        raise ValueError(f"Invalid dependency specification: {value!r}")


def _packages(value: Any) -> dict[str, DependencySpecification] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Expected a table of packages, got {value!r}")
    return {name: DependencySpecification.from_value(spec) for name, spec in value.items()}


_PIPFILE_KNOWN_SECTIONS = {"source", "packages", "dev-packages", "requires", "pipenv", "scripts"}


@dataclass
class Pipfile:
    source: list[Source] | None = None
    packages: dict[str, DependencySpecification] | None = None
    dev_packages: dict[str, DependencySpecification] | None = None
    requires: Requires | None = None
    category_groups: dict[str, dict[str, DependencySpecification]] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Pipfile:
        source = data.get("source")
        requires = data.get("requires")
        return cls(
            source=None if source is None else [Source.from_dict(s) for s in source],
            packages=_packages(data.get("packages")),
            dev_packages=_packages(data.get("dev-packages")),
            requires=None
            if requires is None
            else Requires(requires.get("python_version"), requires.get("python_full_version")),
            category_groups={
                name: _packages(section)
                for name, section in data.items()
                if name not in _PIPFILE_KNOWN_SECTIONS
            },
        )

    @classmethod
    def loads(cls, text: str) -> Pipfile:
        return cls.from_dict(tomlkit.parse(text).unwrap())


@dataclass(frozen=True)
class LockedPackage:
    version: str


@dataclass
class PipenvLock:
    """Locked versions per category, sorted by category and package name."""

    category_groups: dict[str, dict[str, LockedPackage]] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> PipenvLock:
        groups: dict[str, dict[str, LockedPackage]] = {}
        for category in sorted(data):
            if category == "_meta":
                continue
            packages = data[category]
            if not isinstance(packages, dict):
                raise ValueError(f"Invalid lock category {category!r}")
            locked = {}
            for name in sorted(packages):
                entry = packages[name]
                if not isinstance(entry, dict) or "version" not in entry:
                    raise ValueError(f"Locked package {name!r} has no version")
                locked[name] = LockedPackage(version=entry["version"])
            groups[category] = locked
        return cls(category_groups=groups)

    @classmethod
    def loads(cls, text: str) -> PipenvLock:
        return cls.from_dict(json.loads(text))