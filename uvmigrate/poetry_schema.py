"""Data model of the Poetry sections of ``pyproject.toml`` and of ``poetry.lock``."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import tomlkit


def as_list(value: Any) -> list:
    """Return a value that may be given once or as a list as a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _optional_list(value: Any) -> list | None:
    return None if value is None else list(value)


def _optional_dict(value: Any) -> dict | None:
    return None if value is None else dict(value)


class SourcePriority(Enum):
    PRIMARY = "primary"
    SUPPLEMENTAL = "supplemental"
    EXPLICIT = "explicit"
    DEFAULT = "default"
    SECONDARY = "secondary"


class Format(Enum):
    SDIST = "sdist"
    WHEEL = "wheel"


def _formats(value: Any) -> list[Format] | None:
    if value is None:
        return None
    return [Format(item) for item in as_list(value)]


@dataclass
class Source:
    """A package source declared in ``[[tool.poetry.source]]``."""

    name: str
    url: str | None = None
    priority: SourcePriority | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Source:
        if "name" not in data:
            raise ValueError("Poetry source is missing the 'name' field")
        priority = data.get("priority")
        return cls(
            name=data["name"],
            url=data.get("url"),
            priority=None if priority is None else SourcePriority(priority),
        )


_SPEC_FIELDS = (
    "version",
    "extras",
    "markers",
    "python",
    "platform",
    "source",
    "git",
    "branch",
    "rev",
    "tag",
    "subdirectory",
    "path",
    "develop",
    "url",
)


@dataclass
class DependencySpecification:
    """A dependency given as a constraint string, a table, or several tables."""

    constraint: str | None = None
    alternatives: list[DependencySpecification] | None = None
    version: str | None = None
    extras: list[str] | None = None
    markers: str | None = None
    python: str | None = None
    platform: str | None = None
    source: str | None = None
    git: str | None = None
    branch: str | None = None
    rev: str | None = None
    tag: str | None = None
    subdirectory: str | None = None
    path: str | None = None
    develop: bool | None = None
    url: str | None = None

    @property
    def is_string(self) -> bool:
        return self.constraint is not None

    @property
    def is_multiple(self) -> bool:
        return self.alternatives is not None

    @classmethod
    def from_value(cls, value: Any) -> DependencySpecification:
        if isinstance(value, str):
            return cls(constraint=value)
        if isinstance(value, list):
            return cls(alternatives=[cls.from_value(item) for item in value])
        if isinstance(value, dict):
            kwargs = {name: value.get(name) for name in _SPEC_FIELDS}
            kwargs["extras"] = _optional_list(kwargs["extras"])
            return cls(**kwargs)
        raise ValueError(f"Invalid dependency specification: {value!r}")


def _dependencies(value: Any) -> dict[str, DependencySpecification] | None:
    if value is None:
        return None
    return {name: DependencySpecification.from_value(spec) for name, spec in value.items()}


@dataclass
class DependencyGroup:
    dependencies: dict[str, DependencySpecification]

    @classmethod
    def from_dict(cls, data: dict) -> DependencyGroup:
        if "dependencies" not in data:
            raise ValueError("Poetry dependency group is missing 'dependencies'")
        return cls(dependencies=_dependencies(data["dependencies"]) or {})


@dataclass
class Package:
    """A ``packages`` entry describing what goes into distributions."""

    include: str
    from_: str | None = None
    to: str | None = None
    format: list[Format] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Package:
        if "include" not in data:
            raise ValueError("Poetry package is missing the 'include' field")
        return cls(
            include=data["include"],
            from_=data.get("from"),
            to=data.get("to"),
            format=_formats(data.get("format")),
        )


@dataclass
class Include:
    """An ``include`` entry, given as a plain path or a table with formats."""

    path: str
    format: list[Format] | None = None

    @classmethod
    def from_value(cls, value: Any) -> Include:
        if isinstance(value, str):
            return cls(path=value)
        if isinstance(value, dict) and "path" in value:
            return cls(path=value["path"], format=_formats(value.get("format")))
        raise ValueError(f"Invalid include entry: {value!r}")


@dataclass
class Poetry:
    """The ``[tool.poetry]`` section."""

    package_mode: bool | None = None
    name: str | None = None
    version: str | None = None
    description: str | None = None
    authors: list[str] | None = None
    license: str | None = None
    maintainers: list[str] | None = None
    readme: list[str] | None = None
    homepage: str | None = None
    repository: str | None = None
    documentation: str | None = None
    keywords: list[str] | None = None
    classifiers: list[str] | None = None
    source: list[Source] | None = None
    dependencies: dict[str, DependencySpecification] | None = None
    extras: dict[str, list[str]] | None = None
    dev_dependencies: dict[str, DependencySpecification] | None = None
    group: dict[str, DependencyGroup] | None = None
    urls: dict[str, str] | None = None
    scripts: dict[str, str] | None = None
    plugins: dict[str, dict[str, str]] | None = None
    packages: list[Package] | None = None
    include: list[Include] | None = None
    exclude: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Poetry:
        readme = data.get("readme")
        source = data.get("source")
        extras = data.get("extras")
        group = data.get("group")
        plugins = data.get("plugins")
        packages = data.get("packages")
        include = data.get("include")
        return cls(
            package_mode=data.get("package-mode"),
            name=data.get("name"),
            version=data.get("version"),
            description=data.get("description"),
            authors=_optional_list(data.get("authors")),
            license=data.get("license"),
            maintainers=_optional_list(data.get("maintainers")),
            readme=None if readme is None else as_list(readme),
            homepage=data.get("homepage"),
            repository=data.get("repository"),
            documentation=data.get("documentation"),
            keywords=_optional_list(data.get("keywords")),
            classifiers=_optional_list(data.get("classifiers")),
            source=None if source is None else [Source.from_dict(s) for s in source],
            dependencies=_dependencies(data.get("dependencies")),
            extras=None if extras is None else {k: list(v) for k, v in extras.items()},
            dev_dependencies=_dependencies(data.get("dev-dependencies")),
            group=None
            if group is None
            else {k: DependencyGroup.from_dict(v) for k, v in group.items()},
            urls=_optional_dict(data.get("urls")),
            scripts=_optional_dict(data.get("scripts")),
            plugins=None if plugins is None else {k: dict(v) for k, v in plugins.items()},
            packages=None if packages is None else [Package.from_dict(p) for p in packages],
            include=None if include is None else [Include.from_value(i) for i in include],
            exclude=_optional_list(data.get("exclude")),
        )


@dataclass(frozen=True)
class LockedPackage:
    name: str
    version: str


@dataclass
class PoetryLock:
    """The packages pinned in ``poetry.lock``."""

    package: list[LockedPackage] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: dict) -> PoetryLock:
        packages = data.get("package")
        if packages is None:
            return cls()
        locked = []
        for entry in packages:
            if "name" not in entry or "version" not in entry:
                raise ValueError("Locked package needs both 'name' and 'version'")
            locked.append(LockedPackage(name=entry["name"], version=entry["version"]))
        return cls(package=locked)

    @classmethod
    def loads(cls, text: str) -> PoetryLock:
        return cls.from_dict(tomlkit.parse(text).unwrap())