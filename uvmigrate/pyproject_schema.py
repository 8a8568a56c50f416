"""Data model of the parts of ``pyproject.toml`` that the migration reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

import tomlkit

from uvmigrate.poetry_schema import Poetry


def _optional_list(value: Any) -> list | None:
    return None if value is None else list(value)


def _optional_dict(value: Any) -> dict | None:
    return None if value is None else dict(value)


@dataclass
class AuthorOrMaintainer:
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AuthorOrMaintainer:
        return cls(name=data.get("name"), email=data.get("email"))


_PROJECT_KEYS = {
    "name",
    "version",
    "description",
    "authors",
    "requires-python",
    "readme",
    "license",
    "maintainers",
    "keywords",
    "classifiers",
    "dependencies",
    "optional-dependencies",
    "urls",
    "scripts",
    "gui-scripts",
    "entry-points",
}


def _people(value: Any) -> list[AuthorOrMaintainer] | None:
    if value is None:
        return None
    return [AuthorOrMaintainer.from_dict(item) for item in value]


@dataclass
class Project:
    """The ``[project]`` table; unknown keys are kept in ``remaining_fields``."""

    name: str | None = None
    version: str | None = None
    description: str | None = None
    authors: list[AuthorOrMaintainer] | None = None
    requires_python: str | None = None
    readme: str | None = None
    license: str | None = None
    maintainers: list[AuthorOrMaintainer] | None = None
    keywords: list[str] | None = None
    classifiers: list[str] | None = None
    dependencies: list[str] | None = None
    optional_dependencies: dict[str, list[str]] | None = None
    urls: dict[str, str] | None = None
    scripts: dict[str, str] | None = None
    gui_scripts: dict[str, str] | None = None
    entry_points: dict[str, dict[str, str]] | None = None
    remaining_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Project:
        optional = data.get("optional-dependencies")
        entry_points = data.get("entry-points")
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            description=data.get("description"),
            authors=_people(data.get("authors")),
            requires_python=data.get("requires-python"),
            readme=data.get("readme"),
            license=data.get("license"),
            maintainers=_people(data.get("maintainers")),
            keywords=_optional_list(data.get("keywords")),
            classifiers=_optional_list(data.get("classifiers")),
            dependencies=_optional_list(data.get("dependencies")),
            optional_dependencies=None
            if optional is None
            else {k: list(v) for k, v in optional.items()},
            urls=_optional_dict(data.get("urls")),
            scripts=_optional_dict(data.get("scripts")),
            gui_scripts=_optional_dict(data.get("gui-scripts")),
            entry_points=None
            if entry_points is None
            else {k: dict(v) for k, v in entry_points.items()},
            remaining_fields={k: v for k, v in data.items() if k not in _PROJECT_KEYS},
        )


@dataclass
class Index:
    name: str
    url: str | None = None
    default: bool | None = None
    explicit: bool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Index:
        if "name" not in data:
            raise ValueError("uv index is missing the 'name' field")
        return cls(
            name=data["name"],
            url=data.get("url"),
            default=data.get("default"),
            explicit=data.get("explicit"),
        )


@dataclass
class SourceIndex:
    index: str | None = None
    path: str | None = None
    editable: bool | None = None
    git: str | None = None
    tag: str | None = None
    branch: str | None = None
    rev: str | None = None
    subdirectory: str | None = None
    url: str | None = None
    marker: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SourceIndex:
        return cls(
            index=data.get("index"),
            path=data.get("path"),
            editable=data.get("editable"),
            git=data.get("git"),
            tag=data.get("tag"),
            branch=data.get("branch"),
            rev=data.get("rev"),
            subdirectory=data.get("subdirectory"),
            url=data.get("url"),
            marker=data.get("marker"),
        )


SourceContainer = Union[SourceIndex, "list[SourceIndex]"]


def _source_container(value: Any) -> SourceIndex | list[SourceIndex]:
    if isinstance(value, list):
        return [SourceIndex.from_dict(item) for item in value]
    if isinstance(value, dict):
        return SourceIndex.from_dict(value)
    raise ValueError(f"Invalid uv source: {value!r}")


@dataclass
class Uv:
    """The ``[tool.uv]`` table."""

    package: bool | None = None
    index: list[Index] | None = None
    sources: dict[str, SourceIndex | list[SourceIndex]] | None = None
    default_groups: list[str] | None = None
    constraint_dependencies: list[str] | None = None
    environments: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Uv:
        index = data.get("index")
        sources = data.get("sources")
        return cls(
            package=data.get("package"),
            index=None if index is None else [Index.from_dict(i) for i in index],
            sources=None
            if sources is None
            else {k: _source_container(v) for k, v in sources.items()},
            default_groups=_optional_list(data.get("default-groups")),
            constraint_dependencies=_optional_list(data.get("constraint-dependencies")),
            environments=_optional_list(data.get("environments")),
        )


@dataclass
class BuildTarget:
    include: list[str] | None = None
    exclude: list[str] | None = None
    sources: dict[str, str] | None = None


@dataclass
class HatchBuild:
    targets: dict[str, BuildTarget] | None = None


@dataclass
class Hatch:
    """The ``[tool.hatch]`` table, reduced to its build targets."""

    build: HatchBuild | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Hatch:
        build = data.get("build")
        if build is None:
            return cls()
        targets = build.get("targets")
        return cls(
            build=HatchBuild(
                targets=None
                if targets is None
                else {
                    name: BuildTarget(
                        include=_optional_list(t.get("include")),
                        exclude=_optional_list(t.get("exclude")),
                        sources=_optional_dict(t.get("sources")),
                    )
                    for name, t in targets.items()
                }
            )
        )


@dataclass
class Tool:
    poetry: Poetry | None = None
    uv: Uv | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Tool:
        poetry = data.get("poetry")
        uv = data.get("uv")
        return cls(
            poetry=None if poetry is None else Poetry.from_dict(poetry),
            uv=None if uv is None else Uv.from_dict(uv),
        )


@dataclass
class BuildSystem:
    requires: list[str]
    build_backend: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> BuildSystem:
        if "requires" not in data:
            raise ValueError("build-system is missing the 'requires' field")
        return cls(requires=list(data["requires"]), build_backend=data.get("build-backend"))


@dataclass
class DependencyGroupInclude:
    """A ``{ include = "group" }`` entry of a dependency group."""

    include: str | None = None


def _group_entry(value: Any) -> str | DependencyGroupInclude:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return DependencyGroupInclude(include=value.get("include"))
    raise ValueError(f"Invalid dependency group entry: {value!r}")


@dataclass
class PyProject:
    build_system: BuildSystem | None = None
    project: Project | None = None
    dependency_groups: dict[str, list[str | DependencyGroupInclude]] | None = None
    tool: Tool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> PyProject:
        build_system = data.get("build-system")
        project = data.get("project")
        groups = data.get("dependency-groups")
        tool = data.get("tool")
        return cls(
            build_system=None if build_system is None else BuildSystem.from_dict(build_system),
            project=None if project is None else Project.from_dict(project),
            dependency_groups=None
            if groups is None
            else {name: [_group_entry(e) for e in entries] for name, entries in groups.items()},
            tool=None if tool is None else Tool.from_dict(tool),
        )

    @classmethod
    def loads(cls, text: str) -> PyProject:
        return cls.from_dict(tomlkit.parse(text).unwrap())