"""Work out which package manager a project uses, or check the one the user asked for."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from uvmigrate.pyproject_schema import PyProject

logger = logging.getLogger(__name__)

_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"


def bold(text: str) -> str:
    """Wrap ``text`` in the terminal escape codes for bold output."""
    return f"{_BOLD}{text}{_RESET}"


class DetectionError(Exception):
    """Raised when the project cannot be migrated with the requested package manager."""


class PackageManager(Enum):
    """The package managers a project can be migrated from; values are the CLI names."""

    PIP = "pip"
    PIP_TOOLS = "pip-tools"
    PIPENV = "pipenv"
    POETRY = "poetry"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name

    def detect(
        self,
        project_path: Path | str,
        requirements_files: Iterable[str],
        dev_requirements_files: Iterable[str],
    ) -> Detection:
        """Check that the project uses this package manager and describe what was found."""
        project_path = Path(project_path)
        logger.debug("Checking if project uses %s...", self)

        if self is PackageManager.POETRY:
            detection = self._detect_poetry(project_path)
        elif self is PackageManager.PIPENV:
            detection = self._detect_pipenv(project_path)
        elif self is PackageManager.PIP_TOOLS:
            detection = self._detect_pip_tools(
                project_path, requirements_files, dev_requirements_files
            )
        else:
            detection = self._detect_pip(project_path, requirements_files, dev_requirements_files)

        logger.debug("%s detected as a package manager.", self)
        return detection

    def _detect_poetry(self, project_path: Path) -> Detection:
        project_file = "pyproject.toml"
        pyproject_path = project_path / project_file
        if not pyproject_path.exists():
            raise DetectionError(f"Directory does not contain a {bold(project_file)} file.")

        pyproject = PyProject.loads(pyproject_path.read_text(encoding="utf-8"))
        if pyproject.tool is None or pyproject.tool.poetry is None:
            raise DetectionError(
                f"{bold(project_file)} does not contain a {bold('[tool.poetry]')} section."
            )
        return Detection(self, project_path)

    def _detect_pipenv(self, project_path: Path) -> Detection:
        project_file = "Pipfile"
        if not (project_path / project_file).exists():
            raise DetectionError(f"Directory does not contain a {bold(project_file)} file.")
        return Detection(self, project_path)

    def _detect_pip_tools(
        self,
        project_path: Path,
        requirements_files: Iterable[str],
        dev_requirements_files: Iterable[str],
    ) -> Detection:
        def found(files: Iterable[str]) -> list[str]:
            return [
                file.replace(".txt", ".in")
                for file in files
                if (project_path / file).with_suffix(".in").exists()
            ]

        found_requirements = found(requirements_files)
        found_dev_requirements = found(dev_requirements_files)
        if not found_requirements and not found_dev_requirements:
            raise DetectionError("Directory does not contain any pip-tools requirements file.")
        return Detection(self, project_path, found_requirements, found_dev_requirements)

    def _detect_pip(
        self,
        project_path: Path,
        requirements_files: Iterable[str],
        dev_requirements_files: Iterable[str],
    ) -> Detection:
        found_requirements = [f for f in requirements_files if (project_path / f).exists()]
        found_dev_requirements = [f for f in dev_requirements_files if (project_path / f).exists()]
        if not found_requirements and not found_dev_requirements:
            raise DetectionError("Directory does not contain any pip requirements file.")
        return Detection(self, project_path, found_requirements, found_dev_requirements)


_DISPLAY_NAMES = {
    PackageManager.PIP: "pip",
    PackageManager.PIP_TOOLS: "pip-tools",
    PackageManager.PIPENV: "Pipenv",
    PackageManager.POETRY: "Poetry",
}

_AUTO_DETECTION_ORDER = (
    PackageManager.POETRY,
    PackageManager.PIPENV,
    PackageManager.PIP_TOOLS,
    PackageManager.PIP,
)


@dataclass
class Detection:
    """The package manager found in a project, with the requirements files it relies on."""

    package_manager: PackageManager
    project_path: Path
    requirements_files: list[str] = field(default_factory=list)
    dev_requirements_files: list[str] = field(default_factory=list)

    @property
    def is_pip_tools(self) -> bool:
        return self.package_manager is PackageManager.PIP_TOOLS


def project_already_uses_uv(project_path: Path | str) -> str | None:
    """Return why the project looks like it already uses uv, or ``None`` if it does not."""
    project_path = Path(project_path)
    if (project_path / "uv.lock").exists():
        return f'"{bold("uv.lock")}" detected'

    pyproject_path = project_path / "pyproject.toml"
    if not pyproject_path.exists():
        return None

    try:
        pyproject = PyProject.loads(pyproject_path.read_text(encoding="utf-8"))
    except (OSError, ValueError, TypeError, AttributeError):
        return None

    if pyproject.tool is not None and pyproject.tool.uv is not None:
        return f"'{bold('[tool.uv]')}' section detected in '{bold('pyproject.toml')}'"
    return None


def detect_package_manager(
    project_path: Path | str,
    requirements_files: Iterable[str] = ("requirements.txt",),
    dev_requirements_files: Iterable[str] = ("requirements-dev.txt",),
    enforced_package_manager: PackageManager | None = None,
    skip_uv_checks: bool = False,
) -> Detection:
    """Find the package manager of a project, or check the enforced one.

    Raises ``DetectionError`` when the project cannot be migrated.
    """
    project_path = Path(project_path)
    requirements_files = list(requirements_files)
    dev_requirements_files = list(dev_requirements_files)

    if not project_path.exists():
        raise DetectionError(f"{project_path} does not exist.")
    if not project_path.is_dir():
        raise DetectionError(f"{project_path} is not a directory.")

    if not skip_uv_checks:
        reason = project_already_uses_uv(project_path)
        if reason is not None:
            raise DetectionError(f"Project is already using uv ({reason})")

    if enforced_package_manager is not None:
        return enforced_package_manager.detect(
            project_path, requirements_files, dev_requirements_files
        )

    for package_manager in _AUTO_DETECTION_ORDER:
        try:
            return package_manager.detect(project_path, requirements_files, dev_requirements_files)
        except DetectionError as error:
            logger.debug("%s", error)

    raise DetectionError(
        "Could not determine which package manager is used from the ones that are supported."
    )