from pathlib import Path

import pytest

from uvmigrate.detector import (
    Detection,
    DetectionError,
    PackageManager,
    bold,
    detect_package_manager,
    project_already_uses_uv,
)

POETRY_FULL = """\
[tool.poetry]
package-mode = false
name = "foobar"
version = "0.1.0"

[tool.poetry.dependencies]
python = "^3.11"
arrow = "^1.2.3"
"""

POETRY_MINIMAL = """\
[tool.poetry]
name = "foobar"
version = "0.0.1"
"""

PIPENV_PYPROJECT = """\
[tool.ruff]
fix = true
"""

PIPFILE = """\
[packages]
arrow = ">=1.2.3"
"""

UV_PYPROJECT = """\
[project]
name = "foobar"
version = "0.0.1"

[tool.uv]
package = false
"""

REQS = ["requirements.txt"]
DEV_REQS = ["requirements-dev.txt"]


def _write(directory: Path, files: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def fixtures(tmp_path: Path) -> Path:
    _write(tmp_path / "poetry" / "full", {"pyproject.toml": POETRY_FULL})
    _write(tmp_path / "poetry" / "minimal", {"pyproject.toml": POETRY_MINIMAL})
    _write(
        tmp_path / "pipenv" / "full",
        {"Pipfile": PIPFILE, "pyproject.toml": PIPENV_PYPROJECT},
    )
    _write(tmp_path / "pipenv" / "minimal", {"Pipfile": ""})
    _write(
        tmp_path / "pip_tools" / "full",
        {
            "requirements.in": "arrow\n",
            "requirements.txt": "arrow==1.3.0\n",
            "requirements-dev.in": "pytest\n",
            "requirements-dev.txt": "pytest==8.3.4\n",
            "requirements-typing.in": "mypy\n",
            "requirements-typing.txt": "mypy==1.14.1\n",
        },
    )
    _write(
        tmp_path / "pip" / "full",
        {
            "requirements.txt": "arrow==1.3.0\n",
            "requirements-dev.txt": "pytest==8.3.4\n",
            "requirements-typing.txt": "mypy==1.14.1\n",
        },
    )
    _write(tmp_path / "uv" / "minimal", {"pyproject.toml": UV_PYPROJECT})
    _write(
        tmp_path / "uv" / "with_lock",
        {"uv.lock": "version = 1\n", "pyproject.toml": "[project]\nname = 'x'\n"},
    )
    return tmp_path


def test_bold_wraps_in_escape_codes():
    assert bold("uv.lock") == "\x1b[1muv.lock\x1b[0m"


def test_package_manager_display_and_values():
    assert [str(pm) for pm in PackageManager] == ["pip", "pip-tools", "Pipenv", "Poetry"]
    assert PackageManager("pip-tools") is PackageManager.PIP_TOOLS


@pytest.mark.parametrize("name", ["poetry/full", "poetry/minimal"])
def test_auto_detect_poetry_ok(fixtures, name):
    path = fixtures / name
    detection = detect_package_manager(path, REQS, DEV_REQS, None)
    assert detection == Detection(PackageManager.POETRY, path)


@pytest.mark.parametrize("name", ["pipenv/full", "pipenv/minimal"])
def test_auto_detect_pipenv_ok(fixtures, name):
    path = fixtures / name
    detection = detect_package_manager(path, REQS, DEV_REQS, None)
    assert detection == Detection(PackageManager.PIPENV, path)


def test_auto_detect_pip_tools_ok(fixtures):
    path = fixtures / "pip_tools" / "full"
    detection = detect_package_manager(path, REQS, DEV_REQS, None)
    assert detection == Detection(
        PackageManager.PIP_TOOLS, path, ["requirements.in"], ["requirements-dev.in"]
    )
    assert detection.is_pip_tools


def test_auto_detect_pip_ok(fixtures):
    path = fixtures / "pip" / "full"
    detection = detect_package_manager(path, REQS, DEV_REQS, None)
    assert detection == Detection(
        PackageManager.PIP, path, ["requirements.txt"], ["requirements-dev.txt"]
    )
    assert not detection.is_pip_tools


def test_auto_detect_non_existing_path(fixtures):
    path = fixtures / "non_existing_path"
    with pytest.raises(DetectionError) as info:
        detect_package_manager(path, REQS, DEV_REQS, None)
    assert str(info.value) == f"{path} does not exist."


def test_auto_detect_not_a_directory(fixtures):
    path = fixtures / "poetry" / "full" / "pyproject.toml"
    with pytest.raises(DetectionError) as info:
        detect_package_manager(path, REQS, DEV_REQS, None)
    assert str(info.value) == f"{path} is not a directory."


def test_auto_detect_nothing_found(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(fixtures / "poetry", REQS, DEV_REQS, None)
    assert str(info.value) == (
        "Could not determine which package manager is used from the ones that are supported."
    )


@pytest.mark.parametrize("name", ["poetry/full", "poetry/minimal"])
def test_poetry_ok(fixtures, name):
    path = fixtures / name
    detection = detect_package_manager(path, REQS, DEV_REQS, PackageManager.POETRY)
    assert detection == Detection(PackageManager.POETRY, path)


@pytest.mark.parametrize(
    ("name", "error"),
    [
        ("poetry", f"Directory does not contain a {bold('pyproject.toml')} file."),
        (
            "pipenv/full",
            f"{bold('pyproject.toml')} does not contain a {bold('[tool.poetry]')} section.",
        ),
    ],
)
def test_poetry_err(fixtures, name, error):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(fixtures / name, REQS, DEV_REQS, PackageManager.POETRY)
    assert str(info.value) == error


@pytest.mark.parametrize("name", ["pipenv/full", "pipenv/minimal"])
def test_pipenv_ok(fixtures, name):
    path = fixtures / name
    detection = detect_package_manager(path, REQS, DEV_REQS, PackageManager.PIPENV)
    assert detection == Detection(PackageManager.PIPENV, path)


def test_pipenv_err(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(fixtures / "pipenv", REQS, DEV_REQS, PackageManager.PIPENV)
    assert str(info.value) == f"Directory does not contain a {bold('Pipfile')} file."


def test_pip_tools_ok(fixtures):
    path = fixtures / "pip_tools" / "full"
    detection = detect_package_manager(
        path,
        ["requirements.in"],
        ["requirements-dev.in", "requirements-typing.in"],
        PackageManager.PIP_TOOLS,
    )
    assert detection == Detection(
        PackageManager.PIP_TOOLS,
        path,
        ["requirements.in"],
        ["requirements-dev.in", "requirements-typing.in"],
    )


def test_pip_tools_err(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(
            fixtures / "poetry" / "full",
            ["requirements.in"],
            ["requirements-dev.in", "requirements-typing.in"],
            PackageManager.PIP_TOOLS,
        )
    assert str(info.value) == "Directory does not contain any pip-tools requirements file."


def test_pip_ok(fixtures):
    path = fixtures / "pip" / "full"
    detection = detect_package_manager(
        path,
        ["requirements.txt"],
        ["requirements-dev.txt", "requirements-typing.txt"],
        PackageManager.PIP,
    )
    assert detection == Detection(
        PackageManager.PIP,
        path,
        ["requirements.txt"],
        ["requirements-dev.txt", "requirements-typing.txt"],
    )


def test_pip_err(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(
            fixtures / "poetry" / "full",
            ["requirements.txt"],
            ["requirements-dev.txt", "requirements-typing.txt"],
            PackageManager.PIP,
        )
    assert str(info.value) == "Directory does not contain any pip requirements file."


def test_auto_detect_already_using_uv_by_config(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(fixtures / "uv" / "minimal", REQS, DEV_REQS, None)
    assert str(info.value) == (
        f"Project is already using uv ('{bold('[tool.uv]')}' section detected in "
        f"'{bold('pyproject.toml')}')"
    )


def test_skip_auto_detect_using_uv(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(
            fixtures / "uv" / "minimal", REQS, DEV_REQS, None, skip_uv_checks=True
        )
    assert str(info.value) == (
        "Could not determine which package manager is used from the ones that are supported."
    )


def test_auto_detect_already_using_uv_by_lock(fixtures):
    with pytest.raises(DetectionError) as info:
        detect_package_manager(fixtures / "uv" / "with_lock", REQS, DEV_REQS, None)
    assert str(info.value) == f'Project is already using uv ("{bold("uv.lock")}" detected)'


def test_project_already_uses_uv_reasons(fixtures):
    assert project_already_uses_uv(fixtures / "poetry" / "full") is None
    assert project_already_uses_uv(fixtures / "pip" / "full") is None
    assert project_already_uses_uv(fixtures / "uv" / "with_lock") == (
        f'"{bold("uv.lock")}" detected'
    )


def test_project_already_uses_uv_ignores_invalid_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.uv\n", encoding="utf-8")
    assert project_already_uses_uv(tmp_path) is None


def test_poetry_wins_over_pip_in_auto_detection(fixtures):
    path = fixtures / "poetry" / "full"
    (path / "requirements.txt").write_text("arrow\n", encoding="utf-8")
    detection = detect_package_manager(path, REQS, DEV_REQS)
    assert detection.package_manager is PackageManager.POETRY


def test_pip_tools_maps_txt_names_to_in(fixtures):
    detection = PackageManager.PIP_TOOLS.detect(
        fixtures / "pip_tools" / "full", ["requirements.txt", "missing.txt"], []
    )
    assert detection.requirements_files == ["requirements.in"]
    assert detection.dev_requirements_files == []