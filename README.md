# uvmigrate

`uvmigrate` is a library for getting a Python project ready to move to uv.
It does three things:

- it finds out which package manager a project uses: Poetry, Pipenv, pip-tools or pip;
- it reads that tool's project and lock files into dataclasses;
- it tidies a `pyproject.toml` document into the usual layout.

Its only runtime dependency is `tomlkit`.

## Detecting the package manager

```python
from uvmigrate.detector import DetectionError, detect_package_manager

try:
    detection = detect_package_manager("path/to/project")
except DetectionError as error:
    print(error)
else:
    print(detection.package_manager, detection.requirements_files)
```

`detect_package_manager(project_path, requirements_files, dev_requirements_files,
enforced_package_manager, skip_uv_checks)` takes these arguments:

- `requirements_files` defaults to `("requirements.txt",)`.
- `dev_requirements_files` defaults to `("requirements-dev.txt",)`.
- `enforced_package_manager` defaults to `None`, which means the package manager is detected automatically.
- `skip_uv_checks` defaults to `False`.

The function returns a `Detection` with these fields:

- `package_manager`
- `project_path`
- `requirements_files`
- `dev_requirements_files`
- `is_pip_tools`

When no package manager is enforced, detection tries each of them in order and keeps the first one that matches:

1. **Poetry** matches when `pyproject.toml` has a `[tool.poetry]` section.
2. **Pipenv** matches when a `Pipfile` is present.
3. **pip-tools** matches when a `.in` file exists next to one of the given requirements files. The names it reports use `.in` in place of `.txt`.
4. **pip** matches when one of the given requirements files exists.

`DetectionError` is raised in these cases:

- the path does not exist, or is not a directory;
- the project already uses uv, because a `uv.lock` file or a `[tool.uv]` section is present, unless `skip_uv_checks` is true;
- the enforced package manager does not match the project;
- nothing matches.

Some of these messages wrap file and section names in bold terminal escape codes. `bold(text)` produces the same wrapping.

To check one package manager, call `PackageManager.detect(project_path, requirements_files, dev_requirements_files)` on one of these members:

- `PackageManager.PIP`
- `PIP_TOOLS`
- `PIPENV`
- `POETRY`

It returns a `Detection` or raises `DetectionError`. Calling `str()` on a member gives its display name, for example `Poetry` or `pip-tools`.

`project_already_uses_uv(project_path)` returns the reason a project looks like it already uses uv. It returns `None` if there is no such sign.

## Reading project files

```python
from pathlib import Path

from uvmigrate.pyproject_schema import PyProject
from uvmigrate.pipenv_schema import Pipfile, PipenvLock
from uvmigrate.poetry_schema import PoetryLock

pyproject = PyProject.loads(Path("pyproject.toml").read_text())
pipfile = Pipfile.loads(Path("Pipfile").read_text())
pipenv_lock = PipenvLock.loads(Path("Pipfile.lock").read_text())
poetry_lock = PoetryLock.loads(Path("poetry.lock").read_text())
```

Each class also has a `from_dict` method that builds it from an already parsed mapping.

### pyproject.toml

`PyProject` has these parts:

- `build_system`
- `project`: any keys it does not know are kept in `Project.remaining_fields`
- `dependency_groups`
- `tool`: covers `tool.poetry` and `tool.uv`

`Hatch.from_dict` reads the build targets of a `[tool.hatch]` table.

### Poetry

In Poetry, a dependency can be written as a constraint string, a table, or a list of tables. `DependencySpecification.from_value` accepts all three forms.

### Pipenv

`Pipfile` has one attribute for each standard section. Any other top-level table is kept in `category_groups`.

`PipenvLock` sorts its categories by name, and the packages within each category by name. It skips `_meta`.

Malformed entries raise `ValueError`.

## Tidying pyproject.toml

```python
from uvmigrate.formatter import prettify

print(prettify(Path("pyproject.toml").read_text()))
```

`prettify` makes these changes:

- The well-known inline tables become regular tables. These are:
  - `build-system`
  - `project` and its `urls`, `optional-dependencies`, `scripts`, `gui-scripts` and `entry-points`
  - `dependency-groups`
  - `tool.uv` and `tool.uv.sources`
  - anything under `tool.hatch`
- An array of inline tables at `tool.uv.index` becomes an array of tables.
- Arrays with two or more items under `project`, `dependency-groups`, `tool.uv` and `tool.hatch` are written one item per line.

To work on a parsed `tomlkit` document in place, call `PyprojectPrettyFormatter().format(document)`.

## Logging

`uvmigrate.logger.configure(level)` attaches a handler to the root logger at the given `logging` level. The handler writes to standard error. Calling `configure` again replaces the handler.

The handler formats messages with `LevelFormatter`. Error, warning and debug messages get a coloured `error:`, `warning:` or `debug:` prefix, and other messages are printed as they are. Pass `LevelFormatter(colored=False)` to get the prefixes without colour.

## What it does not do

`uvmigrate` has no command-line tool. It does not write a new `pyproject.toml` from the files it reads. It does not run `uv lock`. It does not remove the old package manager's files. It detects and reads; turning that data into a uv project is left to the caller.