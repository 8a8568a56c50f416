[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uvmigrate"
version = "0.1.0"
description = "Detect a project's Python package manager and read its metadata ahead of a move to uv."
requires-python = ">=3.10"
keywords = ["uv", "poetry", "pipenv", "pip-tools", "pyproject", "packaging"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = ["tomlkit"]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uvmigrate"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
