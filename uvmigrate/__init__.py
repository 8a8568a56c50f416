"""Detect a project's package manager, read its project and lock files, and tidy pyproject.toml."""

__version__ = "0.1.0"