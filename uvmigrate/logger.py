"""Log output that prefixes warnings, errors and debug messages with a coloured label."""

from __future__ import annotations

import logging
import sys

_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"
_LABELS = {
    logging.ERROR: ("error", "\x1b[31m"),
    logging.WARNING: ("warning", "\x1b[33m"),
    logging.DEBUG: ("debug", "\x1b[34m"),
}


class LevelFormatter(logging.Formatter):
    """Prints messages bare, except errors, warnings and debug messages, which get a label."""

    def __init__(self, colored: bool = True) -> None:
        super().__init__()
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        label = _LABELS.get(record.levelno)
        if label is None:
            return message
        name, color = label
        if self.colored:
            name = f"{_BOLD}{color}{name}{_RESET}"
        return f"{name}: {message}"


_handler: logging.Handler | None = None


def configure(verbosity: int) -> logging.Handler:
    """Send log records at ``verbosity`` and above to standard error."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(LevelFormatter())
    root.addHandler(_handler)
    root.setLevel(verbosity)
    return _handler