"""Lay out a migrated ``pyproject.toml`` the way projects usually write it."""

from __future__ import annotations

import tomlkit
from tomlkit.items import AoT, Array, InlineTable, Table
from tomlkit.toml_document import TOMLDocument

_EXPAND_EXACT = {
    ("build-system",),
    ("project",),
    ("dependency-groups",),
    ("project", "urls"),
    ("project", "optional-dependencies"),
    ("project", "scripts"),
    ("project", "gui-scripts"),
    ("project", "entry-points"),
    ("tool", "uv"),
    ("tool", "uv", "sources"),
}


def _should_expand(path: tuple[str, ...]) -> bool:
    if path in _EXPAND_EXACT:
        return True
    if len(path) == 3 and path[:2] == ("project", "entry-points"):
        return True
    return len(path) >= 2 and path[:2] == ("tool", "hatch")


def _should_split_array(path: tuple[str, ...]) -> bool:
    if path and path[0] in ("project", "dependency-groups"):
        return True
    return len(path) >= 2 and path[0] == "tool" and path[1] in ("uv", "hatch")


def _to_table(inline: InlineTable) -> Table:
    entries = [(k, v) for k, v in inline.value.body if k is not None]
    table = tomlkit.table(
        is_super_table=bool(entries) and all(isinstance(v, (Table, AoT)) for _, v in entries)
    )
    for key, value in entries:
        table.add(key, value)
    return table


def _to_aot(array: Array) -> AoT:
    aot = tomlkit.aot()
    for item in array:
        aot.append(_to_table(item))
    return aot


class PyprojectPrettyFormatter:
    """Turns inline tables into tables and spreads long arrays over several lines."""

    def format(self, document: TOMLDocument) -> TOMLDocument:
        self._visit(document, ())
        return document

    def _visit(self, container, path: tuple[str, ...]) -> None:
        for key in list(container.keys()):
            item_path = path + (str(key),)
            value = container[key]
            if (
                item_path == ("tool", "uv", "index")
                and isinstance(value, Array)
                and len(value) > 0
                and all(isinstance(v, InlineTable) for v in value)
            ):
                value = _to_aot(value)
                container[key] = value
            elif isinstance(value, InlineTable) and _should_expand(item_path):
                if not isinstance(container, InlineTable):
                    value = _to_table(value)
                    container[key] = value
            self._visit_item(value, item_path)

    def _visit_item(self, value, path: tuple[str, ...]) -> None:
        if isinstance(value, (Table, InlineTable)):
            self._visit(value, path)
        elif isinstance(value, AoT):
            for table in value:
                self._visit(table, path)
        elif isinstance(value, Array):
            for element in value:
                if isinstance(element, (Array, InlineTable)):
                    self._visit_item(element, path)
            if _should_split_array(path) and len(value) >= 2:
                value.multiline(True)


def prettify(text: str) -> str:
    """Parse ``text``, lay it out, and return it as TOML again."""
    document = tomlkit.parse(text)
    PyprojectPrettyFormatter().format(document)
    return tomlkit.dumps(document)