"""Assemble the example document text from record plans."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

import tomlkit
from tomlkit.items import Item

from ..constants import OPTIONAL_MARKER
from .attributes import FunctionDefault, LiteralDefault, NamedFunctionDefault
from .planner import FieldPlan, InheritedDefault, RecordPlan
from .shapes import NestingFormat

__all__ = [
    "format_key",
    "format_value",
    "render_record",
    "split_prefix",
]

_BARE_KEY = re.compile(r"[A-Za-z0-9_-]+")


def render_record(
    plan: RecordPlan,
    label: str = "",
    prefix: str = "",
    *,
    section: str = "",
    deferred: list[str] | None = None,
) -> str:
    """Render a record's example text.

    Leaf and prefix-nested fields come first, in declaration order, followed by
    flattened records and then the section-nested fields, so keys never end up
    below a header they do not belong to.

    Args:
        plan (RecordPlan): Planned record.
        label (str, optional): Header line(s) written by the nesting parent right
            after the record's documentation. Defaults to "".
        prefix (str, optional): Leading comment markers ("# ") followed by the
            dotted key prefix put in front of every leaf key. Defaults to "".
        section (str, optional): Dotted path of the enclosing table, used to
            qualify nested headers. Defaults to "".
        deferred (list[str] | None, optional): When given, section-nested output
            is appended here instead of to the returned text. Defaults to None.

    Returns:
        str: Example text.
    """
    marker, keys = split_prefix(prefix)
    defaults = _RecordDefaults()
    head = [_doc_lines(plan.docs), label]
    sections: list[str] = []

    for field in plan.inline_fields:
        head.append(_doc_lines(field.docs))

        if field.nesting is NestingFormat.PREFIX:
            child_prefix = _child_marker(marker, field) + keys + format_key(field.name) + "."
            head.append(
                _render_child(field.target, "", child_prefix, section=section, deferred=sections)
            )
        else:
            line_marker = OPTIONAL_MARKER if field.optional else ""
            value = _leaf_value(field, defaults)
            head.append(f"{line_marker}{prefix}{format_key(field.name)} = {value}\n\n")

    section_fields = plan.section_fields
    flattened = [f for f in section_fields if f.flatten and f.nesting is NestingFormat.SECTION]

    for field in flattened:
        head.append(_doc_lines(field.docs))
        head.append(
            _render_child(
                field.target,
                "",
                _child_marker(marker, field) + keys,
                section=section,
                deferred=sections,
            )
        )

    for field in section_fields:
        if field in flattened:
            continue

        child_marker = _child_marker(marker, field)
        path = _join_path(section, keys + format_key(field.name))

        if field.nesting is NestingFormat.SECTION_VECTOR:
            header = f"[[{path}]]"
        elif field.nesting is NestingFormat.SECTION_DICT:
            key = format_key(field.default_key())
            path = _join_path(section, keys + key) if field.flatten else f"{path}.{key}"
            header = f"[{path}]"
        else:
            header = f"[{path}]"

        sections.append(_doc_lines(field.docs))
        sections.append(
            _render_child(field.target, f"{child_marker}{header}\n", child_marker, section=path)
        )

    if deferred is not None:
        deferred.extend(sections)
        return "".join(head)

    return "".join(head) + "".join(sections)


def split_prefix(prefix: str) -> tuple[str, str]:
    """Split a prefix into its leading comment markers and its dotted keys.

    Args:
        prefix (str): Prefix such as "# outer.".

    Returns:
        tuple[str, str]: ("# ", "outer.") for the example above.
    """
    marker = ""
    while prefix.startswith(OPTIONAL_MARKER):
        marker += OPTIONAL_MARKER
        prefix = prefix[len(OPTIONAL_MARKER) :]
    return marker, prefix


def format_key(name: str) -> str:
    """Return `name` as a TOML key, quoting it unless it is a bare key."""
    if _BARE_KEY.fullmatch(name):
        return name
    return tomlkit.string(name).as_string()


def format_value(value: Any, *, is_enum: bool = False) -> str:
    """Format an evaluated default value as TOML text.

    Args:
        value (Any): Value produced by a default function or constructor.
        is_enum (bool, optional): Always emit the quoted textual form.
            Defaults to False.

    Returns:
        str: TOML value text, e.g. `7`, `"text"`, `[1, 2]`.
    """
    if is_enum:
        return tomlkit.string(_enum_text(value)).as_string()
    if value is None:
        return '""'
    return _to_item(value).as_string()


class _RecordDefaults:
    """Default instances of enclosing records, built once per render."""

    def __init__(self):
        self._instances: dict[int, Any] = {}

    def get(self, source: FunctionDefault | NamedFunctionDefault) -> Any:
        key = id(source)
        if key not in self._instances:
            if isinstance(source, NamedFunctionDefault):
                self._instances[key] = source.function()
            else:
                self._instances[key] = source.target()
        return self._instances[key]


def _leaf_value(field: FieldPlan, defaults: _RecordDefaults) -> str:
    default = field.default

    if isinstance(default, LiteralDefault):
        return default.text
    if isinstance(default, InheritedDefault):
        value = getattr(defaults.get(default.source), default.attribute)
    elif isinstance(default, NamedFunctionDefault):
        value = default.function()
    else:
        value = default.target()

    return format_value(value, is_enum=field.is_enum)


def _render_child(
    record_type: type,
    label: str,
    prefix: str,
    *,
    section: str,
    deferred: list[str] | None = None,
) -> str:
    from .example import example_with_prefix

    return example_with_prefix(
        record_type, label, prefix, section=section, deferred=deferred
    )


def _child_marker(marker: str, field: FieldPlan) -> str:
    return marker + (OPTIONAL_MARKER if field.optional else "")


def _join_path(section: str, path: str) -> str:
    return f"{section}.{path}" if section else path


def _doc_lines(docs: tuple[str, ...]) -> str:
    return "".join(f"#{line}\n" for line in docs)


def _enum_text(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name
    return str(value)


def _to_item(value: Any) -> Item:
    if isinstance(value, Enum):
        return tomlkit.string(_enum_text(value))

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}

    if isinstance(value, Mapping):
        table = tomlkit.inline_table()
        for key, item in value.items():
            if item is not None:
                table.append(str(key), _to_item(item))
        return table

    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)

    if isinstance(value, (list, tuple)):
        array = tomlkit.array()
        for item in value:
            if item is not None:
                array.append(_to_item(item))
        return array

    try:
        return tomlkit.item(value)
    except (TypeError, ValueError):
        return tomlkit.string(str(value))
