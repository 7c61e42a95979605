"""Public entry points: the `TomlExample` interface and the `record` decorator."""

from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from os import PathLike
from typing import Any, Protocol, runtime_checkable

from ..constants import RECORD_ATTRIBUTES
from .errors import CyclicNestingError
from .introspect import declare_record
from .planner import plan_record
from .renderer import render_record
from .schema import Attribute, doc_attributes
from .shapes import renders_itself

__all__ = [
    "TomlExample",
    "example_with_prefix",
    "persist",
    "record",
    "render",
]

# Records currently being rendered in this context, outermost first
_rendering: ContextVar[tuple[type, ...]] = ContextVar("_rendering", default=())


@runtime_checkable
class TomlExample(Protocol):
    """Interface of records that can render their own example document."""

    @classmethod
    def toml_example(cls) -> str: ...

    @classmethod
    def toml_example_with_prefix(
        cls,
        label: str,
        prefix: str,
        *,
        section: str = "",
        deferred: list[str] | None = None,
    ) -> str: ...

    @classmethod
    def to_toml_example(cls, file_name: str | PathLike[str]) -> None: ...


def render(record_type: type) -> str:
    """Render the example document of a record.

    Args:
        record_type (type): A `TomlExample` record or a plain dataclass.

    Raises:
        ExampleConfigError: The record's schema cannot be rendered.

    Returns:
        str: Example document.
    """
    return example_with_prefix(record_type, "", "")


def persist(record_type: type, path: str | PathLike[str]):
    """Render the example document of a record and write it to `path`.

    The document is rendered completely before the file is opened, so schema
    errors never leave a partial file behind.

    Args:
        record_type (type): A `TomlExample` record or a plain dataclass.
        path (str | PathLike[str]): Destination file.

    Raises:
        ExampleConfigError: The record's schema cannot be rendered.
        OSError: The file cannot be written.
    """
    text = render(record_type)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def example_with_prefix(
    record_type: type,
    label: str = "",
    prefix: str = "",
    *,
    section: str = "",
    deferred: list[str] | None = None,
) -> str:
    """Render a record through its own `toml_example_with_prefix`.

    Classes without that entry point (plain dataclasses) are rendered directly.

    Args:
        record_type (type): Record to render.
        label (str, optional): Header line(s) written after the record's docs.
        prefix (str, optional): Comment markers and dotted key prefix.
        section (str, optional): Dotted path of the enclosing table.
        deferred (list[str] | None, optional): Collects section-nested output.

    Returns:
        str: Example text.
    """
    if renders_itself(record_type):
        return record_type.toml_example_with_prefix(
            label, prefix, section=section, deferred=deferred
        )
    return _render_with_prefix(
        record_type, label, prefix, section=section, deferred=deferred
    )


def _render_with_prefix(
    record_type: type,
    label: str,
    prefix: str,
    *,
    section: str = "",
    deferred: list[str] | None = None,
) -> str:
    active = _rendering.get()
    if record_type in active:
        cycle = " -> ".join(t.__name__ for t in (*active, record_type))
        raise CyclicNestingError(f"cyclic nesting: {cycle}", record=record_type.__name__)

    plan = plan_record(declare_record(record_type))

    token = _rendering.set((*active, record_type))
    try:
        return render_record(plan, label, prefix, section=section, deferred=deferred)
    finally:
        _rendering.reset(token)


def record(
    cls: type | None = None,
    /,
    *,
    doc: str | None = None,
    toml_example: str | None = None,
    serde: str | None = None,
) -> Any:
    """Class decorator implementing `TomlExample` on a dataclass.

    Applies `@dataclass` when the class is not one yet. Can be used bare
    (`@record`) or with record-level attributes, e.g.
    `@record(serde='rename_all = "kebab-case", default')`.

    Args:
        cls (type | None): Class to decorate.
        doc (str | None, optional): Extra record documentation.
        toml_example (str | None, optional): Record-level directive tokens.
        serde (str | None, optional): Record-level serialization-convention
            tokens (`default`, `default = "fn"`, `rename_all = "rule"`).

    Returns:
        Any: The decorated class, or the decorator when called with arguments.
    """
    attributes = list(doc_attributes(doc))
    if toml_example is not None:
        attributes.append(Attribute.toml_example(toml_example))
    if serde is not None:
        attributes.append(Attribute.serde(serde))

    def wrap(cls: type) -> type:
        if not dataclasses.is_dataclass(cls):
            cls = dataclasses.dataclass(cls)

        setattr(cls, RECORD_ATTRIBUTES, tuple(attributes))
        cls.toml_example = classmethod(_toml_example)
        cls.toml_example_with_prefix = classmethod(_render_with_prefix)
        cls.to_toml_example = classmethod(persist)
        return cls

    if cls is None:
        return wrap
    return wrap(cls)


def _toml_example(cls: type) -> str:
    return cls.toml_example_with_prefix("", "")
