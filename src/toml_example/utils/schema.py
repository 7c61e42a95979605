"""Input model: the raw declarations the planner consumes."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Literal

__all__ = [
    "Attribute",
    "AttributeKind",
    "FieldDeclaration",
    "RecordDeclaration",
    "doc_attributes",
]

AttributeKind = Literal["doc", "toml_example", "serde"]


@dataclass(frozen=True)
class Attribute:
    """One raw attribute entry attached to a field or a record.

    Attributes:
        kind (AttributeKind): "doc" for a documentation line, "toml_example" or
            "serde" for a comma separated list of directive tokens.
        value (str): Documentation line (verbatim) or directive tokens.
    """

    kind: AttributeKind
    value: str

    @classmethod
    def doc(cls, line: str) -> Attribute:
        return cls("doc", line)

    @classmethod
    def toml_example(cls, tokens: str) -> Attribute:
        return cls("toml_example", tokens)

    @classmethod
    def serde(cls, tokens: str) -> Attribute:
        return cls("serde", tokens)


@dataclass(frozen=True)
class FieldDeclaration:
    """A named, typed field of a record.

    Attributes:
        name (str): Declared field name.
        annotation (Any): Declared type, e.g. `int`, `list[str]`, `Inner | None`.
        attributes (tuple[Attribute, ...]): Raw attributes in declaration order.
        record (type | None): Enclosing record. Named default functions are
            looked up on it and planning errors name it.
    """

    name: str
    annotation: Any
    attributes: tuple[Attribute, ...] = ()
    record: type | None = None


@dataclass(frozen=True)
class RecordDeclaration:
    """A record type with its ordered fields and record-level attributes."""

    record_type: type
    fields: tuple[FieldDeclaration, ...]
    attributes: tuple[Attribute, ...] = ()

    @property
    def name(self) -> str:
        return self.record_type.__name__


def doc_attributes(text: str | None) -> tuple[Attribute, ...]:
    """Turn a Python docstring into documentation attributes.

    The text is cleaned like `inspect.cleandoc` and every non-empty line gets a
    leading space, so that rendering `#` + line yields `# line`.

    Args:
        text (str | None): Docstring or free text.

    Returns:
        tuple[Attribute, ...]: One "doc" attribute per line.
    """
    if not text:
        return ()

    return tuple(
        Attribute.doc(f" {line}" if line else "")
        for line in inspect.cleandoc(text).splitlines()
    )
