"""Build record declarations from dataclasses."""

from __future__ import annotations

import ast
import dataclasses
import inspect
import textwrap
import typing
from typing import Any

from ..constants import METADATA_KEY, RECORD_ATTRIBUTES
from .schema import Attribute, FieldDeclaration, RecordDeclaration, doc_attributes

__all__ = [
    "attribute_docstrings",
    "declare_record",
    "field",
    "record_docstring",
]


def field(
    default: Any = dataclasses.MISSING,
    *,
    default_factory: Any = dataclasses.MISSING,
    doc: str | None = None,
    toml_example: str | None = None,
    serde: str | None = None,
    **kwargs: Any,
) -> Any:
    """`dataclasses.field` with example attributes.

    Args:
        default (Any, optional): Field default.
        default_factory (Any, optional): Field default factory.
        doc (str | None, optional): Field documentation. Overrides an attribute
            docstring.
        toml_example (str | None, optional): Directive tokens, e.g.
            'default = 7, require' or 'nesting = prefix'.
        serde (str | None, optional): Serialization-convention tokens, e.g.
            'default = "default_port"' or 'rename = "port-number"'.
        **kwargs: Passed on to `dataclasses.field`.

    Returns:
        Any: The dataclass field.
    """
    attributes = list(doc_attributes(doc))
    if toml_example is not None:
        attributes.append(Attribute.toml_example(toml_example))
    if serde is not None:
        attributes.append(Attribute.serde(serde))

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = tuple(attributes)

    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs
    )


def declare_record(record_type: type) -> RecordDeclaration:
    """Describe a dataclass as a record declaration.

    Args:
        record_type (type): Dataclass to describe.

    Raises:
        TypeError: `record_type` is not a dataclass.

    Returns:
        RecordDeclaration: Fields in declaration order with their attributes.
    """
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise TypeError(f"{record_type!r} is not a dataclass")

    hints = typing.get_type_hints(record_type)
    docstrings = attribute_docstrings(record_type)
    fields = []

    for dc_field in dataclasses.fields(record_type):
        attributes = tuple(dc_field.metadata.get(METADATA_KEY, ()))
        if not any(attribute.kind == "doc" for attribute in attributes):
            attributes = doc_attributes(docstrings.get(dc_field.name)) + attributes

        fields.append(
            FieldDeclaration(
                name=dc_field.name,
                annotation=hints.get(dc_field.name, dc_field.type),
                attributes=attributes,
                record=record_type,
            )
        )

    return RecordDeclaration(
        record_type=record_type,
        fields=tuple(fields),
        attributes=doc_attributes(record_docstring(record_type))
        + tuple(record_type.__dict__.get(RECORD_ATTRIBUTES, ())),
    )


def record_docstring(record_type: type) -> str | None:
    """Return the docstring written on the class itself.

    `dataclasses` synthesizes a signature docstring for undocumented classes;
    that one is ignored.
    """
    doc = record_type.__dict__.get("__doc__")
    if not doc:
        return None

    # "Name(a: int = 0, ...)"; annotation formatting varies between versions
    synthesized = (
        doc.startswith(record_type.__name__ + "(")
        and doc.endswith(")")
        and "\n" not in doc
    )
    return None if synthesized else doc


def attribute_docstrings(record_type: type) -> dict[str, str]:
    """Collect attribute docstrings from the class source.

    An attribute docstring is a string literal statement right after an
    annotated assignment:

        port: int = 0
        \"\"\"Port to listen on.\"\"\"

    Args:
        record_type (type): Class to inspect.

    Returns:
        dict[str, str]: Docstring per attribute name, empty when the source is
            not available.
    """
    try:
        source = textwrap.dedent(inspect.getsource(record_type))
        tree = ast.parse(source)
    except (OSError, TypeError, SyntaxError):
        return {}

    class_def = next(
        (node for node in tree.body if isinstance(node, ast.ClassDef)), None
    )
    if class_def is None:
        return {}

    docstrings = {}
    for node, following in zip(class_def.body, class_def.body[1:]):
        if (
            isinstance(node, ast.AnnAssign)
            and isinstance(node.target, ast.Name)
            and isinstance(following, ast.Expr)
            and isinstance(following.value, ast.Constant)
            and isinstance(following.value.value, str)
        ):
            docstrings[node.target.id] = following.value.value

    return docstrings
