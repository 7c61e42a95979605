"""Merge type and attribute information into per-field rendering plans."""

from __future__ import annotations

import importlib
import keyword
import sys
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..constants import DEFAULT_MAP_KEY
from .attributes import (
    FieldMetadata,
    FunctionDefault,
    LiteralDefault,
    NamedFunctionDefault,
    parse_attributes,
)
from .errors import (
    DefaultFunctionError,
    FlattenError,
    NestingError,
    RecordDefaultError,
)
from .schema import FieldDeclaration, RecordDeclaration
from .shapes import ListOf, MapOf, NestingFormat, Record, TypeShape, resolve_type

__all__ = [
    "Bucket",
    "FieldPlan",
    "InheritedDefault",
    "RecordPlan",
    "plan_field",
    "plan_record",
    "resolve_default_function",
    "strip_keyword_escape",
]


class Bucket(Enum):
    """Output group; all INLINE fields are rendered before any SECTION field."""

    INLINE = 1
    SECTION = 2


@dataclass(frozen=True)
class InheritedDefault:
    """Take the field's value from the enclosing record's default instance.

    Attributes:
        source (FunctionDefault | NamedFunctionDefault): Bound record-level source.
        attribute (str): Declared attribute name to project.
    """

    source: FunctionDefault | NamedFunctionDefault
    attribute: str


PlannedDefault = LiteralDefault | FunctionDefault | NamedFunctionDefault | InheritedDefault


@dataclass(frozen=True)
class FieldPlan:
    """Everything the renderer needs to know about one field.

    Attributes:
        attribute (str): Declared field name.
        name (str): Output key.
        docs (tuple[str, ...]): Documentation lines.
        default (PlannedDefault): Effective default source.
        optional (bool): Render the field commented out.
        nesting (NestingFormat | None): Nested record layout, None for leaf fields.
        flatten (bool): Suppress the field's own header.
        is_enum (bool): Quote the evaluated default.
        shape (TypeShape): Resolved type shape.
        target (Any): Underlying named type, the nested record for nested fields.
        key_hint (str | None): Explicit literal default, used to name map sections.
    """

    attribute: str
    name: str
    docs: tuple[str, ...]
    default: PlannedDefault
    optional: bool
    nesting: NestingFormat | None
    flatten: bool
    is_enum: bool
    shape: TypeShape
    target: Any = None
    key_hint: str | None = None

    @property
    def bucket(self) -> Bucket:
        if self.nesting is not None and self.nesting.is_section:
            return Bucket.SECTION
        return Bucket.INLINE

    @property
    def is_nested(self) -> bool:
        return self.nesting is not None

    def default_key(self) -> str:
        """Key of the single example entry of a map-shaped nested section."""
        if self.key_hint is not None:
            key = self.key_hint.strip("\"'").replace(" ", "").replace(".", "-")
            if key:
                return key
        return DEFAULT_MAP_KEY


@dataclass(frozen=True)
class RecordPlan:
    """Ordered field plans of one record plus its own documentation."""

    record_type: type
    docs: tuple[str, ...]
    default: FunctionDefault | NamedFunctionDefault | None
    fields: tuple[FieldPlan, ...]

    @property
    def name(self) -> str:
        return self.record_type.__name__

    @property
    def inline_fields(self) -> tuple[FieldPlan, ...]:
        return tuple(f for f in self.fields if f.bucket is Bucket.INLINE)

    @property
    def section_fields(self) -> tuple[FieldPlan, ...]:
        return tuple(f for f in self.fields if f.bucket is Bucket.SECTION)


def plan_record(declaration: RecordDeclaration) -> RecordPlan:
    """Plan every non-skipped field of a record.

    Args:
        declaration (RecordDeclaration): Record to plan.

    Raises:
        ExampleConfigError: Any schema problem; raised before output is produced.

    Returns:
        RecordPlan: Plan with fields in declaration order.
    """
    meta = parse_attributes(declaration.attributes, owner=declaration.name)
    record_default = _record_default(meta, declaration)

    fields = []
    for field_declaration in declaration.fields:
        plan = plan_field(
            field_declaration,
            record_default=record_default,
            rename_rule=meta.rename_rule,
        )
        if plan is not None:
            fields.append(plan)

    return RecordPlan(
        record_type=declaration.record_type,
        docs=tuple(meta.docs),
        default=record_default,
        fields=tuple(fields),
    )


def plan_field(
    declaration: FieldDeclaration,
    *,
    record_default: FunctionDefault | NamedFunctionDefault | None = None,
    rename_rule=None,
) -> FieldPlan | None:
    """Plan a single field.

    Named default functions are looked up on `declaration.record` and errors
    are reported against it.

    Args:
        declaration (FieldDeclaration): Field to plan.
        record_default (FunctionDefault | NamedFunctionDefault | None, optional):
            Bound record-level default source.
        rename_rule (RenameRule | None, optional): Record-level rename rule.

    Returns:
        FieldPlan | None: Plan, or None for skipped fields.
    """
    record_name = declaration.record.__name__ if declaration.record is not None else ""
    owner = ".".join(part for part in (record_name, declaration.name) if part)
    meta = parse_attributes(declaration.attributes, owner=owner)

    if meta.skip:
        return None

    resolved = resolve_type(declaration.annotation, meta.nesting)

    if resolved.nesting is not None:
        if meta.flatten and resolved.nesting is NestingFormat.SECTION_VECTOR:
            raise FlattenError(
                "flatten is only valid for single records or maps, "
                "but the field is a collection",
                record=record_name,
                field=declaration.name,
            )
        if not isinstance(_element_shape(resolved.shape), Record):
            raise NestingError(
                "nesting only works on a nested-record-shaped field",
                record=record_name,
                field=declaration.name,
            )

    return FieldPlan(
        attribute=declaration.name,
        name=_output_name(declaration.name, meta, rename_rule),
        docs=tuple(meta.docs),
        default=_field_default(meta, resolved, declaration, record_default, owner),
        optional=resolved.optional and not meta.require,
        nesting=resolved.nesting,
        flatten=meta.flatten,
        is_enum=meta.is_enum,
        shape=resolved.shape,
        target=resolved.target,
        key_hint=meta.literal_default.text if meta.literal_default else None,
    )


def strip_keyword_escape(name: str) -> str:
    """Strip the trailing underscore that escapes a Python keyword (`class_`)."""
    stem = name[:-1]
    if (
        name.endswith("_")
        and stem
        and not stem.endswith("_")
        and (keyword.iskeyword(stem) or keyword.issoftkeyword(stem))
    ):
        return stem
    return name


def resolve_default_function(
    name: str, record_type: type | None, *, owner: str = ""
) -> Callable[[], Any]:
    """Find the callable a named default refers to.

    Lookup order: "module:attr" import path; attribute of the record; global of
    the record's module; dotted "package.module.attr" import path.

    Args:
        name (str): Function name as written in the directive.
        record_type (type | None): Record the directive belongs to.
        owner (str, optional): Name used in the error message.

    Raises:
        DefaultFunctionError: Nothing callable under that name.

    Returns:
        Callable[[], Any]: The default function.
    """
    for candidate in _function_candidates(name, record_type):
        if callable(candidate):
            return candidate

    raise DefaultFunctionError(f"default function {name!r} not found", record=owner)


def _function_candidates(name: str, record_type: type | None):
    if ":" in name:
        module_name, _, qualname = name.partition(":")
        yield _getattr_path(_import(module_name), qualname)
        return

    if record_type is not None:
        yield _getattr_path(record_type, name)
        yield _getattr_path(sys.modules.get(record_type.__module__), name)

    if "." in name:
        module_name, _, attr = name.rpartition(".")
        yield _getattr_path(_import(module_name), attr)


def _import(module_name: str):
    try:
        return importlib.import_module(module_name)
    except ImportError:
        return None


def _getattr_path(obj: Any, path: str) -> Any:
    for part in path.split("."):
        if obj is None:
            return None
        obj = getattr(obj, part, None)
    return obj


def _record_default(
    meta: FieldMetadata, declaration: RecordDeclaration
) -> FunctionDefault | NamedFunctionDefault | None:
    source = meta.default_source

    if isinstance(source, LiteralDefault):
        raise RecordDefaultError(
            "setting a literal default value on a record is not supported",
            record=declaration.name,
        )
    if isinstance(source, NamedFunctionDefault):
        return replace(
            source,
            function=resolve_default_function(
                source.name, declaration.record_type, owner=declaration.name
            ),
        )
    if isinstance(source, FunctionDefault):
        return FunctionDefault(declaration.record_type)
    return None


def _element_shape(shape: TypeShape) -> TypeShape:
    # list items and map values carry the nested record
    if isinstance(shape, ListOf):
        return shape.inner
    if isinstance(shape, MapOf):
        return shape.value
    return shape


def _field_default(meta, resolved, declaration, record_default, owner):
    source = meta.default_source

    if isinstance(source, LiteralDefault):
        return source
    if isinstance(source, NamedFunctionDefault):
        return replace(
            source,
            function=resolve_default_function(source.name, declaration.record, owner=owner),
        )
    if isinstance(source, FunctionDefault) and resolved.factory is not None:
        return FunctionDefault(resolved.factory)
    if record_default is not None:
        return InheritedDefault(record_default, declaration.name)
    if isinstance(source, FunctionDefault):
        return LiteralDefault('""')
    return LiteralDefault(resolved.default or '""')


def _output_name(attribute: str, meta: FieldMetadata, rename_rule) -> str:
    if meta.rename is not None:
        return meta.rename
    name = strip_keyword_escape(attribute)
    return rename_rule.apply_to_field(name) if rename_rule is not None else name
