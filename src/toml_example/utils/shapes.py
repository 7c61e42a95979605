"""Classify declared field types into the shapes the renderer understands."""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, get_args, get_origin

__all__ = [
    "ListOf",
    "MapOf",
    "NestingFormat",
    "Opaque",
    "Record",
    "ResolvedType",
    "Scalar",
    "TypeShape",
    "baseline_literal",
    "is_record_type",
    "renders_itself",
    "resolve_type",
]

_UNION_ORIGINS = {typing.Union, types.UnionType}
_LIST_ORIGINS = {list, collections.abc.Sequence, collections.abc.MutableSequence}
_MAP_ORIGINS = {dict, collections.abc.Mapping, collections.abc.MutableMapping}

# Baseline literal per scalar kind
_BASELINES = {"integer": "0", "float": "0.0"}


class NestingFormat(Enum):
    """How a nested record is laid out in the document."""

    SECTION = "section"
    SECTION_VECTOR = "section-vector"
    SECTION_DICT = "section-dict"
    PREFIX = "prefix"

    @property
    def is_section(self) -> bool:
        return self is not NestingFormat.PREFIX


@dataclass(frozen=True)
class Scalar:
    kind: str  # "integer", "float" or "other"
    name: str


@dataclass(frozen=True)
class ListOf:
    inner: TypeShape


@dataclass(frozen=True)
class MapOf:
    key: TypeShape
    value: TypeShape


@dataclass(frozen=True)
class Record:
    name: str


@dataclass(frozen=True)
class Opaque:
    name: str


TypeShape = Scalar | ListOf | MapOf | Record | Opaque


@dataclass(frozen=True)
class ResolvedType:
    """Outcome of classifying one declared type.

    Attributes:
        shape (TypeShape): Semantic shape, with optionality unwrapped.
        default (str): Baseline literal default, empty when not meaningful.
        optional (bool): Whether an `Optional` wrapper was found.
        target (Any): Underlying named type (list item or map value type for
            containers), None when there is none.
        factory (Any): The type's own default constructor, None when there is none.
        nesting (NestingFormat | None): Nesting format refined by the shape.
    """

    shape: TypeShape
    default: str
    optional: bool = False
    target: Any = None
    factory: Any = None
    nesting: NestingFormat | None = None


def renders_itself(tp: Any) -> bool:
    """Return True for classes with their own `toml_example_with_prefix`."""
    return isinstance(tp, type) and callable(getattr(tp, "toml_example_with_prefix", None))


def is_record_type(tp: Any) -> bool:
    """Return True for types that can be rendered as a nested record."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or renders_itself(tp)


def baseline_literal(tp: Any) -> str:
    """Zero-value literal for a scalar type.

    Args:
        tp (Any): Declared type.

    Returns:
        str: "0" for integer types, "0.0" for floating point types, '""' otherwise.
    """
    return _BASELINES.get(_scalar_kind(tp), '""')


def resolve_type(annotation: Any, nesting: NestingFormat | None = None) -> ResolvedType:
    """Classify a declared field type.

    `Optional` is unwrapped and reported through `ResolvedType.optional`. A list
    or map refines a present `nesting` seed into a vector or dict section; item
    and value types are resolved without a seed, so nested containers never
    change the field's nesting format.

    Args:
        annotation (Any): Declared type.
        nesting (NestingFormat | None, optional): Nesting requested for the field.
            Defaults to None.

    Returns:
        ResolvedType: Shape, baseline default, optionality and refined nesting.
    """
    return _resolve(annotation, nesting, optional=False)


def _resolve(annotation: Any, nesting: NestingFormat | None, optional: bool) -> ResolvedType:
    inner = _optional_argument(annotation)
    if inner is not None:
        return _resolve(inner, nesting, optional=True)

    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin is None and annotation in (list, dict):
        origin = annotation

    if origin in _LIST_ORIGINS:
        if nesting is not None:
            nesting = NestingFormat.SECTION_VECTOR
        item = _resolve(args[0], None, optional=False) if args else None
        item_default = item.default if item else ""
        return ResolvedType(
            shape=ListOf(item.shape if item else Opaque("Any")),
            default=f"[ {item_default}, ]" if item_default else "[  ]",
            optional=optional,
            target=item.target if item else None,
            factory=list,
            nesting=nesting,
        )

    if origin in _MAP_ORIGINS:
        # keys are assumed to be strings
        value = _resolve(args[-1], None, optional=False) if args else None
        if nesting is not None:
            nesting = NestingFormat.SECTION_DICT
        return ResolvedType(
            shape=MapOf(Scalar("other", "str"), value.shape if value else Opaque("Any")),
            default="{  }",
            optional=optional,
            target=value.target if value else None,
            factory=dict,
            nesting=nesting,
        )

    if origin is not None:
        return ResolvedType(
            shape=Opaque(_type_name(annotation)),
            default="",
            optional=optional,
            nesting=nesting,
        )

    if not isinstance(annotation, type):
        return ResolvedType(
            shape=Opaque(_type_name(annotation)),
            default='""',
            optional=optional,
            nesting=nesting,
        )

    if is_record_type(annotation):
        shape = Record(annotation.__name__)
        default = '""'
    else:
        shape = Scalar(_scalar_kind(annotation), annotation.__name__)
        default = _BASELINES.get(shape.kind, '""')

    return ResolvedType(
        shape=shape,
        default=default,
        optional=optional,
        target=annotation,
        factory=annotation,
        nesting=nesting,
    )


def _optional_argument(annotation: Any) -> Any:
    """Return T for Optional[T] (or the remaining union), None otherwise."""
    if get_origin(annotation) not in _UNION_ORIGINS:
        return None

    args = get_args(annotation)
    remaining = tuple(arg for arg in args if arg is not type(None))

    if len(remaining) == len(args) or not remaining:
        return None
    if len(remaining) == 1:
        return remaining[0]
    return typing.Union[remaining]


def _scalar_kind(tp: Any) -> str:
    if isinstance(tp, type) and not issubclass(tp, bool):
        if issubclass(tp, int):
            return "integer"
        if issubclass(tp, float):
            return "float"
    return "other"


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or str(annotation)
