"""Parse raw field and record attributes into normalized metadata."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .case import RenameRule
from .errors import UnsupportedDirectiveError
from .schema import Attribute
from .shapes import NestingFormat

__all__ = [
    "DefaultSource",
    "FieldMetadata",
    "FunctionDefault",
    "LiteralDefault",
    "NamedFunctionDefault",
    "parse_attributes",
    "split_unenclosed",
]

_OPENERS = {"[": "]", "{": "}", "(": ")"}
_CLOSERS = set(_OPENERS.values())


@dataclass(frozen=True)
class LiteralDefault:
    """Literal TOML text used as-is, e.g. `7` or `"text"`."""

    text: str


@dataclass(frozen=True)
class FunctionDefault:
    """Use a type's own default constructor.

    Attributes:
        target (object): Constructor bound once the field type is known, None
            while unbound.
    """

    target: object = None


@dataclass(frozen=True)
class NamedFunctionDefault:
    """Call a named, argument-less function for the default.

    Attributes:
        name (str): Function name, looked up on the record, in its module, or as
            a "module:attr" import path.
        function (object): Resolved callable, None while unresolved.
    """

    name: str
    function: object = None


DefaultSource = LiteralDefault | FunctionDefault | NamedFunctionDefault


@dataclass
class FieldMetadata:
    """Normalized metadata of a field or record.

    Default directives of each kind are kept separately (last one wins within a
    kind); `default_source` applies the precedence literal > named function >
    type default.
    """

    docs: list[str] = field(default_factory=list)
    literal_default: LiteralDefault | None = None
    named_default: NamedFunctionDefault | None = None
    type_default: FunctionDefault | None = None
    nesting: NestingFormat | None = None
    require: bool = False
    skip: bool = False
    flatten: bool = False
    is_enum: bool = False
    rename: str | None = None
    rename_rule: RenameRule = RenameRule.NONE

    @property
    def default_source(self) -> DefaultSource | None:
        return self.literal_default or self.named_default or self.type_default


def split_unenclosed(text: str, separator: str = ",") -> Iterator[str]:
    """Split on separators that are not inside quotes or brackets.

    Backslash escapes the next character. Pieces are stripped; empty pieces
    (e.g. from a trailing comma) are dropped.

    Args:
        text (str): Directive text, e.g. 'default = [1, 2], require'.
        separator (str, optional): Separator character. Defaults to ",".

    Yields:
        str: Directive tokens.
    """
    depth = 0
    quote = None
    escaped = False
    start = 0

    for index, char in enumerate(text):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == separator and depth == 0:
            token = text[start:index].strip()
            if token:
                yield token
            start = index + 1

    token = text[start:].strip()
    if token:
        yield token


def parse_attributes(attributes: Iterable[Attribute], *, owner: str = "") -> FieldMetadata:
    """Accumulate raw attributes into `FieldMetadata`.

    Args:
        attributes (Iterable[Attribute]): Raw attributes in declaration order.
        owner (str, optional): "Record" or "Record.field", used in error messages.

    Raises:
        UnsupportedDirectiveError: Unknown `toml_example` token or nesting value.
        RenameRuleError: Unknown `rename_all` rule.

    Returns:
        FieldMetadata: Parsed metadata.
    """
    meta = FieldMetadata()

    for attribute in attributes:
        if attribute.kind == "doc":
            meta.docs.append(attribute.value)
        elif attribute.kind == "toml_example":
            for token in split_unenclosed(attribute.value):
                _apply_toml_example_token(meta, token, owner)
        elif attribute.kind == "serde":
            for token in split_unenclosed(attribute.value):
                _apply_serde_token(meta, token, owner)

    return meta


def _split_directive(token: str) -> tuple[str, str | None]:
    key, sep, value = token.partition("=")
    return key.strip(), value.strip() if sep else None


def _unquote(value: str) -> str:
    return value.strip().strip('"')


def _apply_toml_example_token(meta: FieldMetadata, token: str, owner: str):
    key, value = _split_directive(token)

    if key == "default":
        if value is None:
            meta.type_default = FunctionDefault()
        else:
            meta.literal_default = LiteralDefault(value)
    elif key == "nesting":
        if value is None or value == "section":
            meta.nesting = NestingFormat.SECTION
        elif value == "prefix":
            meta.nesting = NestingFormat.PREFIX
        else:
            raise UnsupportedDirectiveError(
                f"nesting = {value} is not allowed, please use prefix or section",
                record=owner,
            )
    elif value is not None:
        raise UnsupportedDirectiveError(f"{token} is not allowed attribute", record=owner)
    elif key == "require":
        meta.require = True
    elif key == "skip":
        meta.skip = True
    elif key in ("is_enum", "enum"):
        meta.is_enum = True
    elif key == "flatten":
        meta.flatten = True
    else:
        raise UnsupportedDirectiveError(f"{token} is not allowed attribute", record=owner)


def _apply_serde_token(meta: FieldMetadata, token: str, owner: str):
    # Tokens of other serialization concerns (alias, deny_unknown_fields, ...) are
    # not ours and are ignored.
    key, value = _split_directive(token)

    if key == "default":
        if value is None:
            meta.type_default = FunctionDefault()
        else:
            meta.named_default = NamedFunctionDefault(_unquote(value))
    elif key in ("skip", "skip_deserializing"):
        meta.skip = True
    elif key == "flatten":
        meta.flatten = True
    elif key == "rename_all" and value is not None:
        meta.rename_rule = RenameRule.from_str(_unquote(value), record=owner)
    elif key == "rename" and value is not None:
        meta.rename = _unquote(value)
