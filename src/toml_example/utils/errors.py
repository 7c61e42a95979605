"""Configuration errors raised while planning an example document."""

from __future__ import annotations

__all__ = [
    "CyclicNestingError",
    "DefaultFunctionError",
    "ExampleConfigError",
    "FlattenError",
    "NestingError",
    "RecordDefaultError",
    "RenameRuleError",
    "UnsupportedDirectiveError",
]


class ExampleConfigError(ValueError):
    """Raised when a record schema cannot be rendered as an example.

    Attributes:
        record (str): Name of the offending record.
        field (str | None): Name of the offending field, if any.
    """

    def __init__(self, message: str, *, record: str = "", field: str | None = None):
        self.record = record
        self.field = field
        location = ".".join(part for part in (record, field) if part)
        super().__init__(f"{location}: {message}" if location else message)


class UnsupportedDirectiveError(ExampleConfigError):
    """An attribute token is not a known directive."""


class NestingError(ExampleConfigError):
    """Nesting requested on a field that is not a nested record."""


class FlattenError(ExampleConfigError):
    """Flatten requested on a list-shaped nested field."""


class RecordDefaultError(ExampleConfigError):
    """A literal default was given for a whole record."""


class RenameRuleError(ExampleConfigError):
    """Unknown `rename_all` rule."""


class DefaultFunctionError(ExampleConfigError):
    """A named default function could not be resolved."""


class CyclicNestingError(ExampleConfigError):
    """A record nests itself directly or transitively."""
