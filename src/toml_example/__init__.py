"""Commented, round-trippable TOML example documents from dataclass schemas."""

from . import utils
from .cli_main import app
from .utils.errors import (
    CyclicNestingError,
    DefaultFunctionError,
    ExampleConfigError,
    FlattenError,
    NestingError,
    RecordDefaultError,
    RenameRuleError,
    UnsupportedDirectiveError,
)
from .utils.example import TomlExample, persist, record, render
from .utils.introspect import field
from .version import __version__

__all__ = [
    "CyclicNestingError",
    "DefaultFunctionError",
    "ExampleConfigError",
    "FlattenError",
    "NestingError",
    "RecordDefaultError",
    "RenameRuleError",
    "TomlExample",
    "UnsupportedDirectiveError",
    "__version__",
    "app",
    "field",
    "main",
    "persist",
    "record",
    "render",
    "utils",
]


def main():
    app()
