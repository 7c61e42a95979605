"""toml-example utilities."""

from .attributes import (
    FieldMetadata,
    FunctionDefault,
    LiteralDefault,
    NamedFunctionDefault,
    parse_attributes,
    split_unenclosed,
)
from .case import RenameRule
from .config import (
    ExampleTarget,
    Settings,
    get_config_file,
    read_config,
)
from .console import (
    console,
    print_and_raise,
    print_error,
    print_info,
    print_ok,
    print_warn,
)
from .errors import (
    CyclicNestingError,
    DefaultFunctionError,
    ExampleConfigError,
    FlattenError,
    NestingError,
    RecordDefaultError,
    RenameRuleError,
    UnsupportedDirectiveError,
)
from .example import TomlExample, example_with_prefix, persist, record, render
from .introspect import declare_record, field
from .planner import Bucket, FieldPlan, RecordPlan, plan_field, plan_record
from .renderer import format_key, format_value, render_record
from .schema import Attribute, FieldDeclaration, RecordDeclaration, doc_attributes
from .shapes import NestingFormat, ResolvedType, resolve_type

__all__ = [
    "Attribute",
    "Bucket",
    "CyclicNestingError",
    "DefaultFunctionError",
    "ExampleConfigError",
    "ExampleTarget",
    "FieldDeclaration",
    "FieldMetadata",
    "FieldPlan",
    "FlattenError",
    "FunctionDefault",
    "LiteralDefault",
    "NamedFunctionDefault",
    "NestingError",
    "NestingFormat",
    "RecordDeclaration",
    "RecordDefaultError",
    "RecordPlan",
    "RenameRule",
    "RenameRuleError",
    "ResolvedType",
    "Settings",
    "TomlExample",
    "UnsupportedDirectiveError",
    "console",
    "declare_record",
    "doc_attributes",
    "example_with_prefix",
    "field",
    "format_key",
    "format_value",
    "get_config_file",
    "parse_attributes",
    "persist",
    "plan_field",
    "plan_record",
    "print_and_raise",
    "print_error",
    "print_info",
    "print_ok",
    "print_warn",
    "read_config",
    "record",
    "render",
    "render_record",
    "resolve_type",
    "split_unenclosed",
]
