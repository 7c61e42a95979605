"""Tests for example document rendering."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pytest
import tomlkit

from conftest import load_example
from toml_example import (
    CyclicNestingError,
    FlattenError,
    NestingError,
    UnsupportedDirectiveError,
    field,
    record,
    render,
)
from toml_example.utils.renderer import format_key, format_value, split_prefix


def default_a():
    return 7


def default_b():
    return "default"


def default_str():
    return "seven"


class Level(Enum):
    DEBUG = "debug"
    INFO = "info"


class Mode(Enum):
    FAST = 1


def default_level():
    return Level.INFO


def default_mode():
    return Mode.FAST


def default_count():
    return 3


@record
class Basic:
    a: int = 0
    """Config.a should be a number"""
    b: str = ""
    """Config.b should be a string"""


@record
class Optionals:
    a: Optional[int] = field(default=None, doc="Config.a is an optional number")
    b: Optional[str] = field(default=None, doc="Config.b is an optional string")


@record
class Lists:
    a: list[int] = field(default_factory=list, doc="Config.a is a list of number")
    b: list[str] = field(default_factory=list, doc="Config.b is a list of string")
    c: list[Optional[int]] = field(default_factory=list, doc="Config.c")
    d: Optional[list[int]] = field(default=None, doc="Config.d")


@record
class Documented:
    """Config is to arrange something or change the controls on a computer or other device
    so that it can be used in a particular way
    """

    a: int = field(
        default=0,
        doc="Config.a should be a number\nthe number should be greater or equal zero",
    )


@record
class SerdeDefaults:
    a: int = field(default=7, doc="Config.a should be a number", serde='default = "default_a"')
    b: str = field(
        default="default", doc="Config.b should be a string", serde='default = "default_b"'
    )
    c: int = field(default=0, doc="Config.c should be a number", serde="default")
    d: str = field(default="", doc="Config.d should be a string", serde="default")
    e: Optional[int] = field(default=None, serde="default")


@record
class ExampleDefaults:
    a: int = field(default=0, doc="Config.a should be a number", toml_example="default = 7")
    b: str = field(
        default="",
        doc="Config.b should be a string",
        toml_example='default = "default"',
        serde='default = "default_str"',
    )
    c: str = field(default="", serde='default = "default_str"', toml_example='default = "default"')


@record
class Inner:
    """Inner is a config live in Outer"""

    a: int = field(default=0, doc="Inner.a should be a number")


@record
class NotNested:
    inner: Inner = field(default_factory=Inner, doc="Outer.inner is a complex struct")


@record
class Nested:
    inner: Inner = field(
        default_factory=Inner, doc="Outer.inner is a complex struct", toml_example="nesting"
    )


@record
class NestedBySection:
    inner: Inner = field(
        default_factory=Inner,
        doc="Outer.inner is a complex struct",
        toml_example="nesting = section",
    )


@record
class NestedByPrefix:
    inner: Inner = field(
        default_factory=Inner,
        doc="Outer.inner is a complex struct",
        toml_example="nesting = prefix",
    )


@record
class Service:
    """Service with specific port"""

    port: int = field(default=0, doc="port should be a number")


@record
class VectorNode:
    services: list[Service] = field(
        default_factory=list, doc="Services are running in the node", toml_example="nesting"
    )


@record
class MapNode:
    services: dict[str, Service] = field(
        default_factory=dict, doc="Services are running in the node", toml_example="nesting"
    )


@dataclass
class Leaf:
    a: int = 0


@dataclass
class Middle:
    leaf: Leaf = field(default_factory=Leaf, toml_example="nesting")
    b: int = 0


@dataclass
class Extra:
    x: int = 0


@record
class Top:
    middle: Middle = field(default_factory=Middle, toml_example="nesting")


@record
class Prefixed:
    middle: Middle = field(default_factory=Middle, toml_example="nesting = prefix")
    c: int = 0


@record
class Mixed:
    inner: Leaf = field(default_factory=Leaf, toml_example="nesting")
    a: int = 0


@record
class Flattened:
    inner: Leaf = field(default_factory=Leaf, toml_example="nesting")
    extra: Extra = field(default_factory=Extra, toml_example="nesting, flatten")
    a: int = 0


@record
class FlattenedMap:
    services: dict[str, Leaf] = field(
        default_factory=dict, toml_example='nesting, flatten, default = "web"'
    )


@dataclass
class Maybe:
    a: int = 0
    b: Optional[int] = None


@record
class OptionalSection:
    inner: Optional[Maybe] = field(default=None, toml_example="nesting")
    services: Optional[dict[str, Leaf]] = field(default=None, toml_example="nesting")
    items: Optional[list[Leaf]] = field(default=None, toml_example="nesting")
    hosts: Optional[dict[str, Leaf]] = field(default=None, toml_example="nesting, flatten")


@record
class OptionalPrefix:
    inner: Optional[Maybe] = field(default=None, toml_example="nesting = prefix")


@record(serde="default")
class Server:
    host: str = "localhost"
    port: int = 8080
    tags: list[str] = field(default_factory=lambda: ["a", "b"])
    timeout: Optional[float] = None


@record
class Logging:
    level: Level = field(default=Level.INFO, toml_example="enum", serde='default = "default_level"')
    mode: Mode = field(default=Mode.FAST, serde='default = "default_mode"')
    count: int = field(default=3, toml_example="is_enum", serde='default = "default_count"')


@record(serde='rename_all = "kebab-case"')
class Renamed:
    listen_port: int = 0
    class_: str = ""
    spaced: int = field(default=0, serde='rename = "listen port"')


@record
class Loop:
    child: Optional["Loop"] = field(default=None, toml_example="nesting")


@record
class Ping:
    pong: Optional["Pong"] = field(default=None, toml_example="nesting = prefix")


@record
class Pong:
    ping: Optional[Ping] = field(default=None, toml_example="nesting")


class Handwritten:
    @classmethod
    def toml_example(cls) -> str:
        return cls.toml_example_with_prefix("", "")

    @classmethod
    def toml_example_with_prefix(cls, label, prefix, *, section="", deferred=None):
        return f"{label}{prefix}custom = true\n\n"

    @classmethod
    def to_toml_example(cls, file_name):
        raise NotImplementedError


@record
class UsesHandwritten:
    hand: Handwritten = field(default=None, toml_example="nesting")


class EntryPointOnly:
    @classmethod
    def toml_example_with_prefix(cls, label, prefix, *, section="", deferred=None):
        return f"{label}{prefix}entry = 1\n\n"


@record
class UsesEntryPointOnly:
    entry: EntryPointOnly = field(default=None, toml_example="nesting")
    entries: list[EntryPointOnly] = field(default_factory=list, toml_example="nesting")


# --- Scalars and lists ---


def test_two_scalar_fields():
    @dataclass
    class Config:
        a: int = 0
        b: str = ""

    assert render(Config) == 'a = 0\n\nb = ""\n\n'


def test_basic():
    expected = (
        "# Config.a should be a number\n"
        "a = 0\n"
        "\n"
        "# Config.b should be a string\n"
        'b = ""\n'
        "\n"
    )
    assert Basic.toml_example() == expected
    assert load_example(Basic, expected) == Basic()


def test_optional_fields_are_commented_out():
    assert Optionals.toml_example() == (
        "# Config.a is an optional number\n"
        "# a = 0\n"
        "\n"
        "# Config.b is an optional string\n"
        '# b = ""\n'
        "\n"
    )
    assert load_example(Optionals, Optionals.toml_example()) == Optionals()


def test_lists():
    text = Lists.toml_example()
    assert text == (
        "# Config.a is a list of number\n"
        "a = [ 0, ]\n"
        "\n"
        "# Config.b is a list of string\n"
        'b = [ "", ]\n'
        "\n"
        "# Config.c\n"
        "c = [ 0, ]\n"
        "\n"
        "# Config.d\n"
        "# d = [ 0, ]\n"
        "\n"
    )
    tomlkit.parse(text)


def test_record_docs_come_first():
    assert Documented.toml_example() == (
        "# Config is to arrange something or change the controls on a computer or other device\n"
        "# so that it can be used in a particular way\n"
        "# Config.a should be a number\n"
        "# the number should be greater or equal zero\n"
        "a = 0\n"
        "\n"
    )


def test_serde_default_functions():
    assert SerdeDefaults.toml_example() == (
        "# Config.a should be a number\n"
        "a = 7\n"
        "\n"
        "# Config.b should be a string\n"
        'b = "default"\n'
        "\n"
        "# Config.c should be a number\n"
        "c = 0\n"
        "\n"
        "# Config.d should be a string\n"
        'd = ""\n'
        "\n"
        "# e = 0\n"
        "\n"
    )


def test_literal_default_beats_default_function():
    assert ExampleDefaults.toml_example() == (
        "# Config.a should be a number\n"
        "a = 7\n"
        "\n"
        "# Config.b should be a string\n"
        'b = "default"\n'
        "\n"
        'c = "default"\n'
        "\n"
    )


def test_require_removes_comment_marker():
    @dataclass
    class Config:
        a: Optional[int] = field(default=None, toml_example="require")

    assert render(Config) == "a = 0\n\n"


def test_list_literal_default_is_verbatim():
    @dataclass
    class Config:
        a: list[str] = field(default_factory=list, toml_example='default = ["x", "y,z"]')

    assert render(Config) == 'a = ["x", "y,z"]\n\n'


# --- Nesting ---


def test_record_without_nesting_is_a_leaf():
    assert NotNested.toml_example() == '# Outer.inner is a complex struct\ninner = ""\n\n'


@pytest.mark.parametrize("record_type", [Nested, NestedBySection])
def test_section_nesting(record_type):
    text = record_type.toml_example()
    assert text == (
        "# Outer.inner is a complex struct\n"
        "# Inner is a config live in Outer\n"
        "[inner]\n"
        "# Inner.a should be a number\n"
        "a = 0\n"
        "\n"
    )
    assert load_example(record_type, text) == record_type()


def test_prefix_nesting():
    text = NestedByPrefix.toml_example()
    assert text == (
        "# Outer.inner is a complex struct\n"
        "# Inner is a config live in Outer\n"
        "# Inner.a should be a number\n"
        "inner.a = 0\n"
        "\n"
    )
    assert load_example(NestedByPrefix, text) == NestedByPrefix()


def test_vector_nesting():
    text = VectorNode.toml_example()
    assert text == (
        "# Services are running in the node\n"
        "# Service with specific port\n"
        "[[services]]\n"
        "# port should be a number\n"
        "port = 0\n"
        "\n"
    )
    assert load_example(VectorNode, text) == VectorNode(services=[Service()])


def test_map_nesting():
    text = MapNode.toml_example()
    assert text == (
        "# Services are running in the node\n"
        "# Service with specific port\n"
        "[services.example]\n"
        "# port should be a number\n"
        "port = 0\n"
        "\n"
    )
    assert load_example(MapNode, text) == MapNode(services={"example": Service()})


def test_map_nesting_without_docs():
    @dataclass
    class Node:
        services: dict[str, Leaf] = field(default_factory=dict, toml_example="nesting")

    assert render(Node) == "[services.example]\na = 0\n\n"


def test_map_key_from_literal_default():
    @dataclass
    class Node:
        services: dict[str, Leaf] = field(
            default_factory=dict, toml_example='nesting, default = "my service.v1"'
        )

    assert render(Node) == "[services.myservice-v1]\na = 0\n\n"


def test_nested_sections_are_qualified():
    text = render(Top)
    assert text == "[middle]\nb = 0\n\n[middle.leaf]\na = 0\n\n"
    assert load_example(Top, text) == Top()


def test_prefix_child_sections_follow_parent_keys():
    text = render(Prefixed)
    assert text == "middle.b = 0\n\nc = 0\n\n[middle.leaf]\na = 0\n\n"


def test_inline_fields_precede_sections():
    text = render(Mixed)
    assert text == "a = 0\n\n[inner]\na = 0\n\n"
    assert load_example(Mixed, text) == Mixed()


def test_flattened_record_is_spliced_before_sections():
    text = render(Flattened)
    assert text == "a = 0\n\nx = 0\n\n[inner]\na = 0\n\n"
    assert tomlkit.parse(text).unwrap() == {"a": 0, "x": 0, "inner": {"a": 0}}


def test_flattened_map_uses_only_the_key():
    assert render(FlattenedMap) == "[web]\na = 0\n\n"


def test_optional_section_comments_every_line():
    text = render(OptionalSection)
    assert text == (
        "# [inner]\n"
        "# a = 0\n"
        "\n"
        "# # b = 0\n"
        "\n"
        "# [services.example]\n"
        "# a = 0\n"
        "\n"
        "# [[items]]\n"
        "# a = 0\n"
        "\n"
        "# [example]\n"
        "# a = 0\n"
        "\n"
    )
    assert all(line.startswith("# ") for line in text.splitlines() if line)
    assert tomlkit.parse(text).unwrap() == {}


def test_optional_prefix_comments_every_line():
    assert render(OptionalPrefix) == "# inner.a = 0\n\n# # inner.b = 0\n\n"


def test_renderable_interface_is_used_for_nested_records():
    assert render(UsesHandwritten) == "[hand]\ncustom = true\n\n"


def test_entry_point_alone_is_enough_for_nesting():
    assert render(UsesEntryPointOnly) == "[entry]\nentry = 1\n\n[[entries]]\nentry = 1\n\n"


# --- Default values ---


def test_record_default_is_inherited():
    text = render(Server)
    assert 'host = "localhost"\n\n' in text
    assert "port = 8080\n\n" in text
    assert '# timeout = ""\n\n' in text
    assert load_example(Server, text) == Server()


def test_enum_defaults_are_quoted():
    assert render(Logging) == 'level = "info"\n\nmode = "FAST"\n\ncount = "3"\n\n'


def test_type_default_of_record_leaf_is_inline_table():
    @dataclass
    class Config:
        inner: Leaf = field(default_factory=Leaf, serde="default")

    assert tomlkit.parse(render(Config)).unwrap() == {"inner": {"a": 0}}


def test_keys_are_renamed_and_quoted():
    assert render(Renamed) == 'listen-port = 0\n\nclass = ""\n\n"listen port" = 0\n\n'


def test_rendering_is_idempotent():
    assert render(OptionalSection) == render(OptionalSection)
    assert render(Server) == render(Server)


# --- Errors ---


def test_unknown_directive_aborts():
    @dataclass
    class Config:
        a: int = field(default=0, toml_example="requried")

    with pytest.raises(UnsupportedDirectiveError, match="requried"):
        render(Config)


def test_nesting_on_scalar_aborts():
    @dataclass
    class Config:
        a: int = field(default=0, toml_example="nesting = prefix")

    with pytest.raises(NestingError):
        render(Config)


def test_flatten_vector_aborts():
    @dataclass
    class Config:
        items: list[Leaf] = field(default_factory=list, toml_example="nesting, flatten")

    with pytest.raises(FlattenError):
        render(Config)


@pytest.mark.parametrize("record_type", [Loop, Ping, Pong])
def test_cyclic_nesting_fails_fast(record_type):
    with pytest.raises(CyclicNestingError, match="cyclic nesting"):
        render(record_type)


# --- Helpers ---


def test_split_prefix():
    assert split_prefix("# # outer.inner.") == ("# # ", "outer.inner.")
    assert split_prefix("outer.") == ("", "outer.")


def test_format_key():
    assert format_key("listen-port") == "listen-port"
    assert format_key("listen port") == '"listen port"'
    assert format_key("a.b") == '"a.b"'


def test_format_value_scalars():
    assert format_value(7) == "7"
    assert format_value(True) == "true"
    assert format_value("x") == '"x"'
    assert format_value('a"b') == '"a\\"b"'
    assert format_value(None) == '""'
    assert format_value(Level.DEBUG) == '"debug"'
    assert format_value(3, is_enum=True) == '"3"'


def test_format_value_collections():
    def parsed(value):
        return tomlkit.parse(f"x = {format_value(value)}").unwrap()["x"]

    assert parsed([1, 2]) == [1, 2]
    assert parsed({"b", "a"}) == ["a", "b"]
    assert parsed({"a": 1, "skip": None}) == {"a": 1}
    assert parsed(Leaf(a=2)) == {"a": 2}
