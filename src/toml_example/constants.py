STATUS_SYMBOLS = {
    "ok": "✔",
    "info": "ℹ",
    "warn": "⚠",
    "error": "✘",
}

BOOLEAN_TRUE_VALUES = {"1", "true", "yes", "y", "on", "enable", "enabled"}
BOOLEAN_FALSE_VALUES = {"0", "false", "no", "n", "off", "disable", "disabled"}

# Placeholder key of a map-shaped nested section without a usable literal default
DEFAULT_MAP_KEY = "example"

# Comment marker put in front of every line of an optional field
OPTIONAL_MARKER = "# "

# Metadata key under which `field()` stores raw attributes on dataclass fields
METADATA_KEY = "toml_example"

# Record-level attributes attached by the `record` decorator
RECORD_ATTRIBUTES = "__toml_example_attributes__"

PYPROJECT_FILE = "pyproject.toml"
TOOL_TABLE = "toml-example"
EXAMPLE_SUFFIX = ".example.toml"
