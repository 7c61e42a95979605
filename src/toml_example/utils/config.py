from __future__ import annotations

import importlib
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from ..constants import EXAMPLE_SUFFIX, PYPROJECT_FILE, TOOL_TABLE
from .case import RenameRule
from .console import print_and_raise, print_warn
from .normalizers import normalize_target
from .settings_registry import REGISTRY, SettingSpec

__all__ = [
    "ExampleTarget",
    "Settings",
    "get_config_file",
    "read_config",
]


@dataclass(frozen=True)
class ExampleTarget:
    """A record to generate an example document for.

    Attributes:
        module (str): Importable module name.
        qualname (str): Qualified name of the record inside the module.
        output (Path | None): Explicit output path, None for the default name.
    """

    module: str
    qualname: str
    output: Path | None = None

    @classmethod
    def parse(cls, target: str) -> ExampleTarget:
        """Create a target from 'module:Qualname' or 'module:Qualname=path'.

        Args:
            target (str): Target string.

        Raises:
            ValueError: Malformed target.

        Returns:
            ExampleTarget: Parsed target.
        """
        spec, sep, output = normalize_target(target).partition("=")
        module, _, qualname = spec.partition(":")
        return cls(module, qualname, Path(output) if sep else None)

    def __str__(self) -> str:
        return f"{self.module}:{self.qualname}"

    def load(self, app_dir: Path | None = None) -> type:
        """Import the record.

        Args:
            app_dir (Path | None, optional): Directory to put on the import path
                first. Defaults to None.

        Raises:
            ImportError: Module not importable.
            AttributeError: Record not found in the module.

        Returns:
            type: The record class.
        """
        if app_dir is not None:
            app_path = str(app_dir.resolve())
            if app_path not in sys.path:
                sys.path.insert(0, app_path)
                importlib.invalidate_caches()

        obj: Any = importlib.import_module(self.module)
        for part in self.qualname.split("."):
            obj = getattr(obj, part)
        return obj

    def output_path(self, output_dir: Path) -> Path:
        """Resolve where the example is written.

        Defaults to '<kebab-case record name>.example.toml' in `output_dir`.
        """
        if self.output is None:
            name = self.qualname.rsplit(".", 1)[-1]
            return output_dir / (RenameRule.KEBAB_CASE.apply_to_variant(name) + EXAMPLE_SUFFIX)
        if self.output.is_absolute():
            return self.output
        return output_dir / self.output


@dataclass
class Settings:
    """Resolved `[tool.toml-example]` configuration."""

    targets: list[ExampleTarget] = field(default_factory=list)
    output_dir: Path = Path(".")
    app_dir: Path = Path(".")
    check: bool = True
    source: Path | None = None


def get_config_file(start: Path | None = None) -> Path:
    """Return the project configuration file.

    Args:
        start (Path | None, optional): Project directory. Defaults to the current
            working directory.

    Returns:
        Path: Location of pyproject.toml.
    """
    return (start or Path.cwd()) / PYPROJECT_FILE


def read_config(path: Path | None = None) -> Settings:
    """Load `[tool.toml-example]` from a pyproject.toml.

    Missing keys take their registry default, unknown keys are reported and
    ignored. Relative directories are resolved against the file's directory.

    Args:
        path (Path | None, optional): Configuration file. Defaults to
            pyproject.toml in the current working directory.

    Raises:
        typer.Exit: File missing or unreadable, or an invalid setting.

    Returns:
        Settings: Resolved settings.
    """
    path = path or get_config_file()

    try:
        with open(path, encoding="utf-8") as f:
            document = tomlkit.load(f).unwrap()
    except FileNotFoundError as e:
        print_and_raise(f"Configuration file '{path}' not found.", raise_from=e)
    except TOMLKitError as e:
        print_and_raise(f"Can't parse '{path}': {e}", raise_from=e)

    table = document.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        print_warn(f"No [tool.{TOOL_TABLE}] table in '{path}', using defaults.")
        table = {}

    values = {key: spec.default for key, spec in REGISTRY.items()}
    for key, raw_value in table.items():
        spec = REGISTRY.get(key)
        if spec is None:
            print_warn(f"Unknown setting '{key}' in [tool.{TOOL_TABLE}], ignoring it.")
            continue
        values[key] = _normalize_setting(spec, raw_value)

    base_dir = path.parent
    return Settings(
        targets=[ExampleTarget.parse(target) for target in values["targets"]],
        output_dir=base_dir / values["output_dir"],
        app_dir=base_dir / values["app_dir"],
        check=values["check"],
        source=path,
    )


def _normalize_setting(spec: SettingSpec, raw_value: Any) -> Any:
    try:
        if spec.kind == "list":
            if not isinstance(raw_value, list):
                raise ValueError(f"expected a list, got {raw_value!r}")
            normalized = [spec.normalize(item) for item in raw_value]
            invalid = [v for v in normalized if not isinstance(v, spec.value_type)]
        else:
            if isinstance(raw_value, (list, dict)):
                raise ValueError(f"expected a single value, got {raw_value!r}")
            normalized = spec.normalize(raw_value)
            invalid = [] if isinstance(normalized, spec.value_type) else [normalized]

        if invalid:
            raise ValueError(f"expected {spec.value_type.__name__} values, got {invalid!r}")
    except ValueError as e:
        print_and_raise(f"Invalid setting '{spec.key}': {e}", raise_from=e)

    return normalized
