from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal

from .normalizers import normalize_bool, normalize_path, normalize_target

__all__ = ["REGISTRY", "SettingSpec"]


@dataclass
class SettingSpec:
    key: str
    kind: Literal["scalar", "list"]
    value_type: type
    normalize: Callable[[Any], Any]
    default: Any
    help: str = ""


REGISTRY: dict[str, SettingSpec] = {
    "targets": SettingSpec(
        key="targets",
        kind="list",
        value_type=str,
        normalize=normalize_target,
        default=[],
        help=(
            "Records to generate examples for, as 'package.module:Record' or "
            "'package.module:Record=path/to/output.toml'."
        ),
    ),
    "output_dir": SettingSpec(
        key="output_dir",
        kind="scalar",
        value_type=str,
        normalize=normalize_path,
        default=".",
        help="Directory that relative output paths are resolved against.",
    ),
    "app_dir": SettingSpec(
        key="app_dir",
        kind="scalar",
        value_type=str,
        normalize=normalize_path,
        default=".",
        help="Directory prepended to the import path when loading targets.",
    ),
    "check": SettingSpec(
        key="check",
        kind="scalar",
        value_type=bool,
        normalize=normalize_bool,
        default=True,
        help="If true, parse every generated document before writing it.",
    ),
}
