from __future__ import annotations

from pathlib import Path

from ..constants import BOOLEAN_FALSE_VALUES, BOOLEAN_TRUE_VALUES

__all__ = [
    "normalize_bool",
    "normalize_path",
    "normalize_target",
]


def normalize_bool(value: bool | str) -> bool:
    """Normalize a boolean or boolean-like string.

    Args:
        value (bool | str): TOML boolean or user provided string (e.g. 'yes', '0').

    Raises:
        ValueError: If the value is not recognized.

    Returns:
        bool: Parsed boolean value.
    """
    if isinstance(value, bool):
        return value

    bool_str = str(value).strip().lower()
    if bool_str in BOOLEAN_TRUE_VALUES:
        return True
    if bool_str in BOOLEAN_FALSE_VALUES:
        return False

    raise ValueError(
        f"Invalid boolean value '{value}'. Expected one of: "
        + ", ".join(sorted(BOOLEAN_TRUE_VALUES | BOOLEAN_FALSE_VALUES))
    )


def normalize_path(path_str: str) -> str:
    """Normalize a path to a POSIX-style string.

    Args:
        path_str (str): Input path (relative or absolute).

    Raises:
        ValueError: If the path is empty.

    Returns:
        str: Path with forward slashes, relative paths kept relative.
    """
    if not str(path_str).strip():
        raise ValueError("Path can't be empty.")
    return Path(str(path_str).strip()).as_posix()


def normalize_target(target: str) -> str:
    """Normalize a record target of the form 'module:Qualname[=path]'.

    Args:
        target (str): Raw target.

    Raises:
        ValueError: If module or qualified name is missing.

    Returns:
        str: Target with surrounding whitespace removed around each part.
    """
    spec, sep, output = str(target).partition("=")
    module, colon, qualname = spec.strip().partition(":")
    module, qualname = module.strip(), qualname.strip()

    if not colon or not module or not qualname:
        raise ValueError(
            f"Invalid target '{target}'. Use 'package.module:Record' "
            "or 'package.module:Record=output.toml'."
        )

    normalized = f"{module}:{qualname}"
    if sep:
        normalized += f"={normalize_path(output)}"
    return normalized
