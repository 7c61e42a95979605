from __future__ import annotations

import dataclasses
import sys
import types
import typing
from pathlib import Path

import pytest
import tomlkit

# --- Fixtures for test isolation ---


@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """Run the test inside an empty temporary project directory.

    Also restores `sys.path` and drops modules imported from the project so
    targets written by one test never leak into another.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "path", list(sys.path))
    modules_before = set(sys.modules)
    yield tmp_path
    for name in set(sys.modules) - modules_before:
        module_file = getattr(sys.modules[name], "__file__", None) or ""
        if module_file.startswith(str(tmp_path)):
            del sys.modules[name]


@pytest.fixture
def write_module(project_dir):
    """Return a helper that writes a Python module into the project directory."""

    def write(name: str, source: str) -> Path:
        path = project_dir / f"{name}.py"
        path.write_text(source, encoding="utf-8")
        return path

    return write


# --- Round-trip helpers ---


def load_example(record_type: type, text: str):
    """Parse an example document and build an instance of `record_type` from it."""
    return build_record(record_type, tomlkit.parse(text).unwrap())


def build_record(record_type: type, data: dict):
    hints = typing.get_type_hints(record_type)
    kwargs = {
        f.name: _convert(hints[f.name], data[f.name])
        for f in dataclasses.fields(record_type)
        if f.name in data
    }
    return record_type(**kwargs)


def _convert(annotation, value):
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin in (typing.Union, types.UnionType):
        inner = [arg for arg in args if arg is not type(None)]
        return _convert(inner[0], value)
    if origin is list:
        return [_convert(args[0], item) for item in value]
    if origin is dict:
        return {key: _convert(args[1], item) for key, item in value.items()}
    if dataclasses.is_dataclass(annotation):
        return build_record(annotation, value)
    return value
