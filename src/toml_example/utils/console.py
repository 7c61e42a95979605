from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

from ..constants import STATUS_SYMBOLS

__all__ = [
    "console",
    "print_and_raise",
    "print_error",
    "print_info",
    "print_ok",
    "print_warn",
]

console = Console()


def print_ok(msg: str):
    """Print a success message.

    Args:
        msg (str): Message to print.
    """
    console.print(f"{STATUS_SYMBOLS['ok']}  {msg}", style="green", markup=False)


def print_info(msg: str):
    """Print an informational message.

    Args:
        msg (str): Message to print.
    """
    console.print(f"{STATUS_SYMBOLS['info']}  {msg}", style="blue", markup=False)


def print_warn(msg: str):
    """Print a warning.

    Args:
        msg (str): Message to print.
    """
    console.print(f"{STATUS_SYMBOLS['warn']}  {msg}", style="yellow", markup=False)


def print_error(msg: str):
    """Print an error message without exiting.

    Args:
        msg (str): Message to print.
    """
    console.print(f"{STATUS_SYMBOLS['error']}  {msg}", style="red", markup=False)


def print_and_raise(msg: str, raise_from: Exception | None = None) -> NoReturn:
    """Print an error message and exit with status 1.

    Args:
        msg (str): Error message.
        raise_from (Exception | None, optional): Exception to chain the exit from.
            Defaults to None.

    Raises:
        typer.Exit: Always, with exit code 1.
    """
    print_error(msg)
    raise typer.Exit(1) from raise_from
