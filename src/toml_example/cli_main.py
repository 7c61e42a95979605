from pathlib import Path

import tomlkit
import typer
from rich.syntax import Syntax
from tomlkit.exceptions import TOMLKitError

from .cli_config import app_config
from .utils.config import ExampleTarget, Settings, read_config
from .utils.console import console, print_and_raise, print_ok, print_warn
from .utils.errors import ExampleConfigError
from .utils.example import persist, render
from .version import __version__

app = typer.Typer(help="Render commented TOML example documents from dataclass schemas.")
app.add_typer(app_config, name="config")

_TARGET_HELP = "Record to render, as 'package.module:Record'."
_APP_DIR_HELP = "Directory prepended to the import path before loading the record."


@app.command(name="render")
def render_command(
    target: str = typer.Argument(..., help=_TARGET_HELP),
    output: Path = typer.Option(
        None, "--output", "-o", help="Write the example to this file instead of stdout."
    ),
    pretty: bool = typer.Option(
        False, "--pretty", "-p", help="Syntax highlight the example."
    ),
    app_dir: Path = typer.Option(Path("."), "--app-dir", help=_APP_DIR_HELP),
):
    """Render the example document of a record."""
    record_type = load_record(target, app_dir)

    if output is not None:
        write_example(record_type, output)
        print_ok(f"Wrote example of {target} to '{output}'.")
        return

    text = render_example(record_type)
    if pretty:
        console.print(Syntax(code=text, lexer="toml", line_numbers=True))
    else:
        # Plain print so the output can be redirected verbatim
        print(text, end="")


@app.command()
def check(
    target: str = typer.Argument(..., help=_TARGET_HELP),
    app_dir: Path = typer.Option(Path("."), "--app-dir", help=_APP_DIR_HELP),
):
    """Check that the example document of a record is valid TOML."""
    check_example(target, render_example(load_record(target, app_dir)))
    print_ok(f"Example of {target} is valid TOML.")


@app.command()
def generate(
    config: Path = typer.Option(
        None, "--config", "-c", help="Configuration file. Defaults to ./pyproject.toml."
    ),
):
    """Write the examples of all configured targets."""
    settings = read_config(config)

    if not settings.targets:
        print_warn("No targets configured, nothing to generate.")
        raise typer.Exit()

    for example_target in settings.targets:
        generate_target(example_target, settings)


@app.command()
def version():
    "Print version."
    console.print(__version__)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """Show help when no command is provided."""
    if ctx.invoked_subcommand is None:
        console.print("")
        console.print(f" Version: {__version__}", style="bright_yellow")
        console.print(ctx.get_help())
        raise typer.Exit()


def load_record(target: str | ExampleTarget, app_dir: Path | None = None) -> type:
    """Import the record a target refers to.

    Args:
        target (str | ExampleTarget): 'package.module:Record' or a parsed target.
        app_dir (Path | None, optional): Directory put on the import path first.

    Raises:
        typer.Exit: Malformed target or record not importable.

    Returns:
        type: The record class.
    """
    try:
        if isinstance(target, str):
            target = ExampleTarget.parse(target)
        record_type = target.load(app_dir)
    except ValueError as e:
        print_and_raise(str(e), raise_from=e)
    except (ImportError, AttributeError) as e:
        print_and_raise(f"Can't load '{target}': {e}", raise_from=e)

    if not isinstance(record_type, type):
        print_and_raise(f"'{target}' is not a class.")

    return record_type


def render_example(record_type: type) -> str:
    """Render a record, converting schema errors into an error exit."""
    try:
        return render(record_type)
    except (ExampleConfigError, TypeError) as e:
        print_and_raise(f"Can't render {record_type.__name__}: {e}", raise_from=e)


def write_example(record_type: type, path: Path):
    """Persist a record's example, converting failures into an error exit."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        persist(record_type, path)
    except (ExampleConfigError, TypeError) as e:
        print_and_raise(f"Can't render {record_type.__name__}: {e}", raise_from=e)
    except OSError as e:
        print_and_raise(f"Can't write '{path}': {e}", raise_from=e)


def check_example(name: str, text: str):
    """Parse a rendered example with tomlkit.

    Raises:
        typer.Exit: The example is not valid TOML.
    """
    try:
        tomlkit.parse(text)
    except TOMLKitError as e:
        print_and_raise(f"Example of {name} is not valid TOML: {e}", raise_from=e)


def generate_target(example_target: ExampleTarget, settings: Settings):
    """Render one configured target and write it to its output path."""
    record_type = load_record(example_target, settings.app_dir)
    path = example_target.output_path(settings.output_dir)

    if settings.check:
        check_example(str(example_target), render_example(record_type))

    write_example(record_type, path)
    print_ok(f"{example_target} -> {path}")
