from pathlib import Path

import tomlkit
import typer
from rich.syntax import Syntax

from .utils.config import get_config_file, read_config
from .utils.console import console
from .utils.settings_registry import REGISTRY

app_config = typer.Typer(help="Show toml-example configuration.")


@app_config.command()
def file():
    "Print the configuration file location."
    print(get_config_file())


@app_config.command(name="list")
def list_config(
    config: Path = typer.Option(
        None, "--config", "-c", help="Configuration file. Defaults to ./pyproject.toml."
    ),
):
    "List the resolved configuration, each setting preceded by its description."
    settings = read_config(config)
    values = {
        "targets": [str(target) for target in settings.targets],
        "output_dir": settings.output_dir.as_posix(),
        "app_dir": settings.app_dir.as_posix(),
        "check": settings.check,
    }

    document = tomlkit.document()
    for key, spec in REGISTRY.items():
        if spec.help:
            document.add(tomlkit.comment(spec.help))
        document.add(key, values[key])

    console.print(f"Configuration file: {settings.source}\n", style="dim")
    console.print(
        Syntax(
            code=tomlkit.dumps(document),
            lexer="toml",
            line_numbers=True,
            word_wrap=True,
        )
    )
