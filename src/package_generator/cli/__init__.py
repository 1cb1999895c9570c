"""CLI entry point. Registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="package-generator",
    help="Package Generator - validate a module graph and scaffold its Swift packages",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Package Generator[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Validate a module dependency graph and generate its packages."""


# Import subcommands to register them
from .validate import validate as _validate  # noqa: F401, E402
from .generate import generate as _generate  # noqa: F401, E402
from .deps import deps as _deps  # noqa: F401, E402
from .graph import graph as _graph  # noqa: F401, E402
