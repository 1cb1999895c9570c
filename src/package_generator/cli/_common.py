"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import PROJECT_CONFIG_NAME, PackageConfiguration
from ..examples import example_configuration, example_graph
from ..exceptions import PackageGeneratorError
from ..models import ModuleNode
from ..registry import load_graph

console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help=f"Graph definition file (TOML, default: ./{PROJECT_CONFIG_NAME})",
    exists=True,
    file_okay=True,
    dir_okay=False,
)
EXAMPLE_OPTION = typer.Option(
    False,
    "--example",
    help="Use the bundled example graph",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Only log errors")


def resolve_graph(
    config: Optional[Path] = None, example: bool = False
) -> tuple[PackageConfiguration, list[ModuleNode]]:
    """Pick the graph source from CLI options.

    Raises:
        PackageGeneratorError: If no graph definition can be found
    """
    if example:
        return example_configuration(), example_graph()

    if config is None:
        config = Path.cwd() / PROJECT_CONFIG_NAME
        if not config.exists():
            raise PackageGeneratorError(
                f"No graph definition: pass --config, --example or create ./{PROJECT_CONFIG_NAME}"
            )
    return load_graph(config)


def fail(error: PackageGeneratorError) -> None:
    """Print a known error and exit with status 1."""
    console.print(f"[red]Error:[/red] {error}", markup=True, highlight=False)
    raise typer.Exit(1)
