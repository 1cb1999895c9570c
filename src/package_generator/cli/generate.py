"""Package generation command."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import PackageGeneratorError
from ..generator import PackageGenerator
from ..logging_config import setup_logging
from . import app
from ._common import CONFIG_OPTION, EXAMPLE_OPTION, QUIET_OPTION, VERBOSE_OPTION, console, fail, resolve_graph

logger = logging.getLogger(__name__)


@app.command()
def generate(
    output: Path = typer.Argument(
        Path("GeneratedPackages"),
        help="Directory to write packages into",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = CONFIG_OPTION,
    example: bool = EXAMPLE_OPTION,
    graphs: bool = typer.Option(
        True,
        "--graphs/--no-graphs",
        help="Also write DOT dependency graphs",
    ),
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Validate the graph, then write one package per module.

    Package.swift files are always regenerated. Sources, support files and
    tests are only scaffolded for modules whose directory does not exist.

    [bold cyan]Examples:[/bold cyan]

      package-generator generate ./Packages --config modules.toml

      package-generator generate --example --no-graphs
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        configuration, graph = resolve_graph(config, example)
        generator = PackageGenerator(graph, configuration, output)
        result = generator.generate()
        if graphs:
            generator.generate_graphs()
    except PackageGeneratorError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        fail(e)

    if not quiet:
        console.print()
        console.print(
            f"[bold green]Generated {len(graph)} packages[/bold green] in {output} "
            f"({len(result.scaffolded_modules)} newly scaffolded)"
        )
        if graphs:
            console.print("To render graphs, run:")
            for name in ("dependency-graph-detailed", "dependency-graph-modules"):
                console.print(f"  dot -Tsvg {output / name}.dot -o {output / name}.svg", highlight=False)
