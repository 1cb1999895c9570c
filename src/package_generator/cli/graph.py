"""DOT graph command."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import PackageGeneratorError
from ..logging_config import setup_logging
from ..render import GraphRenderer
from . import app
from ._common import CONFIG_OPTION, EXAMPLE_OPTION, console, fail, resolve_graph


@app.command()
def graph(
    module_level: bool = typer.Option(
        False,
        "--module-level",
        "-m",
        help="One vertex per module instead of per target",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write DOT to this file instead of stdout",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    example: bool = EXAMPLE_OPTION,
):
    """
    Render the dependency graph in Graphviz DOT format.

    [bold cyan]Examples:[/bold cyan]

      package-generator graph --example | dot -Tsvg -o graph.svg

      package-generator graph --module-level -o modules.dot
    """
    setup_logging(quiet=True)

    try:
        configuration, nodes = resolve_graph(config, example)
    except PackageGeneratorError as e:
        fail(e)

    renderer = GraphRenderer(nodes, configuration)
    dot = renderer.render_module_level_dot() if module_level else renderer.render_dot()

    if output is not None:
        output.write_text(dot, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
    else:
        print(dot, end="")
