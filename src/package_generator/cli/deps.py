"""Resolved dependency inspection command."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import PackageGeneratorError
from ..logging_config import setup_logging
from ..models import ModuleTarget
from ..registry import find_node
from . import app
from ._common import CONFIG_OPTION, EXAMPLE_OPTION, VERBOSE_OPTION, console, fail, resolve_graph


def _source(node, target, dependency, configuration) -> str:
    if dependency in node.global_dependencies_for(target, configuration):
        return "global"
    if dependency in node.module.default_dependencies.get(target, ()):
        return "default"
    return "explicit"


@app.command()
def deps(
    module: str = typer.Argument(..., help="Module name"),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Only this target (main, interface, views, implementation or a custom name)",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    example: bool = EXAMPLE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Show the resolved dependencies of a module, in resolution order.

    [bold cyan]Examples:[/bold cyan]

      package-generator deps ScreenA --example

      package-generator deps ScreenA --target views --config modules.toml
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    try:
        configuration, graph = resolve_graph(config, example)
    except PackageGeneratorError as e:
        fail(e)

    node = find_node(graph, module)
    if node is None:
        console.print(f"[red]Error:[/red] no module named '{module}' in the graph")
        raise typer.Exit(1)

    targets = [ModuleTarget.parse(target)] if target else list(node.module.targets)

    table = Table(title=f"{module} dependencies")
    table.add_column("Target", style="cyan")
    table.add_column("Dependency")
    table.add_column("Package")
    table.add_column("Source", style="dim")

    for own_target in targets:
        for dependency in node.dependencies_for(own_target, configuration):
            table.add_row(
                node.module.target_name(own_target),
                dependency.target_name,
                dependency.module_name,
                _source(node, own_target, dependency, configuration),
            )

    console.print(table)
