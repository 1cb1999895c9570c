"""Graph validation command."""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import PackageGeneratorError
from ..logging_config import setup_logging
from ..validation import validate_graph
from . import app
from ._common import CONFIG_OPTION, EXAMPLE_OPTION, QUIET_OPTION, VERBOSE_OPTION, console, fail, resolve_graph

logger = logging.getLogger(__name__)


@app.command()
def validate(
    config: Optional[Path] = CONFIG_OPTION,
    example: bool = EXAMPLE_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Check that the module graph is well-formed.

    Runs, in order: module existence, export backing, target validity and
    cycle detection. Stops at the first problem.

    [bold cyan]Examples:[/bold cyan]

      package-generator validate --config modules.toml

      package-generator validate --example
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        configuration, graph = resolve_graph(config, example)
        validate_graph(graph, configuration)
    except PackageGeneratorError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        fail(e)

    console.print(f"[bold green]Graph validation passed[/bold green] ({len(graph)} modules)")
