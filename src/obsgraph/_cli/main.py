import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from obsgraph._errors import ConfigError, CycleError, GraphFileError
from obsgraph._graph import DependencyGraph
from obsgraph._io import export_plan, load_graph
from obsgraph._linearize import linearize

from .config import get_config
from .graph_render import render_plan_table, render_source_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Obsgraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _resolve_graph_path(path: Path | None) -> Path:
    """Use the given path or fall back to [tool.obsgraph].graph."""
    if path is not None:
        return path

    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if config.graph is None:
        err_console.print("[red]Error: No graph file given and no \\[tool.obsgraph].graph configured[/red]")
        raise typer.Exit(code=1)
    return config.graph


def _load(path: Path | None) -> DependencyGraph[Any]:
    graph_path = _resolve_graph_path(path)
    err_console.print(f"[cyan]Loading graph from:[/cyan] {graph_path}")
    try:
        return load_graph(graph_path)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


GraphArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a .toml or .json graph (defaults to the graph configured in pyproject.toml)"),
]


@app.command()
def check(graph_path: GraphArgument = None) -> None:
    """Check that a graph description is valid and acyclic."""
    err_console.print()
    graph = _load(graph_path)
    err_console.print()

    err_console.print("[cyan]Validating graph...[/cyan]")
    errors = graph.validate()

    table = Table(show_header=False, box=None)
    table.add_column("Item", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Nodes", str(len(graph)))
    table.add_row("Edges", str(len(graph.edges)))
    table.add_row("Roots", str(len(graph.roots())))
    table.add_row("Leaves", str(len(graph.leaves())))
    err_console.print(Panel(table, title="[bold]Graph[/bold]", border_style="cyan"))
    err_console.print()

    if errors:
        for error in errors:
            err_console.print(f"[red]✗ {escape(error)}[/red]")
        err_console.print()
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Graph is valid[/green]")
    err_console.print()


@app.command()
def order(
    graph_path: GraphArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option(
            "-o",
            "--output",
            help="Path to output TOML file (defaults to the output configured in pyproject.toml)",
        ),
    ] = None,
) -> None:
    """Print the construction order of a graph and optionally export it."""
    err_console.print()
    graph = _load(graph_path)

    try:
        descriptors = linearize(graph)
    except CycleError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_plan_table(descriptors, out_console)

    if output is None and graph_path is None:
        output = get_config().output

    if output is not None:
        err_console.print(f"[cyan]Exporting plan to:[/cyan] {output}")
        try:
            export_plan(descriptors, output)
        except GraphFileError as e:
            err_console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        err_console.print("[green]✓ Plan exported[/green]")
    err_console.print()


@app.command()
def tree(
    node: Annotated[str, typer.Argument(help="Id of the node whose sources to show")],
    graph_path: GraphArgument = None,
) -> None:
    """Show the sources of a node as a tree, in construction order."""
    graph = _load(graph_path)

    if node not in graph:
        err_console.print(f"[red]Error: Node '{escape(node)}' not found[/red]")
        raise typer.Exit(code=1)

    # Rendering follows edges upstream and would not terminate on a cycle
    if graph.has_cycle():
        err_console.print("[red]✗ Cycle detected in graph[/red]")
        raise typer.Exit(code=1)

    render_source_tree(graph, node, out_console)


def main() -> None:
    app()
