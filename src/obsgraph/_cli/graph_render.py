"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from obsgraph._linearize import edge_index

if TYPE_CHECKING:
    from rich.console import Console

    from obsgraph._graph import DependencyGraph
    from obsgraph._linearize import NodeDescriptor


def render_plan_table(descriptors: list[NodeDescriptor[Any]], console: Console) -> None:
    """Render a construction plan as a Rich table.

    Args:
        descriptors: Linearized node descriptors to render.
        console: Rich Console to output to.

    """
    if not descriptors:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("Sources")

    for position, descriptor in enumerate(descriptors, start=1):
        sources = ", ".join(escape(s) for s in descriptor.sources) or "[dim]-[/dim]"
        table.add_row(str(position), escape(descriptor.id), sources)

    console.print(table)
    console.print(f"\n[dim]Total: {len(descriptors)} nodes[/dim]")


def render_source_tree(graph: DependencyGraph[Any], node: str, console: Console) -> None:
    """Render the sources of a node recursively, in construction order.

    Args:
        graph: The graph containing the node.
        node: Id of the node at the root of the tree.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(node)}[/bold]")
    _add_sources(rich_tree, graph, node)
    console.print(rich_tree)


def _add_sources(parent: Tree, graph: DependencyGraph[Any], node: str) -> None:
    for edge in sorted(graph.in_edges(node), key=lambda e: edge_index(e.value)):
        label = escape(edge.source)
        if edge.value is not None:
            label += f" [dim](index {escape(str(edge.value))})[/dim]"
        _add_sources(parent.add(label), graph, edge.source)
