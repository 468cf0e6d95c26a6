"""Linearization of a dependency graph into a construction plan."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from obsgraph._graph import DependencyGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NodeDescriptor[C]:
    """One step of a construction plan.

    Attributes:
        id: The node id.
        config: The node's configuration, passed through untouched.
        sources: Ids of the node's direct dependencies, ordered by the
            ordering value of the connecting edge.

    """

    id: str
    config: C
    sources: tuple[str, ...] = ()


def edge_index(value: Any) -> float:
    """Get the sort key of an edge value.

    Real numbers sort by value. Anything else (None, strings, booleans, NaN)
    sorts after every number.

    Example:
        >>> edge_index(2)
        2
        >>> edge_index(None)
        inf

    """
    if isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value):
        return value
    return math.inf


def linearize[C](graph: DependencyGraph[C]) -> list[NodeDescriptor[C]]:
    """Order the graph's nodes for construction.

    Nodes are emitted in the graph's topological order. The sources of each
    node are sorted by ``edge_index`` of their edge; the sort is stable, so
    edges with equal keys keep the order in which they were added.

    Args:
        graph: The graph to linearize. It is not modified.

    Returns:
        One NodeDescriptor per node, each after all of its sources.

    Raises:
        CycleError: If the graph contains a cycle.

    """
    order = graph.topological_order()

    descriptors: list[NodeDescriptor[C]] = []
    for node_id in order:
        in_edges = sorted(graph.in_edges(node_id), key=lambda edge: edge_index(edge.value))
        descriptors.append(
            NodeDescriptor(
                id=node_id,
                config=graph.node(node_id),
                sources=tuple(edge.source for edge in in_edges),
            ),
        )

    logger.debug("Linearized %d nodes", len(descriptors))
    return descriptors
