"""Generic dependency graph abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from obsgraph._errors import CycleError

from ._algorithms import topological_sort

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class Edge:
    """A dependency from ``source`` to ``target``.

    ``value`` is an optional ordering hint used to order the sources of
    ``target``. It is carried as-is; interpreting it is up to the consumer.
    """

    source: str
    target: str
    value: Any = None


def _as_edge(item: Edge | tuple[str, str] | tuple[str, str, Any]) -> Edge:
    if isinstance(item, Edge):
        return item
    return Edge(*item)


@dataclass(frozen=True, slots=True)
class DependencyGraph[C]:
    """A directed acyclic graph of configured nodes.

    This is a pure, immutable data structure with query methods.
    Every node is identified by a string id and holds one configuration value
    of type C, which the graph never inspects.

    The graph represents "depends on" relationships:
    - an edge (a, b) means "b depends on a"
    - in_edges(b) lists the edges into b in the order they were added

    At most one edge exists per (source, target) pair. Adding the same pair
    again replaces its value and keeps its original position.

    Attributes:
        _configs: Mapping from node id to its configuration, in insertion order.
        _in_edges: Mapping from node id to its incoming edges.
        _out_edges: Mapping from node id to its outgoing edges.

    """

    _configs: dict[str, C] = field(default_factory=dict)
    _in_edges: dict[str, tuple[Edge, ...]] = field(default_factory=dict)
    _out_edges: dict[str, tuple[Edge, ...]] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        nodes: Mapping[str, C],
        edges: Iterable[Edge | tuple[str, str] | tuple[str, str, Any]] = (),
    ) -> DependencyGraph[C]:
        """Build a graph from node configurations and edges.

        Nodes that only appear in ``edges`` are added with configuration None.

        Args:
            nodes: Mapping from node id to configuration.
            edges: Edges as Edge instances or (source, target[, value]) tuples.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> graph = DependencyGraph.build(
            ...     {"a": {"op": "interval"}, "b": {"op": "map"}},
            ...     [("a", "b", 0)],
            ... )
            >>> graph.predecessors("b")
            ('a',)

        """
        configs: dict[str, Any] = dict(nodes)
        unique: dict[tuple[str, str], Edge] = {}

        for item in edges:
            edge = _as_edge(item)
            unique[edge.source, edge.target] = edge
            # Ensure both nodes exist in the graph
            configs.setdefault(edge.source, None)
            configs.setdefault(edge.target, None)

        in_edges: dict[str, list[Edge]] = {node: [] for node in configs}
        out_edges: dict[str, list[Edge]] = {node: [] for node in configs}
        for edge in unique.values():
            in_edges[edge.target].append(edge)
            out_edges[edge.source].append(edge)

        return cls(
            _configs=configs,
            _in_edges={k: tuple(v) for k, v in in_edges.items()},
            _out_edges={k: tuple(v) for k, v in out_edges.items()},
        )

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Edge | tuple[str, str] | tuple[str, str, Any]],
    ) -> DependencyGraph[Any]:
        """Build a graph from edges alone; every node gets configuration None.

        Example:
            >>> # b depends on a, c depends on b
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.topological_order()
            ['a', 'b', 'c']

        """
        return cls.build({}, edges)

    @property
    def nodes(self) -> tuple[str, ...]:
        """All node ids in insertion order."""
        return tuple(self._configs)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """All edges, grouped by source in node insertion order."""
        return tuple(edge for out in self._out_edges.values() for edge in out)

    def node(self, node: str) -> C:
        """Get the configuration of a node.

        Raises:
            KeyError: If the node is not in the graph.

        """
        return self._configs[node]

    def in_edges(self, node: str) -> tuple[Edge, ...]:
        """Get the edges into a node, in the order they were added."""
        return self._in_edges.get(node, ())

    def out_edges(self, node: str) -> tuple[Edge, ...]:
        """Get the edges out of a node, in the order they were added."""
        return self._out_edges.get(node, ())

    def predecessors(self, node: str) -> tuple[str, ...]:
        """Get direct dependencies of a node (nodes it depends on).

        Args:
            node: The node to query.

        Returns:
            Ids of the nodes this node directly depends on, in edge order.

        """
        return tuple(edge.source for edge in self.in_edges(node))

    def successors(self, node: str) -> tuple[str, ...]:
        """Get direct dependents of a node (nodes that depend on it).

        Args:
            node: The node to query.

        Returns:
            Ids of the nodes that directly depend on this node, in edge order.

        """
        return tuple(edge.target for edge in self.out_edges(node))

    def roots(self) -> frozenset[str]:
        """Get nodes with no predecessors (input/source nodes)."""
        return frozenset(n for n in self._configs if not self._in_edges.get(n))

    def leaves(self) -> frozenset[str]:
        """Get nodes with no successors (output/sink nodes)."""
        return frozenset(n for n in self._configs if not self._out_edges.get(n))

    def topological_order(self) -> list[str]:
        """Return node ids in topological order (dependencies before dependents).

        Ties are broken by node insertion order.

        Returns:
            List of node ids where each node appears before all nodes that depend on it.

        Raises:
            CycleError: If the graph contains a cycle.

        """
        return topological_sort(self._configs, ((edge.source, edge.target) for edge in self.edges))

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        try:
            self.topological_order()
        except CycleError:
            return True
        return False

    def validate(self) -> list[str]:
        """Validate the graph and return a list of error messages.

        Checks for:
        - Cycles in the graph
        - Nodes that depend on themselves

        Returns:
            List of error messages. Empty list if graph is valid.

        """
        errors: list[str] = []

        try:
            self.topological_order()
        except CycleError as e:
            errors.append(str(e))

        errors.extend(
            f"Node '{node}' depends on itself" for node in self._configs if node in self.predecessors(node)
        )

        return errors

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._configs)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._configs
