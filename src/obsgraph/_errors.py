"""Exception hierarchy for obsgraph."""

from collections.abc import Iterable


class ObsGraphError(Exception):
    """Base class for all obsgraph errors."""


class CycleError(ObsGraphError, ValueError):
    """The graph contains a cycle and cannot be ordered.

    Attributes:
        nodes: Nodes that could not be placed in topological order.
            Every cycle of the graph is contained in this set.

    """

    def __init__(self, nodes: Iterable[object] = ()) -> None:
        self.nodes = tuple(nodes)
        msg = "Cycle detected in graph"
        if self.nodes:
            msg += f" (unresolved nodes: {', '.join(map(str, self.nodes))})"
        super().__init__(msg)


class ConstructionError(ObsGraphError):
    """A constructor callback failed to build a node-object.

    Raised by caller-supplied constructors. The instantiator never wraps
    exceptions, so whatever a constructor raises reaches the caller as-is.
    """


class DisposalError(ObsGraphError):
    """A node-object failed to release its resources."""


class UnresolvedSourceError(ObsGraphError, KeyError):
    """A node refers to a source that has not been constructed yet."""

    def __init__(self, node_id: str, source_id: str) -> None:
        self.node_id = node_id
        self.source_id = source_id
        super().__init__(f"Node '{node_id}' refers to source '{source_id}' which has not been constructed")

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0])


class DuplicateNodeError(ObsGraphError, ValueError):
    """The same node id appears more than once in a linearized node list."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' has already been constructed")


class GraphFileError(ObsGraphError):
    """A graph description file could not be read or is malformed."""


class ConfigError(ObsGraphError):
    """Error in obsgraph configuration."""
