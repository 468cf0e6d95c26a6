"""Construction of node-objects from a linearized graph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._errors import DuplicateNodeError, UnresolvedSourceError
from ._linearize import linearize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._capabilities import Constructor
    from ._graph import DependencyGraph
    from ._linearize import NodeDescriptor

logger = logging.getLogger(__name__)


def instantiate[C](
    nodes: Iterable[NodeDescriptor[C]],
    constructor: Constructor[C],
) -> dict[str, Any]:
    """Construct one node-object per descriptor, in order.

    For every descriptor the already constructed objects of its sources are
    looked up and passed to ``constructor(id, config, source_objects)``; the
    result is stored under the node id.

    Exceptions raised by ``constructor`` propagate unchanged. Objects built
    before the failure are not cleaned up; the caller owns them.

    Args:
        nodes: Descriptors in topological order, typically from ``linearize``.
        constructor: Callback building the node-object of a single node.

    Returns:
        Mapping from node id to node-object, in construction order.

    Raises:
        UnresolvedSourceError: If a descriptor names a source that has not
            been constructed before it.
        DuplicateNodeError: If a node id appears more than once.

    Example:
        >>> plan = linearize(DependencyGraph.from_edges([("a", "b")]))
        >>> instantiate(plan, lambda id, config, sources: (id, len(sources)))
        {'a': ('a', 0), 'b': ('b', 1)}

    """
    objects: dict[str, Any] = {}

    for node in nodes:
        if node.id in objects:
            raise DuplicateNodeError(node.id)

        sources: list[Any] = []
        for source_id in node.sources:
            try:
                sources.append(objects[source_id])
            except KeyError:
                raise UnresolvedSourceError(node.id, source_id) from None

        logger.debug("Constructing %s from %s", node.id, list(node.sources))
        objects[node.id] = constructor(node.id, node.config, sources)

    return objects


def instantiate_graph[C](graph: DependencyGraph[C], constructor: Constructor[C]) -> dict[str, Any]:
    """Linearize ``graph`` and construct its node-objects.

    Shortcut for ``instantiate(linearize(graph), constructor)``.
    """
    return instantiate(linearize(graph), constructor)
