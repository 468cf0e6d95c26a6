"""Graph algorithms for dependency graph operations."""

import heapq
from collections.abc import Hashable, Iterable

from obsgraph._errors import CycleError


def topological_sort[T: Hashable](nodes: Iterable[T], edges: Iterable[tuple[T, T]]) -> list[T]:
    """Sort nodes so that every edge's source comes before its target.

    Among the nodes whose dependencies are all placed, the one added first
    is placed next. The order of ``nodes`` (followed by nodes that only appear
    in ``edges``, in the order they are met) is therefore the tie-break, and
    the result is stable for a given input.

    Args:
        nodes: Nodes in insertion order.
        edges: (source, target) pairs; "target depends on source".

    Returns:
        List of nodes in topological order.

    Raises:
        CycleError: If the graph contains a cycle. No partial order is returned.

    Example:
        >>> topological_sort(["c", "b", "a"], [("a", "b"), ("b", "c")])
        ['a', 'b', 'c']
        >>> topological_sort(["z", "a"], [])
        ['z', 'a']

    """
    position: dict[T, int] = {}
    for node in nodes:
        position.setdefault(node, len(position))

    targets: list[list[int]] = [[] for _ in position]
    indegree = [0] * len(position)
    for source, target in edges:
        for node in (source, target):
            if node not in position:
                position[node] = len(position)
                targets.append([])
                indegree.append(0)
        targets[position[source]].append(position[target])
        indegree[position[target]] += 1

    by_position = list(position)
    ready = [i for i, degree in enumerate(indegree) if degree == 0]
    heapq.heapify(ready)
    order: list[T] = []

    while ready:
        current = heapq.heappop(ready)
        order.append(by_position[current])
        for target in targets[current]:
            indegree[target] -= 1
            if indegree[target] == 0:
                heapq.heappush(ready, target)

    if len(order) != len(by_position):
        raise CycleError(by_position[i] for i, degree in enumerate(indegree) if degree > 0)

    return order
