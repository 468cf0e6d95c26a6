"""Wiring a small push-based pipeline from a graph description.

Producers expose ``subscribe``; the sink returns the subscription it holds,
so ``obsgraph.dispose`` releases it and leaves the producers alone.

Run with:
    python examples/pipeline.py
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import obsgraph


class Subscription:
    def __init__(self, release: Callable[[], None]) -> None:
        self._release = release
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self._release()
            self.closed = True


class Stream:
    """Forwards pushed values to its subscribers."""

    def __init__(self) -> None:
        self._observers: list[Callable[[Any], None]] = []

    def subscribe(self, on_next: Callable[[Any], None]) -> Subscription:
        self._observers.append(on_next)
        return Subscription(lambda: self._observers.remove(on_next))

    def push(self, value: Any) -> None:
        for observer in list(self._observers):
            observer(value)


class Counter(Stream):
    """Emits consecutive integers from ``start``, one per tick."""

    def __init__(self, start: int) -> None:
        super().__init__()
        self._next = start

    def tick(self) -> None:
        self.push(self._next)
        self._next += 1


def construct(node_id: str, config: dict[str, Any], sources: Sequence[Any]) -> Any:
    match config["operator"]:
        case "counter":
            return Counter(config.get("start", 0))
        case "merge":
            merged = Stream()
            for source in sources:
                source.subscribe(merged.push)
            return merged
        case "print":
            (source,) = sources
            return source.subscribe(lambda value: print(f"{config['prefix']}: {value}"))
        case other:
            msg = f"Unknown operator '{other}' for node '{node_id}'"
            raise obsgraph.ConstructionError(msg)


def main() -> None:
    graph = obsgraph.load_graph(Path(__file__).with_name("pipeline.toml"))
    nodes = obsgraph.instantiate_graph(graph, construct)

    nodes["ticks"].tick()  # merged: 0
    nodes["clicks"].tick()  # merged: 100
    nodes["ticks"].tick()  # merged: 1

    obsgraph.dispose(nodes)
    # The sink is unsubscribed, nothing is printed
    nodes["ticks"].tick()


if __name__ == "__main__":
    main()
