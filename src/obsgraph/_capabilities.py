"""Capability definitions shared by the instantiator and the disposer.

A node-object is whatever a constructor callback returns. Its role during
teardown is decided by two optional operations:

- ``subscribe``: the object is a live producer (an observable).
- ``unsubscribe``: the object is a disposable handle (a subscription).
"""

from collections.abc import Callable, Sequence
from enum import StrEnum, auto
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Subscribable(Protocol):
    """A live reactive producer."""

    def subscribe(self, *args: Any, **kwargs: Any) -> Any: ...


@runtime_checkable
class Disposable(Protocol):
    """A handle that releases its resources when unsubscribed."""

    def unsubscribe(self) -> None: ...


class NodeKind(StrEnum):
    """The role of a node-object with respect to teardown."""

    SOURCE = auto()  # subscribe-capable only, never disposed
    HANDLE = auto()  # unsubscribe-capable only, disposed on teardown
    OPAQUE = auto()  # neither or both, left untouched


type Constructor[C] = Callable[[str, C, Sequence[Any]], Any]
"""Callback building the node-object for ``(id, config, source_objects)``."""


def _can_subscribe(obj: object) -> bool:
    return isinstance(obj, Subscribable) and callable(obj.subscribe)


def _can_unsubscribe(obj: object) -> bool:
    # runtime_checkable only checks that the attribute exists
    return isinstance(obj, Disposable) and callable(obj.unsubscribe)


def node_kind(obj: object) -> NodeKind:
    """Classify a node-object by the operations it exposes.

    An object counts as :class:`Subscribable` or :class:`Disposable` only if
    the matching attribute is callable; nothing is called.

    Example:
        >>> class Subscription:
        ...     def unsubscribe(self) -> None: ...
        >>> node_kind(Subscription())
        <NodeKind.HANDLE: 'handle'>

    """
    can_subscribe = _can_subscribe(obj)
    can_unsubscribe = _can_unsubscribe(obj)
    if can_unsubscribe and not can_subscribe:
        return NodeKind.HANDLE
    if can_subscribe and not can_unsubscribe:
        return NodeKind.SOURCE
    return NodeKind.OPAQUE
