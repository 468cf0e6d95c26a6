"""Tests for graph teardown and capability classification."""

from collections.abc import Sequence
from typing import Any

import pytest

from obsgraph import (
    DependencyGraph,
    Disposable,
    DisposalError,
    NodeKind,
    Subscribable,
    dispose,
    instantiate_graph,
    node_kind,
)


class Subscription:
    def __init__(self) -> None:
        self.unsubscribe_count = 0

    def unsubscribe(self) -> None:
        self.unsubscribe_count += 1


class Observable:
    def __init__(self) -> None:
        self.subscribe_count = 0

    def subscribe(self, *args: Any, **kwargs: Any) -> Subscription:
        self.subscribe_count += 1
        return Subscription()


class Subject(Observable):
    """Both subscribable and disposable, like a subject that can be completed."""

    def __init__(self) -> None:
        super().__init__()
        self.unsubscribe_count = 0

    def unsubscribe(self) -> None:
        self.unsubscribe_count += 1


class FailingSubscription:
    def unsubscribe(self) -> None:
        msg = "cannot release"
        raise DisposalError(msg)


class TestNodeKind:
    """Tests for node_kind classification."""

    def test_subscription_is_handle(self) -> None:
        assert node_kind(Subscription()) is NodeKind.HANDLE

    def test_observable_is_source(self) -> None:
        assert node_kind(Observable()) is NodeKind.SOURCE

    def test_both_capabilities_is_opaque(self) -> None:
        assert node_kind(Subject()) is NodeKind.OPAQUE

    @pytest.mark.parametrize("obj", [None, 1, "text", object(), {"unsubscribe": lambda: None}])
    def test_neither_capability_is_opaque(self, obj: object) -> None:
        assert node_kind(obj) is NodeKind.OPAQUE

    def test_non_callable_attribute_is_not_a_capability(self) -> None:
        class Flagged:
            unsubscribe = True

        assert node_kind(Flagged()) is NodeKind.OPAQUE

    def test_non_callable_subscribe_keeps_handle(self) -> None:
        class Tagged:
            subscribe = "feed"

            def unsubscribe(self) -> None: ...

        # The protocol check alone would treat this as both
        assert isinstance(Tagged(), Subscribable)
        assert node_kind(Tagged()) is NodeKind.HANDLE

    def test_protocols(self) -> None:
        assert isinstance(Subscription(), Disposable)
        assert isinstance(Observable(), Subscribable)
        assert not isinstance(Observable(), Disposable)


class TestDispose:
    """Tests for the dispose function."""

    def test_disposes_handles_only(self) -> None:
        handle = Subscription()
        source = Observable()

        dispose({"handle": handle, "source": source})

        assert handle.unsubscribe_count == 1
        assert source.subscribe_count == 0

    def test_skips_objects_with_both_capabilities(self) -> None:
        subject = Subject()

        dispose({"subject": subject})

        assert subject.unsubscribe_count == 0

    def test_skips_opaque_values(self) -> None:
        dispose({"a": None, "b": 42, "c": object()})

    def test_empty_mapping(self) -> None:
        dispose({})

    def test_does_not_modify_mapping(self) -> None:
        nodes = {"handle": Subscription(), "source": Observable()}
        before = dict(nodes)

        dispose(nodes)

        assert nodes == before

    def test_disposal_error_propagates_and_stops(self) -> None:
        first = Subscription()
        last = Subscription()
        nodes = {"first": first, "failing": FailingSubscription(), "last": last}

        with pytest.raises(DisposalError, match="cannot release"):
            dispose(nodes)

        assert first.unsubscribe_count == 1
        assert last.unsubscribe_count == 0


class TestInstantiateThenDispose:
    """Tests for a full build and teardown cycle."""

    def test_all_handles_disposed(self) -> None:
        # Two producers merged into one consumer, plus a consumer of a single producer
        graph = DependencyGraph.build(
            {"ticks": "source", "clicks": "source", "merged": "sink", "log": "sink"},
            [("ticks", "merged", 0), ("clicks", "merged", 1), ("ticks", "log")],
        )
        subscriptions: dict[str, Subscription] = {}

        def construct(node_id: str, config: str, sources: Sequence[Any]) -> Any:
            if config == "source":
                return Observable()
            for source in sources:
                source.subscribe()
            subscriptions[node_id] = Subscription()
            return subscriptions[node_id]

        nodes = instantiate_graph(graph, construct)
        dispose(nodes)

        assert set(subscriptions) == {"merged", "log"}
        assert all(s.unsubscribe_count == 1 for s in subscriptions.values())
        assert nodes["ticks"].subscribe_count == 2
        assert nodes["clicks"].subscribe_count == 1
