"""Instantiate reactive pipelines from declarative dependency graphs."""

__all__ = [
    "ConfigError",
    "ConstructionError",
    "Constructor",
    "CycleError",
    "DependencyGraph",
    "Disposable",
    "DisposalError",
    "DuplicateNodeError",
    "Edge",
    "GraphFileError",
    "NodeDescriptor",
    "NodeKind",
    "ObsGraphError",
    "Subscribable",
    "UnresolvedSourceError",
    "dispose",
    "edge_index",
    "export_plan",
    "instantiate",
    "instantiate_graph",
    "linearize",
    "load_graph",
    "node_kind",
    "topological_sort",
]

from ._capabilities import Constructor, Disposable, NodeKind, Subscribable, node_kind
from ._dispose import dispose
from ._errors import (
    ConfigError,
    ConstructionError,
    CycleError,
    DisposalError,
    DuplicateNodeError,
    GraphFileError,
    ObsGraphError,
    UnresolvedSourceError,
)
from ._graph import DependencyGraph, Edge, topological_sort
from ._instantiate import instantiate, instantiate_graph
from ._io import export_plan, load_graph
from ._linearize import NodeDescriptor, edge_index, linearize
