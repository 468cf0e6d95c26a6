"""Graph module providing dependency graph abstractions.

This module contains:
- DependencyGraph[C]: A generic, immutable directed acyclic graph of configured nodes
- Edge: A dependency between two nodes, optionally carrying an ordering value
- topological_sort: Algorithm for ordering nodes by dependencies
"""

from ._algorithms import topological_sort
from ._dependency_graph import DependencyGraph, Edge

__all__ = ["DependencyGraph", "Edge", "topological_sort"]
