"""Reading graph description files and writing construction plans.

A graph description lists node configurations and the edges between them:

    [nodes.ticks]
    operator = "interval"

    [nodes.log]
    operator = "print"

    [[edges]]
    source = "ticks"
    target = "log"
    index = 0

TOML (``.toml``) and JSON (``.json``) files share the same structure.
"""

from __future__ import annotations

import json
import logging
import tomllib
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._errors import GraphFileError
from ._graph import DependencyGraph, Edge

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ._linearize import NodeDescriptor

logger = logging.getLogger(__name__)


class EdgeEntry(BaseModel):
    """An edge as written in a graph description file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str
    target: str
    index: Any = None


class GraphDocument(BaseModel):
    """Validated contents of a graph description file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    nodes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    edges: list[EdgeEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_edge_endpoints(self) -> GraphDocument:
        for position, edge in enumerate(self.edges):
            for endpoint in (edge.source, edge.target):
                if endpoint not in self.nodes:
                    msg = f"edges[{position}] refers to unknown node '{endpoint}'"
                    raise ValueError(msg)
        return self

    def to_graph(self) -> DependencyGraph[dict[str, Any]]:
        """Build the DependencyGraph described by this document."""
        return DependencyGraph.build(
            self.nodes,
            [Edge(edge.source, edge.target, edge.index) for edge in self.edges],
        )


def _read_raw(path: Path) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        if suffix == ".json":
            with path.open("rb") as f:
                return json.load(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid {suffix[1:].upper()} in {path}: {e}"
        raise GraphFileError(msg) from e
    except OSError as e:
        msg = f"Cannot read graph file {path}: {e}"
        raise GraphFileError(msg) from e

    msg = f"Unsupported graph file format '{path.suffix}' (expected .toml or .json)"
    raise GraphFileError(msg)


def load_graph(path: Path) -> DependencyGraph[dict[str, Any]]:
    """Load a graph description file.

    Args:
        path: Path to a ``.toml`` or ``.json`` graph description.

    Returns:
        The described graph. Node configurations are the raw tables from the file.

    Raises:
        GraphFileError: If the file cannot be read, parsed or validated.

    """
    raw = _read_raw(path)
    try:
        document = GraphDocument.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid graph description in {path}:\n{e}"
        raise GraphFileError(msg) from e

    logger.debug(f"Loaded {len(document.nodes)} nodes and {len(document.edges)} edges from {path}")
    return document.to_graph()


def plan_to_dict(descriptors: Iterable[NodeDescriptor[Any]]) -> dict[str, Any]:
    """Convert a construction plan into TOML-compatible data."""
    nodes: list[dict[str, Any]] = []
    for descriptor in descriptors:
        entry: dict[str, Any] = {"id": descriptor.id, "sources": list(descriptor.sources)}
        # TOML has no null
        if descriptor.config is not None:
            entry["config"] = descriptor.config
        nodes.append(entry)
    return {"nodes": nodes}


def export_plan(descriptors: Iterable[NodeDescriptor[Any]], output_path: Path) -> None:
    """Write a construction plan as TOML, one ``[[nodes]]`` table per step.

    Raises:
        GraphFileError: If the plan holds values TOML cannot represent (such as
            a ``null`` nested in a node configuration) or the file cannot be
            written. Nothing is written when serialization fails.

    """
    try:
        content = tomli_w.dumps(plan_to_dict(descriptors))
    except TypeError as e:
        msg = f"Cannot write plan to {output_path} as TOML: {e}"
        raise GraphFileError(msg) from e

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write plan to {output_path}: {e}"
        raise GraphFileError(msg) from e
    logger.debug(f"Exported plan to {output_path}")
