"""Teardown of instantiated graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._capabilities import NodeKind, node_kind

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def dispose(nodes: Mapping[str, Any]) -> None:
    """Unsubscribe every subscription handle in ``nodes``.

    Only HANDLE objects (``unsubscribe`` without ``subscribe``) are disposed.
    Sources and opaque objects are left alone. The mapping itself is not
    modified.

    A failing ``unsubscribe`` propagates immediately and the remaining
    entries are not visited. Callers that need best-effort teardown should
    dispose entries one by one.
    """
    for node_id, obj in nodes.items():
        if node_kind(obj) is NodeKind.HANDLE:
            logger.debug("Disposing %s", node_id)
            obj.unsubscribe()
        else:
            logger.debug("Skipping %s", node_id)
