"""Channel topic namespacing."""
from __future__ import annotations

import logging
from typing import Any

from src.shared.errors import ComponentNotFoundError

logger = logging.getLogger(__name__)


def normalize_namespace(namespace: str) -> str:
    """Return *namespace* with exactly the trailing ``/`` the prefix needs."""
    return namespace if namespace.endswith("/") else namespace + "/"


def prefix_channels(document: dict[str, Any], namespace: str) -> dict[str, Any]:
    """Rename every channel key to ``<namespace>/<key>``, keeping the definitions.

    Channel order is preserved.

    Raises:
        ComponentNotFoundError: the document has no ``channels`` mapping.
    """
    channels = document.get("channels")
    if not isinstance(channels, dict):
        raise ComponentNotFoundError("channels", "channel")

    prefix = normalize_namespace(namespace)
    document["channels"] = {prefix + name: channel for name, channel in channels.items()}
    logger.debug("Prefixed %d channel(s) with %s", len(channels), prefix)
    return document
