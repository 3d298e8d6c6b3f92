"""AsyncAPI major version detection."""
from __future__ import annotations

from typing import Any


def determine_asyncapi_version(document: dict[str, Any]) -> str:
    """Return ``"v2"`` or ``"v3"`` for the document's ``asyncapi`` field.

    Raises:
        ValueError: the field is missing or names another major version.
    """
    version = document.get("asyncapi")
    if isinstance(version, str):
        if version.startswith("2"):
            return "v2"
        if version.startswith("3"):
            return "v3"
    raise ValueError(f"Unknown AsyncAPI version: {version}")
