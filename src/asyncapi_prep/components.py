"""Lookups of required top-level document sections."""
from __future__ import annotations

from typing import Any

from src.shared.errors import ComponentNotFoundError


def require_components(document: dict[str, Any]) -> dict[str, Any]:
    """Return ``document["components"]`` or raise :class:`ComponentNotFoundError`."""
    components = document.get("components")
    if not isinstance(components, dict):
        raise ComponentNotFoundError("components", "AsyncApiDocument")
    return components


def require_section(document: dict[str, Any], section: str) -> dict[str, Any]:
    """Return ``components[section]`` (e.g. ``schemas``, ``messages``).

    Raises:
        ComponentNotFoundError: ``components`` or the section is missing.
    """
    components = require_components(document)
    value = components.get(section)
    if not isinstance(value, dict):
        raise ComponentNotFoundError(section, "components")
    return value
