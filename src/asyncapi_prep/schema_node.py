"""Classification of JSON-Schema-like nodes.

Every traversal in this package dispatches on :func:`schema_kind` instead of
probing dict keys ad hoc, so a ``$ref`` node can never be mistaken for an
inline object.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class SchemaKind(str, Enum):
    """The variant a schema node belongs to."""
    REFERENCE = "reference"
    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    INVALID = "invalid"


def schema_kind(node: Any) -> SchemaKind:
    """Classify *node*.

    A dict carrying ``$ref`` is a reference regardless of any sibling keys.
    Non-dict values (booleans, ``None``, lists) are ``INVALID`` and are passed
    through untouched by every traversal.
    """
    if not isinstance(node, dict):
        return SchemaKind.INVALID
    if "$ref" in node:
        return SchemaKind.REFERENCE
    node_type = node.get("type")
    if node_type == "object":
        return SchemaKind.OBJECT
    if node_type == "array":
        return SchemaKind.ARRAY
    return SchemaKind.PRIMITIVE


def is_reference(node: Any) -> bool:
    return schema_kind(node) is SchemaKind.REFERENCE


def has_properties(node: Any) -> bool:
    """True for an inline object node carrying a ``properties`` mapping (possibly empty)."""
    return schema_kind(node) is SchemaKind.OBJECT and isinstance(
        node.get("properties"), dict
    )


def array_items(node: Any) -> Any:
    """Return the ``items`` of an array node, or ``None``."""
    if schema_kind(node) is not SchemaKind.ARRAY:
        return None
    return node.get("items")


def dotted_path(*parts: str) -> str:
    """Join location segments the way error messages report them."""
    return ".".join(parts)
