"""Splitting of schemas with complex properties into separate named schemas.

The catalog importer only understands flat schemas: every property must be a
simple type or a reference.  For each schema in ``components.schemas`` the
splitter walks the property tree once and

1. moves an inline object property (``type: object`` with ``properties``) to
   a new entry ``<parent>_<property>_<timestamp>`` and replaces it with a
   ``$ref``;
2. does the same for the ``items`` of an array-of-objects property, leaving
   ``{"type": "array", "items": {"$ref": ...}}`` behind;
3. descends into anything else with a nested key prefix.

Extracted schemas are split recursively before they are stored, so one
pass over the original entries is enough.  ``$ref`` nodes are never followed.
"""
from __future__ import annotations

import logging
from typing import Any

from src.asyncapi_prep.components import require_section
from src.asyncapi_prep.references import NameAllocator, ref_for
from src.asyncapi_prep.report import PipelineReport
from src.asyncapi_prep.schema_node import (
    SchemaKind,
    array_items,
    has_properties,
    schema_kind,
)

logger = logging.getLogger(__name__)

STAGE_SPLIT = "split"

ITEM_SUFFIX = "_Item"


class SchemaSplitter:
    """Extracts nested object schemas into *schemas*, which it mutates."""

    def __init__(
        self,
        schemas: dict[str, Any],
        allocator: NameAllocator | None = None,
    ) -> None:
        self.schemas = schemas
        self.allocator = allocator or NameAllocator(schemas)
        self.extracted: list[str] = []

    def _store(self, parent_key: str, property_name: str, node: dict[str, Any]) -> str:
        name = self.allocator.allocate(parent_key, property_name)
        self.schemas[name] = self.extract(node, name)
        self.extracted.append(name)
        logger.debug("Extracted %s.%s into schema %s", parent_key, property_name, name)
        return name

    def extract(self, schema: Any, key_prefix: str) -> Any:
        """Return *schema* with nested objects replaced by references.

        The input node is not modified; object nodes with properties are
        returned as shallow copies carrying the rewritten ``properties``.
        """
        kind = schema_kind(schema)
        if kind in (SchemaKind.INVALID, SchemaKind.REFERENCE, SchemaKind.PRIMITIVE):
            return schema

        if kind is SchemaKind.OBJECT:
            if not has_properties(schema):
                return schema
            new_properties: dict[str, Any] = {}
            for name, value in schema["properties"].items():
                new_properties[name] = self._split_property(key_prefix, name, value)
            return {**schema, "properties": new_properties}

        # SchemaKind.ARRAY
        items = array_items(schema)
        if has_properties(items):
            # extracted by the owning object's property loop
            return schema
        if items is None:
            return schema
        return {**schema, "items": self.extract(items, key_prefix + ITEM_SUFFIX)}

    def _split_property(self, parent_key: str, name: str, value: Any) -> Any:
        kind = schema_kind(value)
        if kind is SchemaKind.OBJECT and has_properties(value):
            return ref_for(self._store(parent_key, name, value))

        if kind is SchemaKind.ARRAY:
            items = array_items(value)
            if schema_kind(items) is SchemaKind.OBJECT:
                return {"type": "array", "items": ref_for(self._store(parent_key, name, items))}

        return self.extract(value, f"{parent_key}_{name}")


def split_schemas(
    document: dict[str, Any],
    report: PipelineReport | None = None,
    allocator: NameAllocator | None = None,
) -> dict[str, Any]:
    """Split every schema in ``components.schemas`` in place.

    Raises:
        ComponentNotFoundError: ``components.schemas`` is missing.
    """
    schemas = require_section(document, "schemas")
    splitter = SchemaSplitter(schemas, allocator)
    if report is not None:
        report.start_stage(STAGE_SPLIT)

    for schema_name in list(schemas):
        before = len(splitter.extracted)
        schemas[schema_name] = splitter.extract(schemas[schema_name], schema_name)
        if report is not None:
            report.ok(STAGE_SPLIT, schema_name)
        logger.debug(
            "Split schema %s into %d additional schema(s)",
            schema_name,
            len(splitter.extracted) - before,
        )
    return document
