"""Adds ``format`` to numeric schema nodes (``integer`` -> ``int32``, ``number`` -> ``decimal``)."""
from __future__ import annotations

import logging
from typing import Any

from src.asyncapi_prep.components import require_section
from src.asyncapi_prep.report import PipelineReport
from src.asyncapi_prep.schema_node import SchemaKind, array_items, schema_kind
from src.shared.constants import SCHEMA_COMBINATORS, TYPE_FORMATS

logger = logging.getLogger(__name__)

STAGE_ANNOTATE = "annotate"


def annotate_schema(schema: Any) -> Any:
    """Annotate *schema* and everything below it in place; returns the same node."""
    kind = schema_kind(schema)
    if kind in (SchemaKind.INVALID, SchemaKind.REFERENCE):
        return schema

    if kind is SchemaKind.OBJECT:
        properties = schema.get("properties")
        if isinstance(properties, dict):
            for prop in properties.values():
                annotate_schema(prop)
    elif kind is SchemaKind.ARRAY:
        annotate_schema(array_items(schema))
    else:
        node_type = schema.get("type")
        fmt = TYPE_FORMATS.get(node_type) if isinstance(node_type, str) else None
        if fmt is not None:
            schema["format"] = fmt

    for combinator in SCHEMA_COMBINATORS:
        members = schema.get(combinator)
        if isinstance(members, list):
            for member in members:
                annotate_schema(member)

    return schema


def annotate_schemas(
    document: dict[str, Any], report: PipelineReport | None = None
) -> dict[str, Any]:
    """Annotate every schema in ``components.schemas``.

    Raises:
        ComponentNotFoundError: ``components.schemas`` is missing.
    """
    schemas = require_section(document, "schemas")
    if report is not None:
        report.start_stage(STAGE_ANNOTATE)
    for schema_name, schema in schemas.items():
        schemas[schema_name] = annotate_schema(schema)
        if report is not None:
            report.ok(STAGE_ANNOTATE, schema_name)
    return document
