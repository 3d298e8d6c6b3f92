"""Wrapping payload properties in, and out of, the ``data`` envelope.

``convert`` moves a schema's properties below a synthetic ``data`` object and
adds the CloudEvents context attributes next to it.  ``for-import`` does the
opposite: it promotes ``data`` back to the top level and drops the context
attributes, which the importer expects to find on the message trait instead.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from src.asyncapi_prep.cloud_events import merge_cloud_event_headers
from src.asyncapi_prep.report import PipelineReport
from src.asyncapi_prep.schema_node import (
    SchemaKind,
    dotted_path,
    has_properties,
    schema_kind,
)
from src.shared.constants import DATA_NODE
from src.shared.errors import (
    AppError,
    MalformedComponentError,
    ReferenceNotSupportedError,
)

logger = logging.getLogger(__name__)

STAGE_WRAP = "wrap"
STAGE_UNWRAP = "unwrap"


def wrap_in_data_node(schema: Any) -> Any:
    """Return a new object schema whose only property is ``data``.

    ``data`` holds the original ``properties`` (and ``required``, when the
    schema had one).  Schemas that are not inline objects with properties are
    returned unchanged, which callers detect by identity.
    """
    if not has_properties(schema):
        logger.warning(
            "Couldn't wrap properties in data-node because schema is not an "
            "object or does not contain properties"
        )
        return schema

    data: dict[str, Any] = {"type": "object", "properties": schema["properties"]}
    if schema.get("required"):
        data["required"] = list(schema["required"])
    return {"type": "object", "properties": {DATA_NODE: data}}


def wrap_schemas(
    schemas: dict[str, Any],
    headers: dict[str, Any],
    report: PipelineReport,
    ignore_schema: re.Pattern[str] | None = None,
) -> None:
    """Wrap every schema in *schemas* and merge the CloudEvents *headers* into it."""
    report.start_stage(STAGE_WRAP)
    for schema_name in list(schemas):
        if ignore_schema is not None and ignore_schema.search(schema_name):
            logger.debug("Skipping schema: %s (matches ignore pattern)", schema_name)
            report.ignore(STAGE_WRAP, schema_name, f"matches {ignore_schema.pattern!r}")
            continue

        logger.debug("Processing schema for: %s", schema_name)
        schema = schemas[schema_name]
        wrapped = wrap_in_data_node(schema)
        if wrapped is schema:
            report.skip(
                STAGE_WRAP,
                schema_name,
                f"Schema {schema_name} is not an object with properties.",
                warn=False,
            )
            continue

        schemas[schema_name] = merge_cloud_event_headers(wrapped, headers)
        report.ok(STAGE_WRAP, schema_name)


def unwrap_data_node(schema: Any, path: str) -> dict[str, Any]:
    """Replace *schema*'s properties and required list with those of its ``data`` node.

    The CloudEvents context properties next to ``data`` are discarded.

    Raises:
        ReferenceNotSupportedError: *schema* or its ``data`` node is a ``$ref``.
        MalformedComponentError: *schema* is not an object, has no properties,
            or ``data`` is not an object.
    """
    kind = schema_kind(schema)
    if kind is SchemaKind.REFERENCE:
        raise ReferenceNotSupportedError(path)
    if kind is SchemaKind.INVALID:
        raise MalformedComponentError(
            f"Schema {path} is not an object or is undefined.", path=path
        )

    properties = schema.get("properties")
    if not isinstance(properties, dict):
        raise MalformedComponentError(
            f"Schema {path} doesn't contain any properties!", path=path
        )

    data = properties.get(DATA_NODE)
    data_kind = schema_kind(data)
    if data_kind is SchemaKind.REFERENCE:
        raise ReferenceNotSupportedError(dotted_path(path, "properties", DATA_NODE))
    if data_kind is SchemaKind.INVALID:
        raise MalformedComponentError(
            f"Node data of the schema properties in {path} is not an object.",
            path=path,
        )

    schema["required"] = list(data.get("required") or [])
    schema["properties"] = data.get("properties") or {}
    return schema


def unwrap_schemas(schemas: dict[str, Any], report: PipelineReport) -> None:
    """Unwrap the ``data`` envelope of every schema in *schemas*."""
    report.start_stage(STAGE_UNWRAP)
    for schema_name in list(schemas):
        path = dotted_path("components", "schemas", schema_name)
        logger.debug("Processing schema: %s", schema_name)
        try:
            unwrap_data_node(schemas[schema_name], path)
        except AppError as exc:
            if exc.fatal:
                raise
            report.skip(STAGE_UNWRAP, schema_name, exc)
            continue
        report.ok(STAGE_UNWRAP, schema_name)
