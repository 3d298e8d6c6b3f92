"""Message name, header and trait assignment for the ``for-import`` direction.

Every message is expected to look roughly like::

    {"payload": {"$ref": "#/components/schemas/Osapiens_AssessmentCreated"}}

where the referenced schema carries the event type in
``properties.type.const``.  That constant becomes the message ``name`` and
the ``type`` header; the CloudEventContext trait supplies the remaining
envelope attributes.
"""
from __future__ import annotations

import logging
from typing import Any

from src.asyncapi_prep.components import require_section
from src.asyncapi_prep.references import schema_name_from_ref
from src.asyncapi_prep.report import PipelineReport
from src.asyncapi_prep.schema_node import (
    SchemaKind,
    dotted_path,
    is_reference,
    schema_kind,
)
from src.shared.constants import CLOUD_EVENT_CONTEXT_REF, JSON_CONTENT_TYPE
from src.shared.errors import (
    AppError,
    ComponentNotFoundError,
    MalformedComponentError,
    ReferenceNotSupportedError,
)

logger = logging.getLogger(__name__)

STAGE_NAMES = "names"
STAGE_HEADERS = "headers"
STAGE_TRAITS = "traits"


def _message_path(message_key: str) -> str:
    return dotted_path("components", "messages", message_key)


def _require_inline(message: Any, message_key: str) -> dict[str, Any]:
    kind = schema_kind(message)
    if kind is SchemaKind.REFERENCE:
        raise ReferenceNotSupportedError(_message_path(message_key))
    if kind is SchemaKind.INVALID:
        raise MalformedComponentError(
            f"Message {message_key} is not an object.", path=_message_path(message_key)
        )
    return message


def get_message_name(
    document: dict[str, Any], message: Any, message_key: str
) -> str:
    """Resolve a message's canonical name from its payload schema.

    Raises:
        ReferenceNotSupportedError: the message, or the schema its payload
            points to, is itself a ``$ref``.
        MalformedComponentError: the payload has no reference, the referenced
            schema is missing, or it has no ``properties.type.const``.
        ComponentNotFoundError: the document has no ``components.schemas``.
    """
    message = _require_inline(message, message_key)

    payload = message.get("payload")
    payload_ref = payload.get("$ref") if isinstance(payload, dict) else None
    if not payload_ref:
        raise MalformedComponentError(
            f"Message {message_key} has no reference to a payload defined.",
            path=_message_path(message_key),
        )

    schema_name = schema_name_from_ref(payload_ref)
    components = document.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if not isinstance(schemas, dict):
        raise ComponentNotFoundError("schemas", "components")

    schema_path = dotted_path("components", "schemas", schema_name)
    if schema_name not in schemas:
        raise MalformedComponentError(
            f"Schema {schema_name} not found in components.schemas.", path=schema_path
        )
    schema = schemas[schema_name]
    if is_reference(schema):
        raise ReferenceNotSupportedError(schema_path)

    properties = schema.get("properties") if isinstance(schema, dict) else None
    type_node = properties.get("type") if isinstance(properties, dict) else None
    name = type_node.get("const") if isinstance(type_node, dict) else None
    if not name:
        raise MalformedComponentError(
            f"Schema {schema_name} has no type defined.", path=schema_path
        )
    return name


def set_message_names(
    document: dict[str, Any], report: PipelineReport
) -> dict[str, str]:
    """Set ``name`` on every message and return the resolved names by message key.

    Raises:
        ComponentNotFoundError: ``components.messages`` is missing.
    """
    messages = require_section(document, "messages")
    report.start_stage(STAGE_NAMES)
    resolved: dict[str, str] = {}
    for message_key, message in messages.items():
        logger.debug("Processing message: %s", message_key)
        try:
            name = get_message_name(document, message, message_key)
        except AppError as exc:
            if exc.fatal:
                raise
            report.skip(STAGE_NAMES, message_key, exc)
            continue
        message["name"] = name
        resolved[message_key] = name
        report.ok(STAGE_NAMES, message_key)
    return resolved


def build_message_headers(name: str) -> dict[str, Any]:
    """Return the headers schema pinning ``type`` and ``datacontenttype``."""
    return {
        "properties": {
            "type": {"const": name},
            "datacontenttype": {"const": JSON_CONTENT_TYPE},
        }
    }


def set_message_headers(
    document: dict[str, Any],
    resolved_names: dict[str, str],
    report: PipelineReport,
) -> None:
    """Set ``headers`` on every message whose name was resolved beforehand."""
    messages = require_section(document, "messages")
    report.start_stage(STAGE_HEADERS)
    for message_key, message in messages.items():
        try:
            message = _require_inline(message, message_key)
            name = resolved_names.get(message_key)
            if name is None:
                raise MalformedComponentError(
                    f"Message {message_key} has no resolved name.",
                    path=_message_path(message_key),
                )
        except AppError as exc:
            report.skip(STAGE_HEADERS, message_key, exc)
            continue
        message["headers"] = build_message_headers(name)
        report.ok(STAGE_HEADERS, message_key)


def add_message_trait_ref(message: Any, message_key: str = "") -> dict[str, Any]:
    """Point the message's ``traits`` at the CloudEventContext trait.

    Raises:
        ReferenceNotSupportedError: *message* is a ``$ref``.
    """
    message = _require_inline(message, message_key)
    message["traits"] = [{"$ref": CLOUD_EVENT_CONTEXT_REF}]
    return message


def add_message_trait_refs(document: dict[str, Any], report: PipelineReport) -> None:
    messages = require_section(document, "messages")
    report.start_stage(STAGE_TRAITS)
    for message_key, message in messages.items():
        try:
            add_message_trait_ref(message, message_key)
        except AppError as exc:
            report.skip(STAGE_TRAITS, message_key, exc)
            continue
        report.ok(STAGE_TRAITS, message_key)


def assign_description(document: dict[str, Any], description: str) -> dict[str, Any]:
    """Set ``info.description``, leaving every other ``info`` field untouched.

    Raises:
        ComponentNotFoundError: the document has no ``info`` object.
    """
    info = document.get("info")
    if not isinstance(info, dict):
        raise ComponentNotFoundError("info", "AsyncApiDocument")
    info["description"] = description
    return document
