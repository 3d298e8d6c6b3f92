"""The CloudEventContext message trait.

The trait's ``headers`` schema lists the CloudEvents context attributes.  In
the ``convert`` direction it is read from the document and merged into every
payload schema; in the ``for-import`` direction the canonical version built
here replaces whatever the document carried.
"""
from __future__ import annotations

import copy
import logging
from typing import Any

from src.asyncapi_prep.components import require_components
from src.shared.constants import CLOUD_EVENT_CONTEXT_TRAIT, DATA_NODE, JSON_CONTENT_TYPE
from src.shared.errors import ComponentNotFoundError

logger = logging.getLogger(__name__)

CLOUD_EVENT_REQUIRED: list[str] = ["id", "specversion", "source", "type", DATA_NODE]

_CLOUD_EVENT_PROPERTIES: dict[str, dict[str, Any]] = {
    "specversion": {
        "description": (
            "The version of the CloudEvents specification which the event uses. "
            "This enables the interpretation of the context."
        ),
        "type": "string",
        "const": "1.0",
    },
    "type": {
        "description": (
            "Type of occurrence which has happened. Often this property is used "
            "for routing, observability, policy enforcement, etc."
        ),
        "type": "string",
        "minLength": 1,
    },
    "source": {
        "description": "This describes the event producer.",
        "type": "string",
        "format": "uri-reference",
    },
    "subject": {
        "description": (
            "The subject of the event in the context of the event producer "
            "(identified by source)."
        ),
        "type": "string",
        "minLength": 1,
    },
    "id": {
        "description": "ID of the event.",
        "type": "string",
        "minLength": 1,
        "examples": ["6925d08e-bc19-4ad7-902e-bd29721cc69b"],
    },
    "time": {
        "description": "Timestamp of when the occurrence happened. Must adhere to RFC 3339.",
        "type": "string",
        "format": "date-time",
        "examples": ["2018-04-05T17:31:00Z"],
    },
    "datacontenttype": {
        "description": "Describe the data encoding format",
        "type": "string",
        "const": JSON_CONTENT_TYPE,
    },
}


def build_cloud_event_context() -> dict[str, Any]:
    """Return a fresh copy of the canonical CloudEventContext trait."""
    return {
        "headers": {
            "type": "object",
            "properties": copy.deepcopy(_CLOUD_EVENT_PROPERTIES),
            "required": list(CLOUD_EVENT_REQUIRED),
        }
    }


def set_cloud_event_context(document: dict[str, Any]) -> dict[str, Any]:
    """Store the canonical trait under ``components.messageTraits.CloudEventContext``.

    ``messageTraits`` is created when absent; an existing CloudEventContext
    entry is overwritten without merging.

    Raises:
        ComponentNotFoundError: the document has no ``components``.
    """
    components = require_components(document)
    traits = components.get("messageTraits")
    if not isinstance(traits, dict):
        traits = components["messageTraits"] = {}
    if CLOUD_EVENT_CONTEXT_TRAIT in traits:
        logger.debug("Replacing existing %s message trait", CLOUD_EVENT_CONTEXT_TRAIT)
    traits[CLOUD_EVENT_CONTEXT_TRAIT] = build_cloud_event_context()
    return document


def get_cloud_event_headers(document: dict[str, Any]) -> dict[str, Any]:
    """Return the ``headers`` schema of the document's CloudEventContext trait.

    Raises:
        ComponentNotFoundError: ``components``, ``components.messageTraits`` or
            the CloudEventContext trait is missing.
    """
    components = require_components(document)
    traits = components.get("messageTraits")
    if not isinstance(traits, dict):
        raise ComponentNotFoundError("messageTraits", "components")
    trait = traits.get(CLOUD_EVENT_CONTEXT_TRAIT)
    if not isinstance(trait, dict):
        raise ComponentNotFoundError(CLOUD_EVENT_CONTEXT_TRAIT, "messageTraits")
    headers = trait.get("headers")
    return headers if isinstance(headers, dict) else {}


def merge_cloud_event_headers(
    schema: dict[str, Any], headers: dict[str, Any]
) -> dict[str, Any]:
    """Merge the CloudEvents header properties and required list into *schema*.

    Header properties come first, the schema's own properties (the ``data``
    envelope) after them.  ``required`` becomes the header's required list
    plus ``data``.
    """
    header_properties = headers.get("properties") or {}
    required = list(headers.get("required") or [])
    if DATA_NODE not in required:
        required.append(DATA_NODE)

    schema["properties"] = {
        **copy.deepcopy(header_properties),
        **(schema.get("properties") or {}),
    }
    schema["required"] = required
    return schema
