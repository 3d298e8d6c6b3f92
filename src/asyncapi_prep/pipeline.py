"""Drivers for the ``convert`` and ``for-import`` pipelines.

Both drivers mutate the parsed document in place and return a
:class:`PipelineReport`.  Missing top-level structure raises before the
document is touched further; problems with a single schema or message are
recorded in the report and the stage moves on.

``convert``::

    [namespace channels] -> wrap schemas in data + merge CloudEvent headers

``for-import``::

    message names -> message headers -> trait refs -> CloudEventContext trait
    -> info.description -> unwrap data -> split schemas -> annotate types
"""

from __future__ import annotations

import logging
import re
from typing import Any

from src.asyncapi_prep.channels import prefix_channels
from src.asyncapi_prep.cloud_events import (
    get_cloud_event_headers,
    set_cloud_event_context,
)
from src.asyncapi_prep.components import require_section
from src.asyncapi_prep.envelope import unwrap_schemas, wrap_schemas
from src.asyncapi_prep.messages import (
    add_message_trait_refs,
    assign_description,
    set_message_headers,
    set_message_names,
)
from src.asyncapi_prep.references import NameAllocator
from src.asyncapi_prep.report import PipelineReport
from src.asyncapi_prep.schema_splitter import split_schemas
from src.asyncapi_prep.type_annotator import annotate_schemas
from src.asyncapi_prep.version import determine_asyncapi_version
from src.shared.constants import FOR_IMPORT_ASYNCAPI_VERSION
from src.shared.errors import UnsupportedVersionError

logger = logging.getLogger(__name__)

COMMAND_CONVERT = "convert"
COMMAND_FOR_IMPORT = "for-import"


def run_convert(
    document: dict[str, Any],
    namespace: str | None = None,
    ignore_schema: str | re.Pattern[str] | None = None,
) -> PipelineReport:
    """Wrap every payload schema in the CloudEvents envelope.

    Args:
        document: Parsed AsyncAPI 2.x or 3.x document, modified in place.
        namespace: Optional prefix for every channel key.
        ignore_schema: Regular expression; matching schema names are left
            untouched.

    Raises:
        ComponentNotFoundError: ``components.schemas``, the CloudEventContext
            trait, or (with *namespace*) ``channels`` is missing.
        re.error: *ignore_schema* is not a valid regular expression.
    """
    report = PipelineReport(command=COMMAND_CONVERT)
    try:
        logger.debug("Detected AsyncAPI %s document", determine_asyncapi_version(document))
    except ValueError as exc:
        logger.warning("%s Continuing anyway.", exc)

    if isinstance(ignore_schema, str):
        ignore_schema = re.compile(ignore_schema)

    schemas = require_section(document, "schemas")

    if namespace:
        prefix_channels(document, namespace)

    headers = get_cloud_event_headers(document)

    logger.info("Processing schemas...")
    wrap_schemas(schemas, headers, report, ignore_schema)
    logger.info("Modifying of schemas completed!")
    return report


def run_for_import(
    document: dict[str, Any],
    description: str,
    allocator: NameAllocator | None = None,
) -> PipelineReport:
    """Prepare an AsyncAPI 2.0.0 document for import into the event catalog.

    Args:
        document: Parsed AsyncAPI 2.0.0 document, modified in place.
        description: New ``info.description``.
        allocator: Name allocator for split schemas; a timestamp based one
            is created when omitted.

    Raises:
        UnsupportedVersionError: the document is not AsyncAPI 2.0.0.
        ComponentNotFoundError: ``components.messages``, ``components.schemas``
            or ``info`` is missing.
    """
    version = document.get("asyncapi")
    if version != FOR_IMPORT_ASYNCAPI_VERSION:
        raise UnsupportedVersionError(version, FOR_IMPORT_ASYNCAPI_VERSION)

    require_section(document, "messages")
    schemas = require_section(document, "schemas")
    report = PipelineReport(command=COMMAND_FOR_IMPORT)

    logger.info("Retrieving and setting 'name' for messages...")
    resolved_names = set_message_names(document, report)

    logger.info("Setting 'headers' for messages...")
    set_message_headers(document, resolved_names, report)

    logger.info("Setting 'traits' for messages...")
    add_message_trait_refs(document, report)

    logger.info("Setting 'messageTraits' for components...")
    set_cloud_event_context(document)

    logger.info("Setting description for the Async API document...")
    assign_description(document, description)

    logger.info("Removing CloudEvent context around the message payload...")
    unwrap_schemas(schemas, report)

    logger.info("Splitting up schemas with complex properties...")
    split_schemas(document, report, allocator)

    logger.info("Adding format to types of integer and number...")
    annotate_schemas(document, report)

    return report
