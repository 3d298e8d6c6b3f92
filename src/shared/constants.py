"""Shared constants used across the asyncapi-prep package."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"
APP_NAME: str = "asyncapi-prep"

# JSON pointer prefixes
SCHEMAS_REF_PREFIX: str = "#/components/schemas/"
MESSAGE_TRAITS_REF_PREFIX: str = "#/components/messageTraits/"

# CloudEvents envelope
CLOUD_EVENT_CONTEXT_TRAIT: str = "CloudEventContext"
CLOUD_EVENT_CONTEXT_REF: str = MESSAGE_TRAITS_REF_PREFIX + CLOUD_EVENT_CONTEXT_TRAIT
DATA_NODE: str = "data"
JSON_CONTENT_TYPE: str = "application/json"

# for-import only handles this exact document version
FOR_IMPORT_ASYNCAPI_VERSION: str = "2.0.0"

# Input formats
SUPPORTED_EXTENSIONS: list[str] = [".json"]

# Type annotations applied before import
TYPE_FORMATS: dict[str, str] = {
    "integer": "int32",
    "number": "decimal",
}

# Combinators the type annotator descends into
SCHEMA_COMBINATORS: list[str] = ["allOf", "oneOf", "anyOf"]

# Timestamp suffix used for split schema names (YYYYMMDDHHMMSS)
SPLIT_TIMESTAMP_FORMAT: str = "%Y%m%d%H%M%S"
