"""Reading and writing AsyncAPI documents."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from src.shared.constants import SUPPORTED_EXTENSIONS
from src.shared.errors import (
    DocumentParseError,
    InputNotFoundError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)


def read_document(path: Path | str) -> dict[str, Any]:
    """Load an AsyncAPI document from a JSON file.

    Args:
        path: Path to the ``.json`` input.

    Returns:
        The parsed document, key order preserved.

    Raises:
        InputNotFoundError: *path* does not exist.
        UnsupportedFileTypeError: the extension is not ``.json``.
        DocumentParseError: the content is not a JSON object.
    """
    path = Path(path)
    if not path.is_file():
        raise InputNotFoundError(str(path))

    extension = path.suffix.lower()
    logger.debug("File extension: %s", extension)
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(extension)

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DocumentParseError(str(path), str(exc)) from exc

    if not isinstance(document, dict):
        raise DocumentParseError(str(path), "top-level value is not an object")
    logger.debug("Parsed JSON file %s", path)
    return document


def serialize_document(document: dict[str, Any], indent: int | None = None) -> str:
    return json.dumps(document, indent=indent, ensure_ascii=False)


def write_document(
    document: dict[str, Any], path: Path | str, indent: int | None = None
) -> Path:
    """Serialize *document* and write it atomically to *path*.

    Parent directories are created as needed.  The content is written to a
    temp file next to the target and then renamed over it.

    Returns:
        The path written to.
    """
    path = Path(path)
    content = serialize_document(document, indent)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(str(tmp_path), str(path))
    except BaseException:
        # Clean up temp file on any failure
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    logger.info("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path
