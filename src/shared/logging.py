"""Structured logging with run_id support."""
from __future__ import annotations

import contextvars
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Context variable for the id of the current command run
run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default=""
)

# Above CRITICAL, used by --silent
SILENT: int = logging.CRITICAL + 10

LOG_FORMATS = ("text", "json")


class JSONFormatter(logging.Formatter):
    """Custom JSON log formatter."""

    def __init__(self, service_name: str = "unknown") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "run_id": run_id_var.get(""),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


def resolve_level(level: str, verbose: bool = False, silent: bool = False) -> int:
    """Translate a level name and the CLI flags into a numeric level.

    ``silent`` overrules ``verbose``.
    """
    if silent:
        return SILENT
    if verbose:
        return logging.DEBUG
    return getattr(logging, level.upper(), logging.INFO)


def start_run() -> str:
    """Assign a fresh run_id to the current context and return it."""
    run_id = uuid.uuid4().hex[:12]
    run_id_var.set(run_id)
    return run_id


def setup_logging(
    service_name: str,
    level: str | int = "INFO",
    fmt: str = "text",
    logger_name: str | None = None,
) -> logging.Logger:
    """Configure logging for a command run.

    Args:
        service_name: Service name written into JSON log entries.
        level: Log level string (e.g. "INFO", "DEBUG") or numeric level.
        fmt: ``"text"`` for Rich console output, ``"json"`` for one JSON
            object per line.
        logger_name: Logger to configure; defaults to *service_name*.

    Returns:
        Configured logger instance.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {fmt!r}, expected one of {LOG_FORMATS}")

    logger = logging.getLogger(logger_name or service_name)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler: logging.Handler
    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger
