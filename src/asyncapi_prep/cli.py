"""asyncapi-prep CLI: prepare AsyncAPI documents for the event catalog.

Commands:
    convert      Wrap payload schemas in the CloudEvents envelope.
    for-import   Prepare an AsyncAPI 2.0.0 document for catalog import.

Environment:
    LOG_LEVEL                     Default log level (info).
    LOG_FORMAT                    "text" (Rich) or "json".
    ASYNCAPI_PREP_NAMESPACE       Default --namespace for convert.
    ASYNCAPI_PREP_IGNORE_SCHEMA   Default --ignore-schema for convert.
    ASYNCAPI_PREP_OUTPUT_INDENT   JSON indent of the written document.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Optional

import typer

from src.asyncapi_prep.display import print_report
from src.asyncapi_prep.document_io import read_document, write_document
from src.asyncapi_prep.pipeline import (
    COMMAND_CONVERT,
    COMMAND_FOR_IMPORT,
    run_convert,
    run_for_import,
)
from src.asyncapi_prep.report import PipelineReport
from src.shared.config import PrepConfig, load_prep_config
from src.shared.constants import APP_NAME, VERSION
from src.shared.errors import AppError
from src.shared.logging import resolve_level, setup_logging, start_run

logger = logging.getLogger(__name__)

# Root of every module logger in this code base
_LOGGER_ROOT = "src"

# Default JSON indent per command when the config does not set one
_DEFAULT_INDENT: dict[str, int | None] = {
    COMMAND_CONVERT: 2,
    COMMAND_FOR_IMPORT: None,
}

app = typer.Typer(
    name=APP_NAME,
    help="Prepare AsyncAPI specifications for an import into the event catalog.",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {VERSION}")
        raise typer.Exit()


def _validate_pattern(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as exc:
        raise typer.BadParameter(f"Invalid regular expression {value!r}: {exc}")
    return value


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit.",
    ),
) -> None:
    """Prepare AsyncAPI specifications for an import into the event catalog."""


def _configure(config_path: Optional[Path], verbose: bool, silent: bool) -> PrepConfig:
    """Load configuration and set up logging for this run."""
    config = load_prep_config(config_path)
    level = resolve_level(config.log_level, verbose=verbose, silent=silent)
    setup_logging(APP_NAME, level, config.log_format, logger_name=_LOGGER_ROOT)
    run_id = start_run()
    logger.debug("Starting run %s", run_id)
    return config


def _execute(
    command: str,
    pipeline: Callable[[dict[str, Any]], PipelineReport],
    input_path: Path,
    output_path: Path,
    config: PrepConfig,
    silent: bool,
) -> None:
    """Read, transform and write one document; exit 1 on fatal errors."""
    indent = config.output_indent
    if indent is None:
        indent = _DEFAULT_INDENT[command]

    try:
        document = read_document(input_path)
        report = pipeline(document)
        write_document(document, output_path, indent=indent)
    except AppError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        raise typer.Exit(code=1)
    except re.error as exc:
        logger.error("Invalid ignore-schema pattern: %s", exc)
        raise typer.Exit(code=1)

    if report.skipped:
        logger.warning("%d item(s) were skipped", len(report.skipped))
    if not silent:
        print_report(report, str(output_path))
    logger.info("Finished %s for %s", command, input_path)


@app.command("convert")
def convert(
    input_path: Path = typer.Option(  # noqa: B008
        ..., "--input", "--in", help="Path to the AsyncAPI specification file."
    ),
    output_path: Path = typer.Option(  # noqa: B008
        ..., "--output", "--out", help="Path to the output file (including filename)."
    ),
    namespace: Optional[str] = typer.Option(  # noqa: B008
        None, "--namespace", help="Prefix for every channel (topic) name."
    ),
    ignore_schema: Optional[str] = typer.Option(  # noqa: B008
        None,
        "--ignore-schema",
        "--is",
        callback=_validate_pattern,
        help="Regular expression to skip modifying matching schemas.",
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="Optional YAML configuration file."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output."),  # noqa: B008
    silent: bool = typer.Option(  # noqa: B008
        False, "--silent", help="Enable silent mode. This will overrule verbose."
    ),
) -> None:
    """Wrap payload schemas in the CloudEvents envelope."""
    config = _configure(config_path, verbose, silent)
    namespace = namespace or config.namespace
    ignore_schema = ignore_schema or config.ignore_schema

    logger.info("Converting JSON file %s...", input_path)
    _execute(
        COMMAND_CONVERT,
        lambda document: run_convert(document, namespace, ignore_schema),
        input_path,
        output_path,
        config,
        silent,
    )


@app.command("for-import")
def for_import(
    input_path: Path = typer.Option(  # noqa: B008
        ..., "--input", "--in", help="Path to the AsyncAPI specification file."
    ),
    output_path: Path = typer.Option(  # noqa: B008
        ..., "--output", "--out", help="Path to the output file (including filename)."
    ),
    description: str = typer.Option(  # noqa: B008
        ..., "--description", "--desc", help="Description for the Async API document."
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="Optional YAML configuration file."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output."),  # noqa: B008
    silent: bool = typer.Option(  # noqa: B008
        False, "--silent", help="Enable silent mode. This will overrule verbose."
    ),
) -> None:
    """Prepare an AsyncAPI 2.0.0 specification for import."""
    config = _configure(config_path, verbose, silent)

    logger.info("Preparing %s for import...", input_path)
    _execute(
        COMMAND_FOR_IMPORT,
        lambda document: run_for_import(document, description),
        input_path,
        output_path,
        config,
        silent,
    )
