"""Custom exception classes for document preparation.

Errors fall into two groups.  *Fatal* errors (missing top-level structure,
unreadable input) abort a command before anything is written.  *Recoverable*
errors (:class:`ReferenceNotSupportedError`, :class:`MalformedComponentError`)
describe a single schema or message; the pipeline catches them per item,
records a skip and carries on with the next entry.
"""
from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    fatal: bool = True

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    def __str__(self) -> str:
        return self.detail


class ComponentNotFoundError(AppError):
    """A required component is missing from the document."""

    def __init__(self, component_name: str, component_type: str | None = None) -> None:
        self.component_name = component_name
        self.component_type = component_type
        if component_type:
            detail = (
                f'Component "{component_name}" of type "{component_type}" '
                "not found in the specification."
            )
        else:
            detail = f'Component "{component_name}" not found in the specification.'
        super().__init__(detail)


class ReferenceNotSupportedError(AppError):
    """A ``$ref`` was found where only an inline object is supported."""

    fatal = False

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f'Reference at "{path}" is not supported. '
            "Please use a direct schema object instead."
        )


class MalformedComponentError(AppError):
    """A single schema or message does not have the expected shape."""

    fatal = False

    def __init__(self, detail: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(detail)


class InputNotFoundError(AppError):
    """The input file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class UnsupportedFileTypeError(AppError):
    """The input file extension is not supported."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension}! Only JSON is supported.")


class DocumentParseError(AppError):
    """The input could not be parsed into a JSON object."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path}: {reason}")


class UnsupportedVersionError(AppError):
    """The document's AsyncAPI version is not handled by the command."""

    def __init__(self, version: object, expected: str) -> None:
        self.version = version
        self.expected = expected
        super().__init__(
            f"Unsupported AsyncAPI version: {version}. "
            f"This command only supports AsyncAPI {expected}."
        )
