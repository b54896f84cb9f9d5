"""Exception types raised while embedding resources into HTML files.

``ResourceNotFoundError`` is the only recoverable error: the tag rewriter
catches it, logs a warning and leaves the tag as-is. Every other
``EmbedError`` aborts the run and is reported by the CLI with exit code 1.
"""

from __future__ import annotations

from pathlib import Path


class EmbedError(Exception):
    """Base class for html-embed failures."""


class ResourceNotFoundError(EmbedError):
    """A locally referenced resource does not exist on disk."""

    def __init__(self, path: Path, kind: str | None = None) -> None:
        self.path = path
        self.kind = kind
        what = f"{kind} " if kind else ""
        super().__init__(f"Unable to fetch {what}{path}")


class ExternalResourceNotSupportedError(EmbedError):
    """Embedding of remote resources was requested but is not implemented."""

    def __init__(self, src: str, kind: str | None = None) -> None:
        self.src = src
        self.kind = kind
        super().__init__(f"Resolving external files is not supported yet: {src}")


class InputReadError(EmbedError):
    """An HTML file found in the source directory could not be read."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Unable to read file {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class DocumentParseError(EmbedError):
    """An HTML file could not be parsed."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Error parsing file {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class SourceDirectoryError(EmbedError):
    """The source directory is missing or not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source directory not found ({path})")


class OutputDirectoryError(EmbedError):
    """The output directory could not be created."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Failed to create directory {path}"
        if cause is not None:
            message += f" - {cause}"
        super().__init__(message)


class OutputWriteError(EmbedError):
    """An embedded HTML file could not be written."""

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Failed to write file {path}"
        if cause is not None:
            message += f" - {cause}"
        super().__init__(message)


__all__ = [
    "DocumentParseError",
    "EmbedError",
    "ExternalResourceNotSupportedError",
    "InputReadError",
    "OutputDirectoryError",
    "OutputWriteError",
    "ResourceNotFoundError",
    "SourceDirectoryError",
]
