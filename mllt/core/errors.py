"""Error types raised while assembling a site."""

from __future__ import annotations

from pathlib import Path


class MlltError(Exception):
    """Base class for every error raised by mllt."""


class _PathError(MlltError):
    """An error tied to a filesystem path."""

    describe = "Path error"

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.describe}: {path}: {reason}")


class ScanError(_PathError):
    """Raised when a directory or template file cannot be read during a scan."""

    describe = "Cannot scan"


class InvalidPathError(_PathError):
    """Raised when a path cannot be turned into a template identifier."""

    describe = "Invalid template path"


class OutputError(_PathError):
    """Raised when writing, copying or creating a directory fails."""

    describe = "Cannot write"


class MetadataError(_PathError):
    """Raised when a file's modification time cannot be read."""

    describe = "Cannot read metadata"


class ConfigError(_PathError):
    """Raised when the site configuration cannot be loaded."""

    describe = "Invalid configuration"


class ScaffoldError(_PathError):
    """Raised when a new project cannot be created at a path."""

    describe = "Cannot create project"


class CompileError(MlltError):
    """Raised when template source is malformed."""

    def __init__(self, identifier: str, message: str, lineno: int | None = None) -> None:
        self.identifier = identifier
        self.message = message
        self.lineno = lineno
        location = f"{identifier}:{lineno}" if lineno is not None else identifier
        super().__init__(f"Cannot compile template '{location}': {message}")


class RenderError(MlltError):
    """Raised when a template fails to render."""

    def __init__(self, identifier: str | None, message: str) -> None:
        self.identifier = identifier
        self.message = message
        if identifier is None:
            super().__init__(message)
        else:
            super().__init__(f"Cannot render template '{identifier}': {message}")


class UnknownField(RenderError):
    """A strict-mode template referenced a value missing from the context."""


class TemplateNotFound(RenderError):
    """A template referenced an identifier that is not registered."""

    def __init__(self, name: str, identifier: str | None = None) -> None:
        self.name = name
        super().__init__(identifier, f"template '{name}' not found")


class InvalidArgumentType(RenderError):
    """The layout helper was given a non-string template identifier."""


class BlockContentRequired(RenderError):
    """The layout helper was invoked without an enclosed block."""


class RegistryFrozenError(MlltError):
    """Raised when registering into a registry whose render phase has begun."""
