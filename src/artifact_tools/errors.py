"""Exception hierarchy shared by artifact-tools modules."""

from __future__ import annotations


class ArtifactToolsError(RuntimeError):
    """Base class for errors raised by artifact-tools."""


class ClassFormatError(ArtifactToolsError):
    """Compiled class entry is structurally malformed."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at byte offset {offset})"
        super().__init__(message)
        self.offset = offset


class ArchiveError(ArtifactToolsError, OSError):
    """Input archive cannot be read as a zip container."""


class ArtifactResolutionError(ArtifactToolsError):
    """Failure recorded by the dependency resolver for one requested component."""
