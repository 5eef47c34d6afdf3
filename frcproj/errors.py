"""Exceptions raised while generating a project.

Every error is fatal to a generation run.  Each carries the operation that
failed plus the source and destination paths involved, so a caller can report
the failure without looking at the generator's internals.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for all generation failures."""

    def __init__(
        self,
        message: str,
        operation: str = "",
        source: str | Path | None = None,
        destination: str | Path | None = None,
    ) -> None:
        self.operation = operation
        self.source = Path(source) if source is not None else None
        self.destination = Path(destination) if destination is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.source is not None:
            parts.append(f"source={self.source}")
        if self.destination is not None:
            parts.append(f"destination={self.destination}")
        return " | ".join(parts)


class MissingSourcePath(GenerationError):
    """A required resource subtree or file does not exist."""


class UnsupportedFileType(GenerationError):
    """A symlink or special file was found while copying a tree."""


class PermissionDenied(GenerationError):
    """The filesystem rejected a create, write or chmod."""


class UnknownVendorKey(GenerationError):
    """A vendor dependency key is not in the lookup table."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Unknown vendor dependency '{key}'", operation="resolve_vendor_files"
        )


class MalformedVersionFile(GenerationError):
    """The build-tooling version descriptor is unreadable or empty."""


class ManifestError(Exception):
    """Raised when a blueprint manifest cannot be read or validated."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)
