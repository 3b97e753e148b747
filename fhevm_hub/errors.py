"""Error taxonomy for the FHEVM example hub toolkit.

Fatal errors propagate to the CLI boundary, which prints a one-line
diagnostic and exits non-zero.  ``ArtifactSourceMissing`` is the single
non-fatal condition: the pipelines record it instead of raising it.
"""

from __future__ import annotations

from pathlib import Path


class HubError(Exception):
    """Base class for every error raised by the toolkit."""


class CatalogError(HubError):
    """Raised when the catalog resource is malformed or inconsistent."""


class UnknownIdentifier(HubError):
    """Raised when an example or category is not registered in the catalog."""

    def __init__(self, kind: str, identifier: str, available: list[str]) -> None:
        self.kind = kind
        self.identifier = identifier
        self.available = sorted(available)
        super().__init__(f"Unknown {kind} '{identifier}'")


class SourceTemplateMissing(HubError):
    """Raised when the base template directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Base template directory not found: {self.path}")


class ArtifactSourceMissing(HubError):
    """An artifact referenced by a catalog entry is absent on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Artifact source not found: {self.path}")


class DestinationWriteFailure(HubError):
    """Raised when the destination cannot be created or written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot write {self.path}: {cause}")


class ManifestParseFailure(HubError):
    """Raised when the copied project manifest is missing or not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot parse manifest {self.path}: {reason}")
