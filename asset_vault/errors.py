"""Exception types for the asset vault engine.

Lower layers raise these; PackageManager catches them at its boundary,
logs them and turns them into a boolean result plus a user notification.
"""

from pathlib import Path


class VaultError(Exception):
    """Base class for every failure the vault reports."""


class InvalidExportRequest(VaultError):
    """Raised when export inputs are missing or invalid (no item, empty name, wildcard category)."""


class PathTraversalError(VaultError):
    """Raised when a caller-supplied subfolder could escape the content root."""

    def __init__(self, subfolder: str):
        super().__init__(f"Invalid target subfolder path: {subfolder!r}")
        self.subfolder = subfolder


class SourceNotFoundError(VaultError):
    """Raised when an import source folder does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"Source folder not found: {path}")
        self.path = path


class DirectoryCreationError(VaultError):
    """Raised when a target directory cannot be created. Always fatal."""

    def __init__(self, path: Path, reason: BaseException | None = None):
        message = f"Failed to create directory: {path}"
        if reason is not None:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class RegistryNotReadyError(VaultError):
    """Raised when the dependency registry is still indexing. Retry later."""


class DescriptorParseError(VaultError):
    """Raised when a sidecar descriptor cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to parse descriptor {path}: {reason}")
        self.path = path
        self.reason = reason
