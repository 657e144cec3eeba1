"""Exception types raised by dup-dirs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class DupDirsError(Exception):
    """Base class for dup-dirs errors."""


class EnumerationError(DupDirsError):
    """Listing a root directory's children failed during detection.

    Detection is aborted when this is raised; no partial pair list is
    returned.
    """

    def __init__(self, root: Path, cause: OSError) -> None:
        self.root = root
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Cannot list subdirectories of {root}: {reason}")


class MalformedConfigError(DupDirsError):
    """The persisted configuration could not be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Malformed config file {path}: {reason}")
