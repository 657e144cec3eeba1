"""Public API for dup_dirs.core."""

from __future__ import annotations

from dup_dirs.core.detector import DuplicateDetector, detect
from dup_dirs.core.entries import DirectoryEntry
from dup_dirs.core.errors import DupDirsError, EnumerationError, MalformedConfigError
from dup_dirs.core.events import SubscriberList
from dup_dirs.core.filtering import ChildFilter, FilterConfig
from dup_dirs.core.identity import (
    FULL_PATH,
    LEAF_NAME,
    IdentityIndex,
    PathIdentity,
    canonical_path,
    hash_by_name,
    hash_by_path,
    same_name,
    same_path,
)
from dup_dirs.core.models import (
    DirectoryRef,
    DirectorySummary,
    DuplicatePair,
    OutputMode,
    PairSummary,
    ScanReport,
    ScanStats,
    SizeState,
)
from dup_dirs.core.pairs import DuplicatePairSet, PairEntry
from dup_dirs.core.roots import RootDirectorySet
from dup_dirs.core.scan import Scanner
from dup_dirs.core.size import SizeCalculator, SizeObservable, directory_size, format_size

__all__ = [
    "FULL_PATH",
    "LEAF_NAME",
    "ChildFilter",
    "DirectoryEntry",
    "DirectoryRef",
    "DirectorySummary",
    "DupDirsError",
    "DuplicateDetector",
    "DuplicatePair",
    "DuplicatePairSet",
    "EnumerationError",
    "FilterConfig",
    "IdentityIndex",
    "MalformedConfigError",
    "OutputMode",
    "PairEntry",
    "PairSummary",
    "PathIdentity",
    "RootDirectorySet",
    "ScanReport",
    "ScanStats",
    "Scanner",
    "SizeCalculator",
    "SizeObservable",
    "SizeState",
    "SubscriberList",
    "canonical_path",
    "detect",
    "directory_size",
    "format_size",
    "hash_by_name",
    "hash_by_path",
    "same_name",
    "same_path",
]
