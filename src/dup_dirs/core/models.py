"""Data models for duplicate directory detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from dup_dirs.core.identity import FULL_PATH, LEAF_NAME, canonical_path

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dup_dirs.core.identity import PathLike


class SizeState(StrEnum):
    """Progress of a directory size computation."""

    pending = "pending"
    computed = "computed"
    absent = "absent"


class OutputMode(StrEnum):
    """Output format for rendering results."""

    rich = "rich"
    tui = "tui"
    json = "json"


@dataclass(frozen=True)
class DirectoryRef:
    """A directory identified by its canonical absolute path.

    Dataclass equality is exact path equality. Collections compare
    references through an explicit identity strategy instead.
    """

    path: Path

    @classmethod
    def of(cls, path: PathLike) -> DirectoryRef:
        """Build a reference from any path, canonicalizing it."""
        if isinstance(path, DirectoryRef):
            return path
        return cls(Path(canonical_path(path)))

    @property
    def name(self) -> str:
        """Leaf name of the directory."""
        return self.path.name

    def exists(self) -> bool:
        """Re-check that the directory exists on disk."""
        return self.path.is_dir()

    def __fspath__(self) -> str:
        return str(self.path)

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class DuplicatePair:
    """Two same-named directories living under different parents."""

    first: DirectoryRef
    second: DirectoryRef

    def __post_init__(self) -> None:
        if not LEAF_NAME.same(self.first, self.second):
            msg = f"Pair sides have different names: {self.first} vs {self.second}"
            raise ValueError(msg)
        if FULL_PATH.same(self.first, self.second):
            msg = f"Pair sides refer to the same directory: {self.first}"
            raise ValueError(msg)

    @classmethod
    def of(cls, first: PathLike, second: PathLike) -> DuplicatePair:
        return cls(DirectoryRef.of(first), DirectoryRef.of(second))

    @property
    def name(self) -> str:
        """The leaf name shared by both sides."""
        return self.first.name

    @property
    def paths(self) -> tuple[Path, Path]:
        """Ordered (first, second) paths, the pair's identity in a pair set."""
        return (self.first.path, self.second.path)


@dataclass(frozen=True)
class DirectorySummary:
    """Snapshot of one directory's size for reporting."""

    path: Path
    size_bytes: int | None
    size_display: str
    state: SizeState


@dataclass(frozen=True)
class PairSummary:
    """Snapshot of one duplicate pair for reporting."""

    name: str
    first: DirectorySummary
    second: DirectorySummary


@dataclass(frozen=True)
class ScanStats:
    """Summary statistics for a detection run."""

    total_roots: int
    total_pairs: int
    distinct_names: int
    duplicated_bytes: int

    @classmethod
    def from_pairs(cls, pairs: Sequence[PairSummary], *, total_roots: int) -> ScanStats:
        """Compute stats from pair summaries.

        ``duplicated_bytes`` counts the second side of every pair, i.e. the
        space held by copies beyond the first one seen.
        """
        return cls(
            total_roots=total_roots,
            total_pairs=len(pairs),
            distinct_names=len({p.name for p in pairs}),
            duplicated_bytes=sum(p.second.size_bytes or 0 for p in pairs),
        )


@dataclass(frozen=True)
class ScanReport:
    """Top-level result of a detection run."""

    roots: tuple[Path, ...]
    pairs: tuple[PairSummary, ...]
    stats: ScanStats
