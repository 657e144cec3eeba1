"""A tracked directory: its reference plus background size."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from dup_dirs.core.models import DirectoryRef, DirectorySummary
from dup_dirs.core.size import SizeObservable

if TYPE_CHECKING:
    from pathlib import Path

    from dup_dirs.core.identity import PathLike
    from dup_dirs.core.size import SizeCalculator


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value).astimezone()


class DirectoryEntry:
    """A directory owned by a collection.

    Creating an entry starts its size computation unless ``measure`` is
    False. The owning collection
    detaches the entry when it drops it, so a late completion is ignored.
    """

    def __init__(
        self, path: PathLike, calculator: SizeCalculator, *, measure: bool = True
    ) -> None:
        self.ref = DirectoryRef.of(path)
        self.last_modified: datetime | None = None
        self.created: datetime | None = None
        try:
            stat = self.ref.path.stat()
        except OSError:
            stat = None
        if stat is not None:
            self.last_modified = _timestamp(stat.st_mtime)
            self.created = _timestamp(getattr(stat, "st_birthtime", stat.st_ctime))
        self.size = SizeObservable(self.ref.path, calculator, start=measure)

    @property
    def path(self) -> Path:
        return self.ref.path

    @property
    def name(self) -> str:
        return self.ref.name

    def detach(self) -> None:
        self.size.detach()

    def summary(self) -> DirectorySummary:
        """Snapshot the entry's current size for reporting."""
        return DirectorySummary(
            path=self.path,
            size_bytes=self.size.size,
            size_display=self.size.display,
            state=self.size.state,
        )

    def __fspath__(self) -> str:
        return str(self.ref.path)

    def __repr__(self) -> str:
        return f"DirectoryEntry({str(self.ref.path)!r}, size={self.size.state.value})"
