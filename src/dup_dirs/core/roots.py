"""Ordered, deduplicated collection of root directories."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, overload

from dup_dirs.core.entries import DirectoryEntry
from dup_dirs.core.events import SubscriberList
from dup_dirs.core.identity import FULL_PATH, IdentityIndex, canonical_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    from dup_dirs.core.identity import PathLike
    from dup_dirs.core.size import SizeCalculator

logger = logging.getLogger(__name__)


class RootDirectorySet:
    """Root directories to search, in insertion order.

    No two entries share a canonical path. Paths that are not existing
    directories when added are skipped. Every mutation that changes
    membership swaps in the new entry list first, then calls subscribers
    in registration order with this set.
    """

    def __init__(self, calculator: SizeCalculator, *, measure: bool = True) -> None:
        """Initialize an empty set.

        Args:
            calculator: Runs the size computation each new entry starts.
            measure: Start size computations for new entries. Without it
                entry sizes stay pending until started explicitly.
        """
        self._calculator = calculator
        self._measure = measure
        self._entries: list[DirectoryEntry] = []
        self._subscribers: SubscriberList[RootDirectorySet] = SubscriberList()

    # -- subscription ---------------------------------------------------

    def subscribe(self, callback: Callable[[RootDirectorySet], object]) -> Callable[[], None]:
        """Register a membership-change callback. Returns an unsubscriber."""
        return self._subscribers.subscribe(callback)

    def unsubscribe(self, callback: Callable[[RootDirectorySet], object]) -> bool:
        return self._subscribers.unsubscribe(callback)

    # -- mutation -------------------------------------------------------

    def add(self, path: PathLike) -> bool:
        """Add a directory unless an entry with the same canonical path exists.

        Returns:
            True if the set changed.
        """
        entry = self._new_entry(path, self._entries)
        if entry is None:
            return False
        self._commit([*self._entries, entry])
        return True

    def add_all(self, paths: Iterable[PathLike]) -> bool:
        """Add each path in order, notifying once if any was added."""
        entries = list(self._entries)
        changed = False
        for path in paths:
            entry = self._new_entry(path, entries)
            if entry is not None:
                entries.append(entry)
                changed = True
        if changed:
            self._commit(entries)
        return changed

    def remove(self, path: PathLike) -> bool:
        """Stop tracking the first entry whose canonical path equals ``path``."""
        key = FULL_PATH.key_of(path)
        for i, entry in enumerate(self._entries):
            if FULL_PATH.key_of(entry) == key:
                self._drop([i])
                return True
        return False

    def remove_all(self, path: PathLike) -> bool:
        """Stop tracking every entry whose canonical path equals ``path``."""
        key = FULL_PATH.key_of(path)
        indexes = [i for i, e in enumerate(self._entries) if FULL_PATH.key_of(e) == key]
        if not indexes:
            return False
        self._drop(indexes)
        return True

    def remove_exact(self, entry: DirectoryEntry) -> bool:
        """Stop tracking this exact entry object.

        Falls back to :meth:`remove` by path when the object is not held,
        which covers a stale reference to a still-tracked directory.
        """
        for i, held in enumerate(self._entries):
            if held is entry:
                self._drop([i])
                return True
        return self.remove(entry.path)

    def dedupe(self) -> bool:
        """Collapse entries with the same canonical path, keeping the first.

        Always notifies.

        Returns:
            True if any entries were collapsed.
        """
        index: IdentityIndex[DirectoryEntry] = IdentityIndex(FULL_PATH)
        kept: list[DirectoryEntry] = []
        dropped: list[DirectoryEntry] = []
        for entry in self._entries:
            if index.probe(entry, entry) is None:
                kept.append(entry)
            else:
                dropped.append(entry)
        for entry in dropped:
            entry.detach()
        if dropped:
            logger.debug("Collapsed %d duplicate root(s)", len(dropped))
        self._commit(kept)
        return bool(dropped)

    def clear(self) -> None:
        """Stop tracking every entry. Notifies only if the set was non-empty."""
        if not self._entries:
            return
        for entry in self._entries:
            entry.detach()
        self._commit([])

    # -- lookup ---------------------------------------------------------

    def contains(self, path: PathLike) -> bool:
        key = FULL_PATH.key_of(path)
        return any(FULL_PATH.key_of(e) == key for e in self._entries)

    def contains_all(self, paths: Iterable[PathLike]) -> bool:
        keys = {FULL_PATH.key_of(e) for e in self._entries}
        return all(FULL_PATH.key_of(p) in keys for p in paths)

    def paths(self) -> tuple[Path, ...]:
        return tuple(e.path for e in self._entries)

    def canonical_paths(self, limit: int | None = None) -> list[str]:
        """Return canonical path strings for persistence.

        Args:
            limit: Keep only the ``limit`` most recently added entries.
                None keeps all of them. Order is insertion order either way.
        """
        paths = [str(e.path) for e in self._entries]
        if limit is None:
            return paths
        if limit <= 0:
            return []
        return paths[-limit:]

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        """Snapshot of the current entries."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iter(tuple(self._entries))

    @overload
    def __getitem__(self, index: int) -> DirectoryEntry: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[DirectoryEntry, ...]: ...

    def __getitem__(self, index: int | slice) -> DirectoryEntry | tuple[DirectoryEntry, ...]:
        if isinstance(index, slice):
            return tuple(self._entries[index])
        return self._entries[index]

    def __repr__(self) -> str:
        return f"RootDirectorySet({[str(p) for p in self.paths()]!r})"

    # -- internals ------------------------------------------------------

    def _new_entry(self, path: PathLike, existing: list[DirectoryEntry]) -> DirectoryEntry | None:
        """Build an entry for ``path`` unless it is missing or already held."""
        canonical = canonical_path(path)
        if not os.path.isdir(canonical):
            logger.debug("Skipping %s: not an existing directory", canonical)
            return None
        key = FULL_PATH.key_of(canonical)
        if any(FULL_PATH.key_of(e) == key for e in existing):
            return None
        logger.debug("Tracking root %s", canonical)
        return DirectoryEntry(canonical, self._calculator, measure=self._measure)

    def _drop(self, indexes: list[int]) -> None:
        doomed = set(indexes)
        for i in indexes:
            entry = self._entries[i]
            entry.detach()
            logger.debug("No longer tracking root %s", entry.path)
        self._commit([e for i, e in enumerate(self._entries) if i not in doomed])

    def _commit(self, entries: list[DirectoryEntry]) -> None:
        self._entries = entries
        self._subscribers.notify(self)
