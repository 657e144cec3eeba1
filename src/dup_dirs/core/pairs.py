"""Collection of detected duplicate pairs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, overload

from dup_dirs.core.entries import DirectoryEntry
from dup_dirs.core.events import SubscriberList
from dup_dirs.core.identity import FULL_PATH
from dup_dirs.core.models import DuplicatePair, PairSummary

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    from dup_dirs.core.identity import PathLike
    from dup_dirs.core.size import SizeCalculator, SizeObservable

logger = logging.getLogger(__name__)


class PairEntry:
    """A stored pair with a live size for each side."""

    def __init__(self, pair: DuplicatePair, calculator: SizeCalculator) -> None:
        self.pair = pair
        self.first = DirectoryEntry(pair.first, calculator)
        self.second = DirectoryEntry(pair.second, calculator)

    @property
    def name(self) -> str:
        return self.pair.name

    @property
    def paths(self) -> tuple[Path, Path]:
        return self.pair.paths

    def touches(self, key: str) -> bool:
        """Check whether either side has the canonical path key ``key``."""
        return FULL_PATH.key_of(self.first) == key or FULL_PATH.key_of(self.second) == key

    def summary(self) -> PairSummary:
        return PairSummary(
            name=self.name,
            first=self.first.summary(),
            second=self.second.summary(),
        )

    def __repr__(self) -> str:
        return f"PairEntry({str(self.first.path)!r}, {str(self.second.path)!r})"


class DuplicatePairSet:
    """Detected pairs, in insertion order, without repeated ordered pairs.

    The set listens to both sides' size computations. When either one
    finishes, subscribers get a single coarse "contents changed" call and
    should re-read the whole collection. Membership changes notify the
    same way, once per call that changed something.
    """

    def __init__(self, calculator: SizeCalculator) -> None:
        self._calculator = calculator
        self._entries: list[PairEntry] = []
        self._subscribers: SubscriberList[DuplicatePairSet] = SubscriberList()

    def subscribe(self, callback: Callable[[DuplicatePairSet], object]) -> Callable[[], None]:
        """Register a change callback. Returns an unsubscriber."""
        return self._subscribers.subscribe(callback)

    def unsubscribe(self, callback: Callable[[DuplicatePairSet], object]) -> bool:
        return self._subscribers.unsubscribe(callback)

    def add(self, pair: DuplicatePair) -> bool:
        """Add a pair unless the same ordered pair of paths is held.

        Returns:
            True if the set changed.
        """
        entry = self._new_entry(pair, self._entries)
        if entry is None:
            return False
        self._commit([*self._entries, entry])
        return True

    def add_paths(self, first: PathLike, second: PathLike) -> bool:
        return self.add(DuplicatePair.of(first, second))

    def add_all(self, pairs: Iterable[DuplicatePair]) -> bool:
        """Add each pair in order, notifying once if any was added."""
        entries = list(self._entries)
        changed = False
        for pair in pairs:
            entry = self._new_entry(pair, entries)
            if entry is not None:
                entries.append(entry)
                changed = True
        if changed:
            self._commit(entries)
        return changed

    def remove(self, path: PathLike) -> bool:
        """Remove the first pair with either side at ``path``."""
        key = FULL_PATH.key_of(path)
        for i, entry in enumerate(self._entries):
            if entry.touches(key):
                self._drop([i])
                return True
        return False

    def remove_all(self, path: PathLike) -> bool:
        """Remove every pair with either side at ``path``."""
        key = FULL_PATH.key_of(path)
        indexes = [i for i, e in enumerate(self._entries) if e.touches(key)]
        if not indexes:
            return False
        self._drop(indexes)
        return True

    def remove_exact(self, pair: PairEntry | DuplicatePair) -> bool:
        """Remove a stored entry by identity, or a pair by its ordered paths."""
        if isinstance(pair, PairEntry):
            for i, entry in enumerate(self._entries):
                if entry is pair:
                    self._drop([i])
                    return True
            pair = pair.pair
        for i, entry in enumerate(self._entries):
            if entry.paths == pair.paths:
                self._drop([i])
                return True
        return False

    def clear(self) -> None:
        """Remove every pair. Notifies only if the set was non-empty."""
        if not self._entries:
            return
        for entry in self._entries:
            self._release(entry)
        self._commit([])

    def contains(self, first: PathLike, second: PathLike) -> bool:
        """Check for a pair with exactly these sides, in this order."""
        target = DuplicatePair.of(first, second).paths
        return any(e.paths == target for e in self._entries)

    @property
    def entries(self) -> tuple[PairEntry, ...]:
        """Snapshot of the current entries."""
        return tuple(self._entries)

    def summaries(self) -> tuple[PairSummary, ...]:
        return tuple(e.summary() for e in self._entries)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every held size computation has finished."""
        observables = [side.size for e in self._entries for side in (e.first, e.second)]
        return all(o.wait(timeout) for o in observables)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[PairEntry]:
        return iter(tuple(self._entries))

    @overload
    def __getitem__(self, index: int) -> PairEntry: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PairEntry, ...]: ...

    def __getitem__(self, index: int | slice) -> PairEntry | tuple[PairEntry, ...]:
        if isinstance(index, slice):
            return tuple(self._entries[index])
        return self._entries[index]

    def _new_entry(self, pair: DuplicatePair, existing: list[PairEntry]) -> PairEntry | None:
        if any(e.paths == pair.paths for e in existing):
            return None
        entry = PairEntry(pair, self._calculator)
        entry.first.size.subscribe(self._on_size_ready)
        entry.second.size.subscribe(self._on_size_ready)
        return entry

    def _release(self, entry: PairEntry) -> None:
        for side in (entry.first, entry.second):
            side.size.unsubscribe(self._on_size_ready)
            side.detach()

    def _drop(self, indexes: list[int]) -> None:
        doomed = set(indexes)
        for i in indexes:
            self._release(self._entries[i])
        self._commit([e for i, e in enumerate(self._entries) if i not in doomed])

    def _commit(self, entries: list[PairEntry]) -> None:
        self._entries = entries
        self._subscribers.notify(self)

    def _on_size_ready(self, observable: SizeObservable) -> None:
        logger.debug("Size of %s is %s", observable.path, observable.display)
        self._subscribers.notify(self)
