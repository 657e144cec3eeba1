"""Recursive directory sizes, computed in the background."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import CancelledError, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from dup_dirs.core.events import SubscriberList
from dup_dirs.core.models import SizeState

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor, Future
    from types import TracebackType

    from dup_dirs.core.identity import PathLike

logger = logging.getLogger(__name__)

PENDING_DISPLAY = "..."

_UNIT_STEP = 1000
_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB")


def directory_size(path: PathLike) -> int:
    """Sum the sizes of all files below ``path``.

    Symlinked directories are not descended into. Entries that vanish or
    cannot be read while walking contribute zero.
    """
    total = 0
    pending = [os.fspath(path)]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        elif entry.is_file():
                            total += entry.stat().st_size
                    except OSError as exc:
                        logger.debug("Ignoring unreadable entry %s: %s", entry.path, exc)
        except OSError as exc:
            logger.debug("Ignoring unreadable directory %s: %s", current, exc)
    return total


def format_size(size: int, *, raw_bytes: bool = False) -> str:
    """Format a byte count for display.

    Picks the largest unit (steps of 1000, up to ZB) that keeps the value
    below 1000 and rounds to two decimals, dropping trailing zeros.

    Args:
        size: Number of bytes.
        raw_bytes: Always show the plain byte count.
    """
    if raw_bytes:
        return f"{size} B"

    value = float(size)
    unit = 0
    while value >= _UNIT_STEP and unit < len(_UNITS) - 1:
        value /= _UNIT_STEP
        unit += 1

    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_UNITS[unit]}"


def _measure(path: Path) -> int | None:
    """Return the size of ``path``, or None if it is not a directory."""
    if not path.is_dir():
        return None
    return directory_size(path)


class SizeCalculator:
    """Runs directory size computations on a thread pool.

    One computation is submitted per directory. Nothing orders two
    computations relative to each other.
    """

    def __init__(
        self,
        *,
        max_workers: int | None = None,
        raw_bytes: bool = False,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            max_workers: Pool size when no executor is given.
            raw_bytes: Display sizes as plain byte counts.
            executor: Executor to submit work to. A private
                ThreadPoolExecutor is created if None.
        """
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="dup-dirs-size",
        )
        self.raw_bytes = raw_bytes

    def submit(self, path: Path) -> Future[int | None]:
        """Schedule a size computation for ``path``."""
        return self._executor.submit(_measure, path)

    def shutdown(self, *, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop the private pool. Executors passed in are left running."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> SizeCalculator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown(cancel_pending=exc is not None)


class SizeObservable:
    """One directory's size, published to subscribers when known.

    The computation starts on construction unless ``start=False``, in
    which case it waits for :meth:`start`. Subscribers present at
    completion are called once, in subscription order, with this
    observable. After :meth:`detach`, completion still records the size
    but notifies nobody. A computation that fails is recorded as absent.
    """

    def __init__(
        self, path: PathLike, calculator: SizeCalculator, *, start: bool = True
    ) -> None:
        self._path = Path(path)
        self._calculator = calculator
        self._raw_bytes = calculator.raw_bytes
        self._subscribers: SubscriberList[SizeObservable] = SubscriberList()
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._state = SizeState.pending
        self._size: int | None = None
        self._detached = False
        self._future: Future[int | None] | None = None
        if start:
            self.start()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> SizeState:
        with self._lock:
            return self._state

    @property
    def size(self) -> int | None:
        """Size in bytes, None while pending, 0 if the directory was absent."""
        with self._lock:
            return self._size

    @property
    def display(self) -> str:
        """Human-readable size, or a placeholder while pending."""
        with self._lock:
            if self._size is None:
                return PENDING_DISPLAY
            return format_size(self._size, raw_bytes=self._raw_bytes)

    @property
    def detached(self) -> bool:
        with self._lock:
            return self._detached

    def subscribe(self, callback: Callable[[SizeObservable], object]) -> Callable[[], None]:
        return self._subscribers.subscribe(callback)

    def unsubscribe(self, callback: Callable[[SizeObservable], object]) -> bool:
        return self._subscribers.unsubscribe(callback)

    def is_subscribed(self, callback: Callable[[SizeObservable], object]) -> bool:
        return self._subscribers.is_subscribed(callback)

    def detach(self) -> None:
        """Stop publishing. A computation still in flight completes silently."""
        with self._lock:
            self._detached = True
        self._subscribers.clear()

    @property
    def started(self) -> bool:
        with self._lock:
            return self._future is not None

    def start(self) -> None:
        """Submit the computation. Does nothing if already started or detached."""
        with self._lock:
            if self._future is not None or self._detached:
                return
            future = self._calculator.submit(self._path)
            self._future = future
        future.add_done_callback(self._on_done)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the computation finishes.

        Returns False on timeout, or at once if it was never started.
        """
        if not self.started:
            return False
        return self._done.wait(timeout)

    def _on_done(self, future: Future[int | None]) -> None:
        try:
            size = future.result()
        except CancelledError:
            logger.debug("Size computation for %s was cancelled", self._path)
            self._done.set()
            return
        except Exception:
            logger.exception("Size computation for %s failed", self._path)
            size = None

        with self._lock:
            if size is None:
                self._state = SizeState.absent
                self._size = 0
            else:
                self._state = SizeState.computed
                self._size = size
            detached = self._detached
        self._done.set()

        if detached:
            logger.debug("Size of detached %s finished, not publishing", self._path)
            return
        self._subscribers.notify(self)
