"""Per-instance change notification."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubscriberList(Generic[T]):
    """Ordered registry of change callbacks.

    Callbacks run synchronously in registration order. A callback that
    raises is logged and skipped; later callbacks still run. Registering
    the same callback twice keeps a single registration.
    """

    def __init__(self) -> None:
        self._callbacks: dict[Callable[[T], object], None] = {}
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[T], object]) -> Callable[[], None]:
        """Register a callback.

        Returns:
            A function that removes this registration when called.
        """
        with self._lock:
            self._callbacks.setdefault(callback, None)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callable[[T], object]) -> bool:
        """Remove a callback. Returns whether it was registered."""
        with self._lock:
            if callback not in self._callbacks:
                return False
            del self._callbacks[callback]
            return True

    def is_subscribed(self, callback: Callable[[T], object]) -> bool:
        with self._lock:
            return callback in self._callbacks

    def clear(self) -> None:
        with self._lock:
            self._callbacks.clear()

    def notify(self, value: T) -> None:
        """Deliver ``value`` to every current subscriber."""
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(value)
            except Exception:
                logger.exception("Subscriber %r failed", callback)

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)
