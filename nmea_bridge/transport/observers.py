"""Synchronous, ordered notification lists."""

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

__all__ = ["Observers"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observers(Generic[T]):
    """A list of callbacks notified in subscription order on the caller's thread.

    Delivery is synchronous: ``notify`` returns only after every callback
    has run, so a slow observer stalls whoever notifies (the receive loop).
    An observer that raises is logged and skipped; the remaining observers
    still receive the value.

    Example:
        >>> statuses: Observers[str] = Observers("status")
        >>> _ = statuses.subscribe(print)
        >>> statuses.notify("UDP listening on 0.0.0.0:11123 ...")
        UDP listening on 0.0.0.0:11123 ...
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._callbacks: list[Callable[[T], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[T], None]:
        """Register *callback* and return it (usable as a decorator)."""
        with self._lock:
            self._callbacks.append(callback)
        return callback

    def unsubscribe(self, callback: Callable[[T], None]) -> None:
        """Remove *callback*; unknown callbacks are ignored."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def notify(self, value: T) -> None:
        """Call every subscribed callback with *value*."""
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(value)
            except Exception:
                logger.exception("%s observer %r failed", self._name, callback)

    def __len__(self) -> int:
        return len(self._callbacks)
