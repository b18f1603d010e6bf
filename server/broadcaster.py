"""Fans published fixes out to WebSocket subscriber queues."""

import asyncio

from nmea_bridge import Fix
from server.formatters import format_fix_message

__all__ = ["FixBroadcaster"]


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


class FixBroadcaster:
    """Bounded per-client queues fed from the receive thread.

    ``publish`` is subscribed to ``FixAggregator.on_fix`` and runs on the
    receive thread. It formats the fix once and schedules the enqueue on
    *loop*, which owns every queue, with ``call_soon_threadsafe``. A full
    queue drops its oldest message.

    Args:
        loop: Event loop serving the WebSocket connections.
        queue_max_size: Messages held per client before the oldest is dropped.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, queue_max_size: int) -> None:
        self._loop = loop
        self._queue_max_size = queue_max_size
        self._queues: list[asyncio.Queue[str]] = []

    def __len__(self) -> int:
        return len(self._queues)

    def subscribe(self) -> asyncio.Queue[str]:
        """Create and register a queue for one client."""
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=self._queue_max_size)
        self._queues.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[str]) -> None:
        self._queues.remove(queue)

    def publish(self, fix: Fix) -> None:
        message = format_fix_message(fix)
        for queue in list(self._queues):
            self._loop.call_soon_threadsafe(_enqueue_message, queue, message)
