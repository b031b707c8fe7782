"""Manages WebSocket subscriber queues and the latest published messages."""

import asyncio

__all__ = [
    "add_subscriber",
    "broadcast_message",
    "latest_message",
    "remove_subscriber",
    "reset",
]

_subscriber_queues: list[asyncio.Queue[str]] = []

# Last message per type ("gps", "scan") for clients that poll over HTTP.
_latest_messages: dict[str, str] = {}


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    """Add a new subscriber queue to the global broadcast list."""
    _subscriber_queues.append(queue)


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Remove a subscriber queue from the global broadcast list."""
    _subscriber_queues.remove(queue)


def latest_message(message_type: str) -> str | None:
    """Return the most recent message of ``message_type``, if any."""
    return _latest_messages.get(message_type)


def reset() -> None:
    """Forget the latest messages; subscribers are left untouched."""
    _latest_messages.clear()


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def broadcast_message(
    message_type: str, message: str, loop: asyncio.AbstractEventLoop
) -> None:
    """Record ``message`` as the latest of its type and fan it out.

    Safe to call from a worker thread: queue updates are scheduled on
    ``loop``. A full subscriber queue drops its oldest message.
    """
    _latest_messages[message_type] = message
    for queue in list(_subscriber_queues):
        loop.call_soon_threadsafe(_enqueue_message, queue, message)
