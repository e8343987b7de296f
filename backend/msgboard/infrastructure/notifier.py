"""Message Broadcaster — in-process fan-out of real-time events to SSE subscribers.

Invariants:
    - publish() is synchronous and never blocks: put_nowait per subscriber
    - A full subscriber queue drops that event for that subscriber only
    - publish() never raises to the caller; delivery failures are logged
    - A subscriber's queue is removed when its subscribe() context exits

Design Decisions:
    - asyncio.Queue per subscriber over a shared list: slow clients cannot
      stall the request that publishes
    - Events shaped {"type": ..., "data": ...}, same envelope as SSE lines
    - Single-process only; multi-worker deployments would need a broker
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

logger = logging.getLogger(__name__)


class MessageBroadcaster:
    """Implements MessageNotifier for in-process subscribers."""

    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Fan out one event. Fire-and-forget."""
        envelope = {"type": event, "data": payload}
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(envelope)
            except asyncio.QueueFull:
                logger.warning(
                    "Subscriber queue full, event dropped",
                    extra={"event": event},
                )
            except Exception:
                logger.error(
                    "Failed to deliver event", extra={"event": event}, exc_info=True,
                )
        logger.debug(
            "Event published",
            extra={"event": event, "subscribers": len(self._subscribers)},
        )

    @asynccontextmanager
    async def subscribe(self) -> AsyncGenerator[asyncio.Queue, None]:
        """Register a subscriber queue for the lifetime of the context."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)


# Singleton (initialized on startup)
broadcaster: MessageBroadcaster | None = None


def init_broadcaster(queue_size: int = 100) -> MessageBroadcaster:
    global broadcaster
    broadcaster = MessageBroadcaster(queue_size)
    return broadcaster


def get_broadcaster() -> MessageBroadcaster:
    """FastAPI dependency for the process-wide broadcaster."""
    if not broadcaster:
        raise RuntimeError("Broadcaster not initialized")
    return broadcaster
