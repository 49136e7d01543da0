"""
Server-sent event broadcaster.

Fans tool call events out to every connected /sse client. Each client gets
its own queue; a client that falls too far behind is dropped rather than
blocking the broadcaster.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

logger = logging.getLogger(__name__)

# Events buffered per client before it is considered gone
MAX_PENDING_EVENTS = 100


def utc_timestamp() -> str:
    """Current time as an ISO 8601 UTC string."""
    return datetime.now(UTC).isoformat()


def format_sse(event: dict[str, Any]) -> str:
    """Encode an event as a single `data:` frame."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


class EventBroadcaster:
    """Publish/subscribe hub for server-sent events."""

    def __init__(self, max_pending: int = MAX_PENDING_EVENTS) -> None:
        self.max_pending = max_pending
        self._clients: set[asyncio.Queue[dict[str, Any]]] = set()

    @property
    def client_count(self) -> int:
        """Number of connected clients."""
        return len(self._clients)

    def connect(self) -> asyncio.Queue[dict[str, Any]]:
        """Register a client and return its event queue."""
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self.max_pending)
        self._clients.add(queue)
        return queue

    def disconnect(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        """Forget a client. Unknown queues are ignored."""
        self._clients.discard(queue)

    def broadcast(self, event: dict[str, Any]) -> None:
        """Queue an event for every connected client."""
        for queue in list(self._clients):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.error("SSE client not keeping up, disconnecting")
                self.disconnect(queue)

    async def subscribe(self, greeting: dict[str, Any] | None = None) -> AsyncIterator[str]:
        """
        Yield SSE frames for one client until it disconnects.

        Args:
            greeting: Optional first event sent right after connecting
        """
        queue = self.connect()
        try:
            if greeting is not None:
                yield format_sse(greeting)
            while True:
                event = await queue.get()
                yield format_sse(event)
        finally:
            logger.info("SSE client disconnected")
            self.disconnect(queue)


@lru_cache(maxsize=1)
def get_event_broadcaster() -> EventBroadcaster:
    """Get the process-wide broadcaster shared by the HTTP endpoints."""
    return EventBroadcaster()
