"""State event stream — in-process SSE broadcaster for planner state changes."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator, Callable
from typing import Any

from planner_sync.application.services.planner_store import PlannerStore
from planner_sync.application.services.subscription import Selector, use_store

logger = logging.getLogger(__name__)

# Events buffered per client before it is considered stalled
MAX_QUEUED_EVENTS = 100


def format_sse(event_type: str, data: Any) -> str:
    return f"event: {event_type}\ndata: {json.dumps(data)}\n\n"


class StateEventStream:
    """Streams selected slices of the planner state to SSE clients.

    Each connected client gets its own asyncio.Queue fed by a selector
    subscription, so a client only receives an event when its slice
    changes. The first event is always the current value.
    """

    def __init__(self, store: PlannerStore) -> None:
        self._store = store
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(
        self,
        event_type: str,
        selector: Selector[Any],
        serialize: Callable[[Any], Any],
    ) -> AsyncGenerator[str, None]:
        """Subscribe to state events. Yields formatted SSE strings.

        The generator unsubscribes from the store when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=MAX_QUEUED_EVENTS)

        def on_change(value: Any) -> None:
            try:
                queue.put_nowait(format_sse(event_type, serialize(value)))
            except asyncio.QueueFull:
                logger.warning("SSE client queue full — disconnecting")
                self._disconnect(queue)

        subscription = use_store(self._store, selector, on_change)
        self._queues.append(queue)
        try:
            yield format_sse(event_type, serialize(subscription.value))
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            subscription.close()
            if queue in self._queues:
                self._queues.remove(queue)

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in list(self._queues):
            self._disconnect(queue)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)

    def _disconnect(self, queue: asyncio.Queue[str | None]) -> None:
        # Drop buffered events so the sentinel always fits.
        while not queue.empty():
            queue.get_nowait()
        queue.put_nowait(None)
        if queue in self._queues:
            self._queues.remove(queue)
